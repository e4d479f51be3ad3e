"""Transport implementations for MCP server."""

from .stdio_server import StdioTransport
from .http_server import HttpTransport

__all__ = [
    'StdioTransport',
    'HttpTransport'
]
