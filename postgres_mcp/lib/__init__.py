"""MCP tool implementations and utilities.

Tool entry points live in ``postgres_mcp.lib.mcp_tools``; only the logging
helpers are re-exported here so services can import them without pulling in
the tool layer.
"""

from .logging_config import setup_logging, get_logger, log_context

__all__ = [
    'setup_logging',
    'get_logger',
    'log_context'
]
