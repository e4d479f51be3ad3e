"""Data models for PostgreSQL MCP Server."""

from .config import ServerConfig, load_config, validate_config
from .error_types import (
    MCPError,
    QueryValidationError,
    UnsafeIdentifierError,
    PostgresError,
    ConfigurationError,
    DatabaseConnectionError
)

__all__ = [
    'ServerConfig',
    'load_config',
    'validate_config',
    'MCPError',
    'QueryValidationError',
    'UnsafeIdentifierError',
    'PostgresError',
    'ConfigurationError',
    'DatabaseConnectionError'
]
