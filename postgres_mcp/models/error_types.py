"""Error types for PostgreSQL MCP Server."""

from typing import Optional


class MCPError(Exception):
    """Base error class for MCP operations."""

    def __init__(self, message: str, recoverable: bool = True):
        super().__init__(message)
        self.message = message
        self.recoverable = recoverable


class QueryValidationError(MCPError):
    """Error raised when a query is rejected by the safety layer."""

    def __init__(self, reason: str, statement: Optional[str] = None, position: Optional[int] = None):
        super().__init__(reason, recoverable=True)
        self.reason = reason
        self.statement = statement
        self.position = position


class UnsafeIdentifierError(MCPError):
    """Error raised when a schema or table identifier cannot be quoted safely."""

    def __init__(self, identifier: str, reason: str):
        super().__init__(reason, recoverable=True)
        self.identifier = identifier
        self.reason = reason


class PostgresError(MCPError):
    """Error raised when PostgreSQL rejects or fails a statement."""

    def __init__(self, message: str, code: Optional[str] = None, detail: Optional[str] = None):
        super().__init__(message, recoverable=True)
        self.code = code
        self.detail = detail


class ConfigurationError(MCPError):
    """Error raised when the environment configuration is invalid."""

    def __init__(self, message: str):
        super().__init__(message, recoverable=False)


class DatabaseConnectionError(MCPError):
    """Error raised when database connection fails."""

    def __init__(self, message: str):
        super().__init__(message, recoverable=True)
