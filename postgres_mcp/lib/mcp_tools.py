"""MCP Tools Orchestration Layer.

Single entry point for the tool implementations plus the helpers that turn
exceptions into the JSON error payload clients receive.
"""

from postgres_mcp.models.error_types import MCPError, PostgresError, QueryValidationError
from postgres_mcp.models.tool_responses import ErrorResponse

from .tools import execute_query, get_tables, get_table_details


def error_response(error: Exception) -> ErrorResponse:
    """Build the error payload for an exception raised by a tool."""
    if not isinstance(error, MCPError):
        return ErrorResponse(error=f"Unexpected error: {str(error)}", recoverable=False)

    response = ErrorResponse(error=error.message, recoverable=error.recoverable)
    if isinstance(error, PostgresError):
        response.code = error.code
        response.detail = error.detail
    elif isinstance(error, QueryValidationError):
        response.statement_position = error.position
    return response


__all__ = [
    'execute_query',
    'get_tables',
    'get_table_details',
    'error_response'
]
