"""Query execution MCP tool for PostgreSQL operations.

The query tool validates the SQL text with the safety gate and, when it
passes, hands the unmodified text to the database service.
"""

import time

from postgres_mcp.lib.logging_config import get_logger
from postgres_mcp.lib.sql.query_validator import QueryValidator
from postgres_mcp.models.error_types import MCPError
from postgres_mcp.models.tool_responses import QueryResponse
from postgres_mcp.services.database_service import DatabaseService

logger = get_logger(__name__)


def execute_query(db_service: DatabaseService,
                  validator: QueryValidator,
                  sql: str) -> QueryResponse:
    """Validate and execute a SQL query.

    Args:
        db_service: Database service instance
        validator: Safety gate configured with the write policy
        sql: SQL text supplied by the client

    Returns:
        QueryResponse with the rows of the last result set

    Raises:
        QueryValidationError: If the safety gate rejects the query
        PostgresError: If the database rejects the query
    """
    validator.validate(sql)

    try:
        start_time = time.time()
        rows = db_service.execute_query(sql, read_only=not validator.allow_write_ops)
        execution_time = (time.time() - start_time) * 1000
    except MCPError:
        raise
    except Exception as e:
        logger.error(f"Unexpected error executing query: {e}")
        raise MCPError(f"Query execution failed: {str(e)}", recoverable=True)

    return QueryResponse(
        rows=rows,
        row_count=len(rows),
        execution_time_ms=round(execution_time, 2)
    )
