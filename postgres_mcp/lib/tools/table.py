"""Table-level resources for PostgreSQL operations."""

from postgres_mcp.lib.logging_config import get_logger
from postgres_mcp.models.error_types import MCPError
from postgres_mcp.models.tool_responses import (
    TableDetailsResponse,
    TableInfo,
    TablesResponse,
)
from postgres_mcp.services.database_service import DatabaseService

logger = get_logger(__name__)


def get_tables(db_service: DatabaseService) -> TablesResponse:
    """List user tables in the connected database."""
    tables = [TableInfo(**row) for row in db_service.get_tables()]
    return TablesResponse(count=len(tables), tables=tables)


def get_table_details(db_service: DatabaseService, schema: str, table: str) -> TableDetailsResponse:
    """Get column layout and sample rows for one table.

    Args:
        db_service: Database service instance
        schema: Schema name from the resource URI
        table: Table name from the resource URI

    Returns:
        TableDetailsResponse with columns and up to 50 sample rows

    Raises:
        MCPError: If either parameter is missing
        UnsafeIdentifierError: If a name contains a null byte
        PostgresError: If the table is missing or unreadable
    """
    if not schema or not table:
        raise MCPError("Schema and table parameters are required", recoverable=True)

    details = db_service.get_table_details(schema, table)
    logger.debug(f"Built table details for {schema}.{table}")
    return TableDetailsResponse.model_validate(details)
