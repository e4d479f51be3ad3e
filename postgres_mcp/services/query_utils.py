"""Query utilities for safe identifier interpolation."""

from postgres_mcp.models.error_types import UnsafeIdentifierError

SAMPLE_ROW_LIMIT = 50


def quote_identifier(identifier: str) -> str:
    """Quote a SQL identifier for safe use in generated queries.

    Embedded double quotes are doubled and the result is wrapped in double
    quotes. Reserved words and case folding are left alone.

    Args:
        identifier: Raw schema or table name

    Returns:
        Double-quoted identifier

    Raises:
        UnsafeIdentifierError: If the identifier contains a null byte
    """
    if '\0' in identifier:
        raise UnsafeIdentifierError(identifier, "Identifier cannot contain null bytes")

    return '"' + identifier.replace('"', '""') + '"'


def qualified_table_name(schema: str, table: str) -> str:
    """Build a quoted ``schema.table`` reference."""
    return f"{quote_identifier(schema)}.{quote_identifier(table)}"


def build_sample_rows_query(schema: str, table: str, limit: int = SAMPLE_ROW_LIMIT) -> str:
    """Build the query that fetches sample rows from a table."""
    return f"SELECT * FROM {qualified_table_name(schema, table)} LIMIT {int(limit)}"
