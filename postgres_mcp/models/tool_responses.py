"""Pydantic models for MCP tool and resource responses.

Every payload returned to the protocol client is one of these models,
serialised as indented JSON text.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TableInfo(BaseModel):
    """A user table visible to the connected role."""

    table_schema: str = Field(..., description="Schema containing the table")
    table_name: str = Field(..., description="Name of the table")


class TablesResponse(BaseModel):
    """Response model for the tables resource."""

    count: int = Field(..., ge=0, description="Number of tables")
    tables: List[TableInfo] = Field(..., description="Tables ordered by schema and name")


class ColumnInfo(BaseModel):
    """Column metadata from information_schema.columns."""

    column_name: str
    data_type: str
    is_nullable: str
    column_default: Optional[str] = None


class TableSchema(BaseModel):
    """Column layout of a single table."""

    schema_name: str = Field(..., alias="schema", description="Schema name")
    table: str = Field(..., description="Table name")
    columns: List[ColumnInfo] = Field(..., description="Columns in ordinal order")

    model_config = ConfigDict(populate_by_name=True)


class TableDetailsResponse(BaseModel):
    """Response model for the table detail resource."""

    table_schema: TableSchema = Field(..., alias="schema")
    sample_rows: List[Dict[str, Any]] = Field(..., description="Up to 50 rows from the table")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "schema": {
                    "schema": "public",
                    "table": "users",
                    "columns": [
                        {
                            "column_name": "id",
                            "data_type": "integer",
                            "is_nullable": "NO",
                            "column_default": "nextval('users_id_seq'::regclass)"
                        }
                    ]
                },
                "sample_rows": [{"id": 1}]
            }
        }
    )


class QueryResponse(BaseModel):
    """Response model for the query tool."""

    rows: List[Dict[str, Any]] = Field(..., description="Rows of the last result set")
    row_count: int = Field(..., ge=0, description="Number of rows returned")
    execution_time_ms: float = Field(..., ge=0, description="Wall-clock execution time")


class ErrorResponse(BaseModel):
    """Error payload returned instead of raising to the protocol client."""

    error: str = Field(..., description="Human-readable error message")
    recoverable: bool = Field(..., description="Whether retrying with a changed request may succeed")
    code: Optional[str] = Field(None, description="PostgreSQL SQLSTATE, when available")
    detail: Optional[str] = Field(None, description="Server-side error detail, when available")
    statement_position: Optional[int] = Field(
        None, ge=1, description="1-based position of the rejected statement"
    )


def to_json(model: BaseModel) -> str:
    """Serialise a response model the way clients receive it."""
    return model.model_dump_json(indent=2, by_alias=True, fallback=str)
