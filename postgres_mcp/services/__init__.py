"""Business logic services for PostgreSQL MCP Server."""

from .database_service import DatabaseService
from .query_utils import quote_identifier, qualified_table_name, build_sample_rows_query
from .health_api import HealthAPI

__all__ = [
    'DatabaseService',
    'quote_identifier',
    'qualified_table_name',
    'build_sample_rows_query',
    'HealthAPI'
]
