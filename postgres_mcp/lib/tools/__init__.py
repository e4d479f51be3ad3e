"""MCP Tools Package - tool and resource implementations for PostgreSQL.

Structure:
- query.py: the SQL query tool behind the safety gate
- table.py: table listing and table detail resources
"""

from .query import execute_query
from .table import get_tables, get_table_details

__all__ = [
    'execute_query',
    'get_tables',
    'get_table_details'
]
