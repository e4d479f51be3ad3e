"""Database service for PostgreSQL connections."""

import time
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import psycopg2
from psycopg2 import errors, pool
from psycopg2.extras import RealDictCursor

from postgres_mcp.lib.logging_config import get_logger, log_context
from postgres_mcp.models.config import ServerConfig
from postgres_mcp.models.error_types import DatabaseConnectionError, PostgresError
from postgres_mcp.services.query_utils import build_sample_rows_query

# Module logger
logger = get_logger(__name__)

TABLES_QUERY = """
    SELECT table_schema, table_name
    FROM information_schema.tables
    WHERE table_type = 'BASE TABLE'
      AND table_schema NOT IN ('pg_catalog', 'information_schema')
    ORDER BY table_schema, table_name
"""

COLUMNS_QUERY = """
    SELECT
        column_name,
        data_type,
        is_nullable,
        column_default
    FROM information_schema.columns
    WHERE table_schema = %s
      AND table_name = %s
    ORDER BY ordinal_position
"""


def _error_detail(error: psycopg2.Error) -> Optional[str]:
    diag = getattr(error, 'diag', None)
    return getattr(diag, 'message_detail', None) if diag is not None else None


class DatabaseService:
    """Service for managing PostgreSQL database connections."""

    def __init__(self, config: ServerConfig):
        """Initialize database service.

        Args:
            config: Validated server configuration
        """
        self.config = config
        self.pool_size = config.max_connections
        self.pool = None
        self.is_connected = False

    def connect(self) -> bool:
        """Establish database connection pool.

        Returns:
            True if the pool was created

        Raises:
            PostgresError: If the SSL root certificate cannot be read
            DatabaseConnectionError: If the pool cannot be created
        """
        kwargs = self.config.connection_kwargs()

        if self.config.ssl_root_cert:
            try:
                with open(self.config.ssl_root_cert, 'r') as f:
                    f.read()
            except OSError as e:
                logger.error(f"Failed to read SSL root certificate: {e}")
                raise PostgresError(
                    f"Failed to read SSL root certificate at {self.config.ssl_root_cert}"
                )

        logger.info(
            "Creating PostgreSQL connection",
            extra=log_context(
                max_connections=self.pool_size,
                tls_enabled='sslmode' in kwargs
            )
        )
        try:
            self.pool = pool.ThreadedConnectionPool(
                minconn=1,
                maxconn=self.pool_size,
                **kwargs
            )
        except psycopg2.Error as e:
            logger.error(f"Failed to create connection pool: {e}")
            raise DatabaseConnectionError(f"Failed to connect to database: {e}")
        return True

    @contextmanager
    def get_connection(self):
        """Get a connection from the pool.

        Yields:
            psycopg2 connection object

        Raises:
            DatabaseConnectionError: If no connection available
        """
        if not self.pool:
            logger.error("Attempted to get connection but pool not initialized")
            raise DatabaseConnectionError("Database connection pool not initialized")

        try:
            conn = self.pool.getconn()
        except pool.PoolError as e:
            raise DatabaseConnectionError(f"Connection pool exhausted: {e}")

        try:
            yield conn
        finally:
            self.pool.putconn(conn)

    def test_connection(self) -> None:
        """Run a trivial query to prove the database is reachable.

        Raises:
            PostgresError: If the database cannot be reached
        """
        try:
            with self.get_connection() as conn:
                with conn.cursor() as cursor:
                    cursor.execute("SELECT 1 AS test")
                    cursor.fetchone()
                conn.rollback()
        except psycopg2.Error as e:
            self.is_connected = False
            raise PostgresError("Failed to connect to database", e.pgcode, str(e).strip())
        except DatabaseConnectionError as e:
            self.is_connected = False
            raise PostgresError("Failed to connect to database", detail=e.message)

        self.is_connected = True
        logger.info("Database connection established successfully")

    def execute_query(self, query: str, read_only: bool = False) -> List[Dict[str, Any]]:
        """Execute a raw SQL query exactly as given.

        Args:
            query: SQL text, possibly holding several statements
            read_only: Run inside a READ ONLY transaction

        Returns:
            Rows of the last result set, or an empty list when the final
            statement returns no rows

        Raises:
            PostgresError: If query execution fails
        """
        logger.debug(
            "Executing query",
            extra=log_context(query_length=len(query), preview=query[:100], read_only=read_only)
        )

        with self.get_connection() as conn:
            try:
                start_time = time.time()
                with conn.cursor(cursor_factory=RealDictCursor) as cursor:
                    if read_only:
                        cursor.execute("SET TRANSACTION READ ONLY")
                    cursor.execute(f"SET statement_timeout = {int(self.config.statement_timeout)}")

                    cursor.execute(query)

                    rows = cursor.fetchall() if cursor.description is not None else []
                conn.commit()
                duration_ms = (time.time() - start_time) * 1000

                logger.info(
                    "Query executed successfully",
                    extra=log_context(row_count=len(rows), duration=f"{duration_ms:.0f}ms")
                )
                return [dict(row) for row in rows]

            except errors.ReadOnlySqlTransaction as e:
                conn.rollback()
                raise PostgresError(
                    f"Write operation attempted in read-only mode: {e}".strip(),
                    e.pgcode,
                    _error_detail(e)
                )
            except errors.QueryCanceled as e:
                conn.rollback()
                logger.warning(f"Query timeout exceeded: {e}")
                raise PostgresError(
                    "Query timeout exceeded. Consider refining your query to be more specific or limit the data range.",
                    e.pgcode,
                    _error_detail(e)
                )
            except psycopg2.Error as e:
                conn.rollback()
                logger.error(f"Query execution failed: {e}")
                raise PostgresError(
                    str(e).strip() or "Query execution failed",
                    e.pgcode,
                    _error_detail(e)
                )

    def get_tables(self) -> List[Dict[str, Any]]:
        """Get list of all user tables in the database.

        Returns:
            Rows with table_schema and table_name
        """
        with self.get_connection() as conn:
            try:
                with conn.cursor(cursor_factory=RealDictCursor) as cursor:
                    cursor.execute(TABLES_QUERY)
                    tables = [dict(row) for row in cursor.fetchall()]
                conn.rollback()
            except psycopg2.Error as e:
                conn.rollback()
                logger.error(f"Failed to retrieve tables: {e}")
                raise PostgresError("Failed to retrieve table list", e.pgcode, _error_detail(e))

        logger.debug("Retrieved table list", extra=log_context(count=len(tables)))
        return tables

    def get_table_details(self, schema: str, table: str) -> Dict[str, Any]:
        """Get column schema and sample rows for a table.

        Args:
            schema: Schema name
            table: Table name

        Returns:
            Dictionary with 'schema' (schema, table, columns) and 'sample_rows'

        Raises:
            PostgresError: If the table is missing or cannot be read
            UnsafeIdentifierError: If a name contains a null byte
        """
        if not schema or not table:
            raise PostgresError("Schema and table name are required")

        sample_query = build_sample_rows_query(schema, table)

        with self.get_connection() as conn:
            try:
                with conn.cursor(cursor_factory=RealDictCursor) as cursor:
                    cursor.execute(COLUMNS_QUERY, (schema, table))
                    columns = [dict(row) for row in cursor.fetchall()]

                    if not columns:
                        raise PostgresError(
                            f"Table {schema}.{table} not found or no columns visible"
                        )

                    cursor.execute(sample_query)
                    sample_rows = [dict(row) for row in cursor.fetchall()]
                conn.rollback()
            except PostgresError:
                conn.rollback()
                raise
            except psycopg2.Error as e:
                conn.rollback()
                logger.error(f"Failed to get details for {schema}.{table}: {e}")
                raise PostgresError(
                    f"Failed to retrieve details for table {schema}.{table}",
                    e.pgcode,
                    _error_detail(e)
                )

        logger.debug(
            "Retrieved table details",
            extra=log_context(
                schema=schema,
                table=table,
                column_count=len(columns),
                sample_row_count=len(sample_rows)
            )
        )
        return {
            'schema': {'schema': schema, 'table': table, 'columns': columns},
            'sample_rows': sample_rows
        }

    def get_status(self) -> Dict[str, Any]:
        """Get connection status."""
        return {
            'connected': self.is_connected,
            'pool_size': self.pool_size
        }

    def close(self):
        """Close all database connections."""
        if self.pool:
            self.pool.closeall()
            self.pool = None
            self.is_connected = False
            logger.info("Database connection closed")
