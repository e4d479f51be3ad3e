"""MCP server entry point for PostgreSQL operations."""

import argparse
import os
import signal
import sys
import threading
from typing import Optional

from fastmcp import FastMCP

from postgres_mcp.lib.logging_config import get_logger, setup_logging
from postgres_mcp.lib.mcp_tools import error_response, execute_query, get_table_details, get_tables
from postgres_mcp.lib.sql.query_validator import QueryValidator
from postgres_mcp.models.config import ServerConfig, load_config
from postgres_mcp.models.error_types import ConfigurationError, MCPError
from postgres_mcp.models.tool_responses import to_json
from postgres_mcp.services.database_service import DatabaseService
from postgres_mcp.services.health_api import HealthAPI
from postgres_mcp.transport.http_server import HttpTransport
from postgres_mcp.transport.stdio_server import StdioTransport

logger = get_logger(__name__)

# Initialize MCP server
mcp = FastMCP("PostgreSQL MCP Server")

# Global service instances, created by initialize()
server_config: Optional[ServerConfig] = None
db_service: Optional[DatabaseService] = None
query_validator: Optional[QueryValidator] = None


def initialize(config: Optional[ServerConfig] = None) -> None:
    """Load configuration and open the database pool.

    Args:
        config: Configuration to use instead of the environment

    Raises:
        ConfigurationError: If the environment configuration is invalid
        MCPError: If the database cannot be reached
    """
    global server_config, db_service, query_validator

    server_config = config or load_config()
    query_validator = QueryValidator(server_config.allow_write_ops, get_logger("postgres_mcp.validator"))
    service = DatabaseService(server_config)
    service.connect()
    service.test_connection()
    db_service = service

    if server_config.allow_write_ops:
        logger.warning("Write operations are ENABLED (DANGEROUSLY_ALLOW_WRITE_OPS)")
    logger.info("Database connection established")


def _ensure_initialized() -> None:
    if not db_service or not query_validator:
        initialize(server_config)


def handle_query(sql: str) -> str:
    """Run the query tool and return its JSON payload."""
    try:
        _ensure_initialized()
        result = execute_query(db_service, query_validator, sql)
        logger.info(f"Query returned {result.row_count} rows in {result.execution_time_ms}ms")
        return to_json(result)
    except MCPError as e:
        logger.error(f"Query tool error: {e.message}")
        return to_json(error_response(e))
    except Exception as e:
        logger.exception(f"Unexpected error in query tool: {e}")
        return to_json(error_response(e))


def handle_tables() -> str:
    """Build the tables resource payload."""
    try:
        _ensure_initialized()
        return to_json(get_tables(db_service))
    except MCPError as e:
        logger.error(f"Tables resource error: {e.message}")
        return to_json(error_response(e))
    except Exception as e:
        logger.exception(f"Unexpected error in tables resource: {e}")
        return to_json(error_response(e))


def handle_table_details(schema: str, table: str) -> str:
    """Build the table detail resource payload."""
    try:
        _ensure_initialized()
        return to_json(get_table_details(db_service, schema, table))
    except MCPError as e:
        logger.error(f"Table detail resource error for {schema}.{table}: {e.message}")
        return to_json(error_response(e))
    except Exception as e:
        logger.exception(f"Unexpected error in table detail resource: {e}")
        return to_json(error_response(e))


@mcp.tool(name="query")
async def query(sql: str) -> str:
    """Execute a SQL query against the configured PostgreSQL database.

    Read-only by default; enable writes via the DANGEROUSLY_ALLOW_WRITE_OPS
    environment variable.

    Args:
        sql: SQL text to execute; several statements may be separated by ';'

    Returns:
        JSON text with:
        - rows: Rows of the last result set
        - row_count: Number of rows returned
        - execution_time_ms: Query execution time
        or an error object with 'error' and 'recoverable'.
    """
    return handle_query(sql)


@mcp.resource(
    "postgres://tables",
    name="tables",
    description="List all tables available in the connected PostgreSQL database.",
    mime_type="application/json"
)
async def tables_resource() -> str:
    return handle_tables()


@mcp.resource(
    "postgres://table/{schema}/{table}",
    name="table",
    description="Get schema information and sample rows for a specific table.",
    mime_type="application/json"
)
async def table_resource(schema: str, table: str) -> str:
    return handle_table_details(schema, table)


def run_health_api(health_api: HealthAPI):
    """Run health API in a separate thread.

    Args:
        health_api: Health API instance to run
    """
    try:
        health_api.run()
    except Exception as e:
        logger.error(f"Health API error: {e}")


def cleanup_resources():
    """Clean up all resources on shutdown."""
    global db_service

    logger.info("Cleaning up resources...")

    if db_service:
        try:
            db_service.close()
        except Exception as e:
            logger.error(f"Error closing database connections: {e}")
        db_service = None

    logger.info("Shutdown complete")


def shutdown_handler(signum, frame):
    """Handle shutdown signals gracefully.

    Args:
        signum: Signal number
        frame: Current stack frame
    """
    logger.info(f"Received {signal.Signals(signum).name}, shutting down gracefully...")
    cleanup_resources()
    sys.exit(0)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="PostgreSQL MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode: stdio (default) or http"
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host for HTTP server (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv('PORT', '3000')),
        help="Port for HTTP server (default: $PORT or 3000)"
    )
    parser.add_argument(
        "--health-port",
        type=int,
        default=None,
        help="Port for health API (disabled when omitted)"
    )
    return parser


def main(argv=None):
    """Main entry point for the MCP server."""
    args = build_parser().parse_args(argv)

    try:
        config = load_config()
    except ConfigurationError as e:
        setup_logging(level="ERROR")
        print(f"Configuration Error: {e.message}", file=sys.stderr)
        sys.exit(1)

    setup_logging(
        level="DEBUG" if config.debug else os.getenv('LOG_LEVEL', 'INFO'),
        json_format=os.getenv('LOG_JSON', 'false').lower() == 'true',
        log_file=os.getenv('LOG_FILE')
    )

    signal.signal(signal.SIGINT, shutdown_handler)
    signal.signal(signal.SIGTERM, shutdown_handler)

    try:
        initialize(config)

        if args.health_port:
            health_api = HealthAPI(
                db_service=db_service,
                host=args.host,
                port=args.health_port,
                allow_write_ops=config.allow_write_ops
            )
            threading.Thread(target=run_health_api, args=(health_api,), daemon=True).start()

        if args.transport == "stdio":
            logger.info("Starting PostgreSQL MCP Server in stdio mode...")
            StdioTransport(mcp).run()
        else:
            HttpTransport(mcp, host=args.host, port=args.port).run()

    except KeyboardInterrupt:
        logger.info("Server shutdown requested via keyboard interrupt")
    except Exception as e:
        logger.error(f"Failed to start server: {e}")
        sys.exit(1)
    finally:
        cleanup_resources()


if __name__ == "__main__":
    main()
