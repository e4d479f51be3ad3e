"""Streamable HTTP transport for MCP server."""

from fastmcp import FastMCP

from postgres_mcp.lib.logging_config import get_logger

logger = get_logger(__name__)


class HttpTransport:
    """MCP server transport using streamable HTTP on a single endpoint."""

    def __init__(self, mcp_instance: FastMCP, host: str = "0.0.0.0", port: int = 3000,
                 path: str = "/mcp"):
        """Initialize HTTP transport.

        Args:
            mcp_instance: FastMCP server instance with registered tools
            host: Host to bind the server to
            port: Port to bind the server to
            path: Endpoint path for MCP requests
        """
        self.mcp = mcp_instance
        self.host = host
        self.port = port
        self.path = path

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}{self.path}"

    def run(self):
        """Run the HTTP transport server until interrupted."""
        logger.info(f"PostgreSQL MCP HTTP Server listening on {self.url}")

        try:
            self.mcp.run(
                transport="streamable-http",
                host=self.host,
                port=self.port,
                path=self.path
            )
        except KeyboardInterrupt:
            logger.info("HTTP server shutdown requested")
