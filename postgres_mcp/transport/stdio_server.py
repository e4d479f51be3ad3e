"""Standard I/O transport for MCP server."""

from fastmcp import FastMCP

from postgres_mcp.lib.logging_config import get_logger

logger = get_logger(__name__)


class StdioTransport:
    """MCP server transport using standard input/output."""

    def __init__(self, mcp_instance: FastMCP):
        """Initialize stdio transport.

        Args:
            mcp_instance: FastMCP server instance with registered tools
        """
        self.mcp = mcp_instance

    def run(self):
        """Run the stdio transport server.

        Reads JSON-RPC requests from stdin and writes responses to stdout,
        so nothing else may print to stdout while it runs.
        """
        logger.info("Starting MCP server in stdio mode")

        try:
            self.mcp.run(transport="stdio")
        except KeyboardInterrupt:
            logger.info("Stdio server shutdown requested")
