"""PostgreSQL MCP Server with a read-only SQL safety gate."""

__version__ = "0.1.0"
