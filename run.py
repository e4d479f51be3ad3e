#!/usr/bin/env python3
"""Entry point script for PostgreSQL MCP Server."""

import sys
import subprocess
import argparse


def main():
    """Main entry point with transport selection."""
    parser = argparse.ArgumentParser(
        description="PostgreSQL MCP Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run with stdio transport (for desktop MCP clients)
  DATABASE_URL=postgresql://localhost/app python run.py stdio

  # Run with streamable HTTP transport on a custom port with health API
  python run.py http --port 3000 --health-port 8080

  # Allow write statements (use with care)
  DANGEROUSLY_ALLOW_WRITE_OPS=true python run.py stdio

  # Run with debug logging
  DEBUG=true python run.py http
        """
    )

    parser.add_argument(
        "transport",
        nargs="?",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode: stdio for CLI clients, http for streamable HTTP"
    )

    parser.add_argument(
        "--port",
        type=int,
        default=3000,
        help="Port for HTTP server (default: 3000)"
    )

    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host for HTTP server (default: 0.0.0.0)"
    )

    parser.add_argument(
        "--health-port",
        type=int,
        help="Port for health API (optional, enables health monitoring)"
    )

    args = parser.parse_args()

    cmd = [sys.executable, "-m", "postgres_mcp.cli.mcp_server", "--transport", args.transport]

    if args.transport == "http":
        cmd.extend(["--host", args.host, "--port", str(args.port)])

    if args.health_port:
        cmd.extend(["--health-port", str(args.health_port)])

    # stdout belongs to the stdio JSON-RPC stream
    print("Starting PostgreSQL MCP Server", file=sys.stderr)
    print(f"   Transport: {args.transport}", file=sys.stderr)

    if args.transport == "http":
        print(f"   Server: http://{args.host}:{args.port}/mcp", file=sys.stderr)

    if args.health_port:
        print(f"   Health API: http://{args.host}:{args.health_port}/health", file=sys.stderr)

    try:
        result = subprocess.run(cmd)
        sys.exit(result.returncode)
    except KeyboardInterrupt:
        print("\nServer stopped", file=sys.stderr)
        sys.exit(0)


if __name__ == "__main__":
    main()
