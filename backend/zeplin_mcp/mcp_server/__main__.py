"""
Zeplin MCP Server entrypoint.

Usage:
    python -m zeplin_mcp.mcp_server
"""

from .main import main

if __name__ == "__main__":
    raise SystemExit(main())
