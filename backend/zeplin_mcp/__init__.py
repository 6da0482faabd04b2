"""Zeplin MCP server package.

Subpackages:
- design: Design-tree normalization, layer pruning, and the asset registry
- integrations: Zeplin REST client, link parsing, asset downloads
- mcp_server: FastMCP tool registration and CLI entrypoint
"""

__version__ = "0.1.0"
