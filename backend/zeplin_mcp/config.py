"""Server configuration constants: hosts and transport, read once from the environment."""

import os

# Zeplin REST API. The access token itself is read by ZeplinClient from
# ZEPLIN_ACCESS_TOKEN at construction time
ZEPLIN_API_BASE = os.getenv("ZEPLIN_API_BASE", "https://api.zeplin.dev")

# Web app and shortlink hosts used to recognise pasted links
ZEPLIN_APP_BASE = os.getenv("ZEPLIN_APP_BASE", "https://app.zeplin.io")
ZEPLIN_SHORTLINK_PREFIX = os.getenv("ZEPLIN_SHORTLINK_PREFIX", "https://zpl.io/")

# MCP transport: "stdio" (default), "sse" or "streamable-http"
MCP_TRANSPORT = os.getenv("MCP_TRANSPORT", "stdio")
MCP_HOST = os.getenv("MCP_HOST", "127.0.0.1")
MCP_PORT = int(os.getenv("MCP_PORT", "8000"))
