"""Command-line entrypoint: parse transport options and run the server."""

from __future__ import annotations

import argparse
from typing import List, Optional

from .. import config
from ..logging_config import get_server_logger

TRANSPORTS = ("stdio", "sse", "streamable-http")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zeplin-mcp-server",
        description="Serve Zeplin screens, components and assets to coding agents over MCP.",
    )
    parser.add_argument(
        "--transport",
        choices=TRANSPORTS,
        default=config.MCP_TRANSPORT,
        help="MCP transport (default: %(default)s)",
    )
    parser.add_argument("--host", default=config.MCP_HOST, help="Bind host for HTTP transports")
    parser.add_argument("--port", type=int, default=config.MCP_PORT, help="Bind port for HTTP transports")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = get_server_logger()

    from .server import mcp

    if args.transport != "stdio":
        mcp.settings.host = args.host
        mcp.settings.port = args.port

    logger.info(f"Starting Zeplin MCP server: transport={args.transport}")
    try:
        mcp.run(transport=args.transport)
    except Exception as e:
        logger.error(f"Failed to start MCP server: {e}")
        return 1
    return 0
