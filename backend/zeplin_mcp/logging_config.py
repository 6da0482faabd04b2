"""Unified logging configuration for the MCP server."""
from __future__ import annotations

import logging
import os
from pathlib import Path

# Log directory — configurable via LOG_DIR env var
LOG_DIR = Path(os.getenv("LOG_DIR", str(Path(__file__).parent.parent / "logs")))

# Prevent duplicate handlers
_configured_loggers: set[str] = set()


def setup_logger(name: str, filename: str) -> logging.Logger:
    """Setup a logger with file and stderr handlers.

    stdout is reserved for the stdio transport, so the stream handler
    always writes to stderr.

    Args:
        name: Logger name (e.g., 'zeplin_mcp')
        filename: Log file name (e.g., 'server.log')

    Returns:
        Configured logger instance
    """
    if name in _configured_loggers:
        return logging.getLogger(name)

    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)
    logger.propagate = False  # Prevent duplicate logs

    LOG_DIR.mkdir(parents=True, exist_ok=True)

    # File handler
    fh = logging.FileHandler(LOG_DIR / filename, encoding="utf-8")
    fh.setLevel(logging.INFO)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"
    ))

    # Stderr handler
    sh = logging.StreamHandler()
    sh.setLevel(logging.INFO)
    sh.setFormatter(logging.Formatter(
        "%(asctime)s [%(name)s] %(message)s"
    ))

    logger.addHandler(fh)
    logger.addHandler(sh)

    _configured_loggers.add(name)
    return logger


def get_server_logger() -> logging.Logger:
    """Root logger for the package; child loggers inherit its handlers."""
    return setup_logger("zeplin_mcp", "server.log")
