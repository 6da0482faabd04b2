"""Runtime settings — tunable parameters for HTTP calls and asset handling.

All values read from environment variables with defaults. Import from here
instead of hardcoding.

Infrastructure config (API hosts, link prefixes, transport) stays in
zeplin_mcp/config.py.
"""

from __future__ import annotations

import os


def _int(key: str, default: int) -> int:
    return int(os.getenv(key, str(default)))


def _float(key: str, default: float) -> float:
    return float(os.getenv(key, str(default)))


def _str(key: str, default: str) -> str:
    return os.getenv(key, default)


# =====================================================================
# Zeplin API client
# =====================================================================

ZEPLIN_HTTP_TIMEOUT = _float("ZEPLIN_HTTP_TIMEOUT", 60.0)
ZEPLIN_HTTP_MAX_CONNECTIONS = _int("ZEPLIN_HTTP_MAX_CONNECTIONS", 10)
ZEPLIN_HTTP_MAX_KEEPALIVE = _int("ZEPLIN_HTTP_MAX_KEEPALIVE", 5)

# Shortlink (zpl.io) resolution timeout (seconds)
SHORTLINK_TIMEOUT = _float("SHORTLINK_TIMEOUT", 15.0)


# =====================================================================
# Asset downloads
# =====================================================================

ASSET_DOWNLOAD_TIMEOUT = _float("ASSET_DOWNLOAD_TIMEOUT", 60.0)

# Extension used when the asset URL path carries none
DEFAULT_ASSET_EXTENSION = _str("DEFAULT_ASSET_EXTENSION", ".png")
