"""Asset file downloads."""

from __future__ import annotations

import logging
import os
import posixpath
from urllib.parse import urlparse

import httpx

from .. import settings

logger = logging.getLogger("zeplin_mcp.integrations.downloads")


class AssetDownloadError(Exception):
    """Raised when an asset cannot be fetched or written."""


def asset_filename(url: str) -> str:
    """File name for an asset URL: last path segment, ``.png`` if it has no extension."""
    path = urlparse(url).path.rstrip("/")
    stem, ext = posixpath.splitext(posixpath.basename(path))
    return f"{stem}{ext or settings.DEFAULT_ASSET_EXTENSION}"


async def download_asset(
    url: str,
    local_dir: str,
    timeout: float = settings.ASSET_DOWNLOAD_TIMEOUT,
) -> str:
    """Download ``url`` into ``local_dir`` (created if missing).

    Returns:
        Path of the written file
    """
    filepath = os.path.join(local_dir, asset_filename(url))

    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            resp = await client.get(url)
    except httpx.HTTPError as e:
        raise AssetDownloadError(f"Failed to download asset: {e}") from e

    if resp.status_code != 200:
        raise AssetDownloadError(
            f"Failed to download asset: Server responded with {resp.status_code}"
        )

    try:
        os.makedirs(local_dir, exist_ok=True)
        with open(filepath, "wb") as f:
            f.write(resp.content)
    except OSError as e:
        raise AssetDownloadError(f"Failed to download asset: {e}") from e

    logger.info(f"download_asset: {url} → {filepath} ({len(resp.content)} bytes)")
    return filepath
