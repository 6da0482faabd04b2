"""
Zeplin MCP Server - Tool definitions and handlers

Exposes Zeplin design data to coding agents:
- get_component: Design data of a component (or its section's variants)
- get_screen: Design data of a screen, optionally scoped to one layer
- download_layer_asset: Download an exported asset indexed by the last call

Environment variables:
  ZEPLIN_ACCESS_TOKEN - Zeplin Personal Access Token (required)

Logging never goes to stdout (it would corrupt the stdio JSON-RPC stream).
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated, Any, AsyncIterator, Dict, Literal, Optional

from mcp.server.fastmcp import Context, FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import Field

from ..design.assets import AssetRegistry
from ..extraction import DesignExtractor, ExtractionError
from ..integrations.downloads import AssetDownloadError, download_asset
from ..integrations.links import UrlResolutionError, resolve_url
from ..integrations.zeplin_client import ZeplinClient
from ..prompts import format_design_response

logger = logging.getLogger("zeplin_mcp.mcp_server")

# One registry per server process: filled by get_screen / get_component,
# read by download_layer_asset.
registry = AssetRegistry()


# ---------------------------------------------------------------------------
# Lifespan — shared ZeplinClient
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(server: FastMCP) -> AsyncIterator[Dict[str, Any]]:
    """Open one ZeplinClient for the server's lifetime."""
    client = ZeplinClient()
    try:
        yield {"extractor": DesignExtractor(client, registry)}
    finally:
        await client.close()


mcp = FastMCP("Zeplin MCP Server", lifespan=_lifespan)


def _get_extractor(ctx: Context) -> DesignExtractor:
    try:
        return ctx.request_context.lifespan_context["extractor"]
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ToolError(
            "Internal error: Zeplin client not available in server context."
        ) from exc


async def _resolve(url: str) -> str:
    try:
        return await resolve_url(url.strip())
    except UrlResolutionError as e:
        raise ToolError(f"Error resolving or processing URL: {e}") from e


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------


@mcp.tool()
async def get_component(
    url: Annotated[str, Field(description="Zeplin component link (app.zeplin.io or zpl.io).")],
    ctx: Context,
) -> str:
    """Get design data of a component in Zeplin."""
    extractor = _get_extractor(ctx)
    resolved = await _resolve(url)
    try:
        data = await extractor.extract_component(resolved)
    except ExtractionError as e:
        logger.warning(f"get_component: {e}")
        raise ToolError(str(e)) from e
    return format_design_response(data)


@mcp.tool()
async def get_screen(
    url: Annotated[str, Field(description="Zeplin screen link (app.zeplin.io or zpl.io).")],
    ctx: Context,
    include_variants: Annotated[bool, Field(
        description=(
            "Whether to include variants in the response. If true, the response contains "
            "all variants of the screen. This covers more cases but uses more context window."
        ),
    )] = True,
    target_layer_name: Annotated[Optional[str], Field(
        description=(
            "Name of the layer or component to extract from the screen. If the user mentions "
            "a specific component, use this to fetch only that subset of the layer data. "
            "If not provided, all layers are returned."
        ),
    )] = None,
) -> str:
    """Get design data of a screen in Zeplin."""
    extractor = _get_extractor(ctx)
    resolved = await _resolve(url)
    try:
        data = await extractor.extract_screen(resolved, include_variants, target_layer_name)
    except ExtractionError as e:
        logger.warning(f"get_screen: {e}")
        raise ToolError(str(e)) from e
    return format_design_response(data)


@mcp.tool()
async def download_layer_asset(
    layer_source_id: Annotated[str, Field(
        description="The source ID of the layer that you want the assets of.",
    )],
    local_path: Annotated[str, Field(
        description=(
            "Absolute path of the directory where the project keeps images/assets. "
            "It is created if it does not exist. Use the path format of the operating "
            "system, without escaping special characters."
        ),
    )],
    asset_type: Annotated[Literal["svg", "png", "pdf", "jpg"], Field(
        description="Asset format to download; pick the one the codebase prefers.",
    )],
) -> str:
    """Download SVG, PNG, PDF or JPG asset from Zeplin. Use if you couldn't find the assets in the codebase context."""
    asset_url = registry.lookup_url(layer_source_id, asset_type)
    if not asset_url:
        message = f"No asset found with layer source ID: {layer_source_id} and format {asset_type}"
        record = registry.lookup_by_key(layer_source_id)
        if record is not None:
            formats = ", ".join(c.format for c in record.contents)
            message += f". Available formats: {formats}"
        raise ToolError(message)

    try:
        filepath = await download_asset(asset_url, local_path)
    except AssetDownloadError as e:
        logger.warning(f"download_layer_asset: {e}")
        raise ToolError(str(e)) from e
    return f"Asset successfully downloaded to {filepath}"
