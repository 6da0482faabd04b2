"""Tests for the MCP tool handlers and the command-line entrypoint.

Tool functions are called directly with a fake request context; FastMCP's
decorator returns them unchanged.
"""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from zeplin_mcp.extraction import DesignExtractor, ExtractionError
from zeplin_mcp.integrations.downloads import AssetDownloadError
from zeplin_mcp.integrations.links import UrlResolutionError
from zeplin_mcp.mcp_server import server
from zeplin_mcp.mcp_server.main import build_parser, main
from zeplin_mcp.prompts import CODEGEN_INSTRUCTIONS, format_design_response

SCREEN_URL = "https://app.zeplin.io/project/p1/screen/s1"


@pytest.fixture(autouse=True)
def clean_registry():
    server.registry.reset()
    yield
    server.registry.reset()


@pytest.fixture
def extractor(zeplin_client):
    return DesignExtractor(zeplin_client, server.registry)


@pytest.fixture
def ctx(extractor):
    context = MagicMock()
    context.request_context.lifespan_context = {"extractor": extractor}
    return context


def _json_body(response: str):
    _, _, body = response.partition("data in JSON format:\n")
    return json.loads(body)


# ---------------------------------------------------------------------------
# get_screen / get_component
# ---------------------------------------------------------------------------


class TestGetScreen:

    @pytest.mark.asyncio
    async def test_returns_instructions_and_json(self, ctx):
        response = await server.get_screen(SCREEN_URL, ctx)

        assert response.startswith(CODEGEN_INSTRUCTIONS)
        assert "Screen data in JSON format:" in response
        data = _json_body(response)
        assert data["type"] == "Screen"
        assert data["variants"][0]["name"] == "Login"

    @pytest.mark.asyncio
    async def test_passes_options_through(self, ctx):
        response = await server.get_screen(SCREEN_URL, ctx, include_variants=False, target_layer_name="Logo")
        layers = _json_body(response)["variants"][0]["layers"]
        assert layers[0]["name"] == "Header"
        assert [layer["name"] for layer in layers[0]["layers"]] == ["Logo"]

    @pytest.mark.asyncio
    async def test_fills_registry_for_download(self, ctx):
        await server.get_screen(SCREEN_URL, ctx)
        assert "src-logo" in server.registry

    @pytest.mark.asyncio
    async def test_resolves_shortlinks(self, ctx, zeplin_client):
        with patch.object(server, "resolve_url", AsyncMock(return_value=SCREEN_URL)) as resolve:
            await server.get_screen("  https://zpl.io/abc  ", ctx)

        resolve.assert_awaited_once_with("https://zpl.io/abc")
        zeplin_client.get_screen.assert_awaited_once_with("p1", "s1")

    @pytest.mark.asyncio
    async def test_resolution_failure(self, ctx):
        failing = AsyncMock(side_effect=UrlResolutionError("Failed to resolve URL: 404 Not Found"))
        with patch.object(server, "resolve_url", failing):
            with pytest.raises(ToolError, match="Error resolving or processing URL"):
                await server.get_screen("https://zpl.io/missing", ctx)

    @pytest.mark.asyncio
    async def test_invalid_link(self, ctx):
        with pytest.raises(ToolError, match="Screen link is not valid"):
            await server.get_screen("https://app.zeplin.io/project/p1", ctx)

    @pytest.mark.asyncio
    async def test_extraction_failure(self, ctx, extractor):
        extractor.extract_screen = AsyncMock(side_effect=ExtractionError("Failed to fetch screen data: boom"))
        with pytest.raises(ToolError, match="Failed to fetch screen data: boom"):
            await server.get_screen(SCREEN_URL, ctx)

    @pytest.mark.asyncio
    async def test_missing_context(self):
        context = MagicMock()
        context.request_context.lifespan_context = {}
        with pytest.raises(ToolError, match="not available in server context"):
            await server.get_screen(SCREEN_URL, context)


class TestGetComponent:

    @pytest.mark.asyncio
    async def test_returns_component_json(self, ctx, zeplin_client):
        zeplin_client.get_project_component.return_value = {"id": "c1", "name": "Card"}

        response = await server.get_component(
            "https://app.zeplin.io/project/p1/styleguide/component/c1", ctx,
        )

        data = _json_body(response)
        assert data["type"] == "Component"
        assert data["component"] == {"name": "Card"}

    @pytest.mark.asyncio
    async def test_invalid_link(self, ctx):
        with pytest.raises(ToolError, match="Component link is not valid"):
            await server.get_component(SCREEN_URL, ctx)


# ---------------------------------------------------------------------------
# download_layer_asset
# ---------------------------------------------------------------------------


class TestDownloadLayerAsset:

    @pytest.mark.asyncio
    async def test_downloads_registered_asset(self, ctx, tmp_path):
        await server.get_screen(SCREEN_URL, ctx)

        with patch.object(server, "download_asset", AsyncMock(return_value=str(tmp_path / "logo.svg"))) as download:
            message = await server.download_layer_asset("src-logo", str(tmp_path), "svg")

        download.assert_awaited_once_with("https://cdn.zeplin.io/assets/logo.svg", str(tmp_path))
        assert message == f"Asset successfully downloaded to {tmp_path / 'logo.svg'}"

    @pytest.mark.asyncio
    async def test_unknown_layer(self, tmp_path):
        with pytest.raises(ToolError, match="No asset found with layer source ID: nope and format png$"):
            await server.download_layer_asset("nope", str(tmp_path), "png")

    @pytest.mark.asyncio
    async def test_missing_format_lists_available(self, tmp_path):
        server.registry.register({"key": "k", "contents": [{"format": "svg", "url": "u"}]})
        with pytest.raises(ToolError, match="Available formats: svg"):
            await server.download_layer_asset("k", str(tmp_path), "pdf")

    @pytest.mark.asyncio
    async def test_download_failure(self, tmp_path):
        server.registry.register({"key": "k", "contents": [{"format": "png", "url": "u"}]})
        failing = AsyncMock(side_effect=AssetDownloadError("Failed to download asset: Server responded with 500"))
        with patch.object(server, "download_asset", failing):
            with pytest.raises(ToolError, match="Server responded with 500"):
                await server.download_layer_asset("k", str(tmp_path), "png")


# ---------------------------------------------------------------------------
# Response formatting
# ---------------------------------------------------------------------------


class TestFormatDesignResponse:

    def test_json_keeps_unicode(self):
        response = format_design_response({"type": "Screen", "name": "Giriş"}, instructions="Do it.")
        assert response == 'Do it.\n\nScreen data in JSON format:\n{\n  "type": "Screen",\n  "name": "Giriş"\n}'

    def test_string_payload_appended(self):
        assert format_design_response("raw", instructions="Do it.") == "Do it.\n\nraw"


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


class TestMain:

    def test_parser_defaults(self):
        args = build_parser().parse_args([])
        assert args.transport == "stdio"
        assert args.port == 8000

    def test_parser_rejects_unknown_transport(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--transport", "carrier-pigeon"])

    def test_runs_stdio(self):
        with patch("zeplin_mcp.mcp_server.main.get_server_logger"), \
                patch.object(server.mcp, "run") as run:
            assert main([]) == 0
        run.assert_called_once_with(transport="stdio")

    def test_http_transport_sets_bind_address(self):
        with patch("zeplin_mcp.mcp_server.main.get_server_logger"), \
                patch.object(server.mcp, "run") as run:
            assert main(["--transport", "streamable-http", "--host", "0.0.0.0", "--port", "9100"]) == 0
        run.assert_called_once_with(transport="streamable-http")
        assert server.mcp.settings.host == "0.0.0.0"
        assert server.mcp.settings.port == 9100

    def test_startup_failure_returns_1(self):
        with patch("zeplin_mcp.mcp_server.main.get_server_logger"), \
                patch.object(server.mcp, "run", side_effect=RuntimeError("no token")):
            assert main([]) == 1
