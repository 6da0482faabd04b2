"""Zeplin REST API client.

Fetches screens, screen versions, annotations, components, and design
tokens using Personal Access Token authentication. Responses are returned
as raw JSON dicts; normalization happens in zeplin_mcp.design.

Environment:
    ZEPLIN_ACCESS_TOKEN — Zeplin Personal Access Token (required)

Usage:
    async with ZeplinClient() as client:
        screen = await client.get_screen("5f1e...", "5f2a...")
        version = await client.get_latest_screen_version("5f1e...", "5f2a...")
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import httpx

from .. import config, settings

logger = logging.getLogger("zeplin_mcp.integrations.zeplin")


class ZeplinClientError(Exception):
    """Raised when a Zeplin API call fails."""


class ZeplinClient:
    """Async Zeplin REST API client.

    Args:
        token: Zeplin PAT. Falls back to ZEPLIN_ACCESS_TOKEN env var.
        timeout: HTTP request timeout in seconds.
        base_url: API host, defaults to config.ZEPLIN_API_BASE.
    """

    def __init__(
        self,
        token: Optional[str] = None,
        timeout: float = settings.ZEPLIN_HTTP_TIMEOUT,
        base_url: Optional[str] = None,
    ):
        self._token = token or os.getenv("ZEPLIN_ACCESS_TOKEN", "")
        if not self._token:
            raise ZeplinClientError(
                "Zeplin token not configured. Set ZEPLIN_ACCESS_TOKEN environment "
                "variable or pass token= to ZeplinClient()."
            )
        self._base_url = base_url or config.ZEPLIN_API_BASE
        self._timeout = timeout
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "ZeplinClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={
                    "Authorization": f"Bearer {self._token}",
                    "Accept": "application/json",
                },
                timeout=self._timeout,
                limits=httpx.Limits(
                    max_connections=settings.ZEPLIN_HTTP_MAX_CONNECTIONS,
                    max_keepalive_connections=settings.ZEPLIN_HTTP_MAX_KEEPALIVE,
                ),
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _get(self, path: str, params: Optional[Dict] = None) -> Any:
        """Make a GET request to the Zeplin API."""
        client = await self._get_client()
        try:
            resp = await client.get(path, params=params)
        except httpx.TimeoutException as e:
            raise ZeplinClientError(f"Zeplin API timeout: {path}") from e
        except httpx.ConnectError as e:
            raise ZeplinClientError(f"Zeplin API connection error: {path}") from e
        except httpx.HTTPError as e:
            raise ZeplinClientError(f"Zeplin API request failed: {path}: {e}") from e

        if resp.status_code in (401, 403):
            raise ZeplinClientError(
                f"Zeplin API returned {resp.status_code}. Check that ZEPLIN_ACCESS_TOKEN "
                "is valid and has access to this resource."
            )
        if resp.status_code == 404:
            raise ZeplinClientError(f"Zeplin resource not found: {path}")
        if resp.status_code == 429:
            raise ZeplinClientError("Zeplin API rate limit exceeded. Retry later.")
        if resp.status_code != 200:
            raise ZeplinClientError(
                f"Zeplin API error {resp.status_code}: {resp.text[:200]}"
            )

        try:
            return resp.json()
        except ValueError as e:
            raise ZeplinClientError(f"Zeplin API returned invalid JSON: {path}") from e

    # ------------------------------------------------------------------
    # Screens
    # ------------------------------------------------------------------

    async def get_screen(self, project_id: str, screen_id: str) -> Dict[str, Any]:
        """GET /v1/projects/:project_id/screens/:screen_id"""
        data = await self._get(f"/v1/projects/{project_id}/screens/{screen_id}")
        logger.info(f"get_screen: project={project_id}, screen={screen_id}")
        return data

    async def get_screen_variant(self, project_id: str, variant_id: str) -> Dict[str, Any]:
        """GET /v1/projects/:project_id/screen_variants/:variant_id"""
        data = await self._get(f"/v1/projects/{project_id}/screen_variants/{variant_id}")
        logger.info(
            f"get_screen_variant: project={project_id}, group={variant_id}, "
            f"variants={len(data.get('variants') or [])}"
        )
        return data

    async def get_latest_screen_version(self, project_id: str, screen_id: str) -> Dict[str, Any]:
        """GET /v1/projects/:project_id/screens/:screen_id/versions/latest"""
        data = await self._get(
            f"/v1/projects/{project_id}/screens/{screen_id}/versions/latest"
        )
        logger.info(
            f"get_latest_screen_version: screen={screen_id}, "
            f"layers={len(data.get('layers') or [])}, assets={len(data.get('assets') or [])}"
        )
        return data

    async def get_screen_annotations(self, project_id: str, screen_id: str) -> List[Dict[str, Any]]:
        """GET /v1/projects/:project_id/screens/:screen_id/annotations"""
        data = await self._get(f"/v1/projects/{project_id}/screens/{screen_id}/annotations")
        logger.info(f"get_screen_annotations: screen={screen_id}, count={len(data)}")
        return data

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    async def get_project_component(self, project_id: str, component_id: str) -> Dict[str, Any]:
        """GET /v1/projects/:project_id/components/:component_id"""
        return await self._get(
            f"/v1/projects/{project_id}/components/{component_id}",
            params={"include_latest_version": "true"},
        )

    async def get_styleguide_component(self, styleguide_id: str, component_id: str) -> Dict[str, Any]:
        """GET /v1/styleguides/:styleguide_id/components/:component_id"""
        return await self._get(
            f"/v1/styleguides/{styleguide_id}/components/{component_id}",
            params={"include_latest_version": "true"},
        )

    async def get_styleguide_component_sections(self, styleguide_id: str) -> List[Dict[str, Any]]:
        """GET /v1/styleguides/:styleguide_id/component_sections"""
        return await self._get(f"/v1/styleguides/{styleguide_id}/component_sections")

    async def get_styleguide_components(
        self,
        styleguide_id: str,
        section_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """GET /v1/styleguides/:styleguide_id/components?section_id=..."""
        params = {"include_latest_version": "true"}
        if section_id:
            params["section_id"] = section_id
        data = await self._get(f"/v1/styleguides/{styleguide_id}/components", params=params)
        logger.info(
            f"get_styleguide_components: styleguide={styleguide_id}, "
            f"section={section_id}, count={len(data)}"
        )
        return data

    # ------------------------------------------------------------------
    # Design tokens
    # ------------------------------------------------------------------

    async def get_project_design_tokens(self, project_id: str) -> Dict[str, Any]:
        """GET /v1/projects/:project_id/design_tokens"""
        return await self._get(
            f"/v1/projects/{project_id}/design_tokens",
            params={"include_linked_styleguides": "true"},
        )

    async def get_styleguide_design_tokens(self, styleguide_id: str) -> Dict[str, Any]:
        """GET /v1/styleguides/:styleguide_id/design_tokens"""
        return await self._get(
            f"/v1/styleguides/{styleguide_id}/design_tokens",
            params={"include_linked_styleguides": "true"},
        )
