"""Screen and component extraction pipeline.

Per request: reset the asset registry, fetch raw Zeplin data, normalize it,
optionally prune screen layers down to one named element, index the assets
for later download, and assemble a compact response record with the asset
payloads left out.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

from .design.assets import AssetRegistry
from .design.layers import prune_layers
from .design.normalizer import normalize, sanitize_tokens
from .integrations.links import (
    COMPONENT_URL_FORMATS,
    SCREEN_URL_FORMAT,
    parse_component_url,
    parse_screen_url,
)
from .integrations.zeplin_client import ZeplinClient, ZeplinClientError

logger = logging.getLogger("zeplin_mcp.extraction")

UNNAMED_SCREEN = "Unnamed Screen"


class ExtractionError(Exception):
    """Raised when design data cannot be extracted; carries one user-facing message."""


class InvalidLinkError(ExtractionError):
    """Raised when a link does not point at a Zeplin screen or component."""


# =====================================================================
# Response pieces
# =====================================================================


def build_annotations(
    annotations: List[Dict[str, Any]],
    screen_version: Dict[str, Any],
) -> List[Dict[str, Any]]:
    """Convert Zeplin annotations to ``{type, text, position}`` records.

    Annotation positions are relative (0..1); they are scaled to the
    screen version's pixel size, 0 when the size is unknown.
    """
    width = screen_version.get("width") or 0
    height = screen_version.get("height") or 0

    result = []
    for annotation in annotations or []:
        position = annotation.get("position") or {}
        result.append({
            "type": (annotation.get("type") or {}).get("name"),
            "text": annotation.get("content"),
            "position": {
                "x": (position.get("x") or 0) * width,
                "y": (position.get("y") or 0) * height,
            },
        })
    return result


def _variant_props(component: Dict[str, Any]) -> Optional[List[Dict[str, Any]]]:
    properties = component.get("variant_properties")
    if properties is None:
        return None
    return [{"name": p.get("name"), "value": p.get("value")} for p in properties]


def _latest_version(component: Dict[str, Any]) -> Dict[str, Any]:
    return component.get("latest_version") or {}


# =====================================================================
# Extractor
# =====================================================================


class DesignExtractor:
    """Runs the extraction pipeline against one Zeplin client.

    Args:
        client: Zeplin API client (or any object with the same coroutines)
        registry: Asset registry populated by each extraction; shared with
            the download tool that reads it afterwards.
    """

    def __init__(self, client: ZeplinClient, registry: Optional[AssetRegistry] = None):
        self._client = client
        self.registry = registry if registry is not None else AssetRegistry()

    async def extract(
        self,
        url: str,
        include_variants: bool = True,
        target_layer_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Extract a screen or a component depending on the link kind."""
        if parse_screen_url(url):
            return await self.extract_screen(url, include_variants, target_layer_name)
        if parse_component_url(url):
            return await self.extract_component(url)
        raise InvalidLinkError(
            "Link is not a Zeplin screen or component. Expected formats: "
            f"{SCREEN_URL_FORMAT}, " + ", ".join(COMPONENT_URL_FORMATS)
        )

    # ------------------------------------------------------------------
    # Screens
    # ------------------------------------------------------------------

    async def extract_screen(
        self,
        url: str,
        include_variants: bool = True,
        target_layer_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        parsed = parse_screen_url(url)
        if not parsed:
            raise InvalidLinkError(
                f"Screen link is not valid — here's the expected format: {SCREEN_URL_FORMAT}"
            )
        project_id, screen_id = parsed

        self.registry.reset()

        try:
            name, screen_ids, variant_names = await self._resolve_screen_variants(
                project_id, screen_id, include_variants,
            )
            variants = await self._fetch_screen_variants(
                project_id, screen_ids, variant_names, target_layer_name,
            )
            design_tokens = await self._fetch_project_tokens(project_id)
        except ZeplinClientError as e:
            raise ExtractionError(f"Failed to fetch screen data: {e}") from e

        for variant in variants:
            self.registry.register_all(variant.get("assets") or [])

        logger.info(
            f"extract_screen: screen={screen_id}, variants={len(variants)}, "
            f"target={target_layer_name!r}, assets={len(self.registry)}"
        )

        return {
            "type": "Screen",
            "name": name,
            "variants": [
                {
                    "name": variant["name"],
                    "annotations": variant["annotations"],
                    "layers": variant["layers"],
                }
                for variant in variants
            ],
            "designTokens": design_tokens,
        }

    async def _resolve_screen_variants(
        self,
        project_id: str,
        screen_id: str,
        include_variants: bool,
    ) -> Tuple[str, List[str], List[str]]:
        """Screen ids and variant names to fetch for one screen link."""
        screen = await self._client.get_screen(project_id, screen_id)

        group_id = ((screen.get("variant") or {}).get("group") or {}).get("id")
        if include_variants and group_id:
            group = await self._client.get_screen_variant(project_id, group_id)
            entries = [
                v for v in group.get("variants") or []
                if v.get("screen_id") and v.get("value") is not None
            ]
            return (
                group.get("name") or screen.get("name") or UNNAMED_SCREEN,
                [v["screen_id"] for v in entries],
                [v["value"] for v in entries],
            )

        name = screen.get("name") or UNNAMED_SCREEN
        return name, [screen_id], [name]

    async def _fetch_screen_variants(
        self,
        project_id: str,
        screen_ids: List[str],
        variant_names: List[str],
        target_layer_name: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Fetch versions and annotations for each screen, in input order."""
        versions = await asyncio.gather(*(
            self._client.get_latest_screen_version(project_id, sid) for sid in screen_ids
        ))
        annotation_lists = await asyncio.gather(*(
            self._client.get_screen_annotations(project_id, sid) for sid in screen_ids
        ))

        variants = []
        for name, raw_version, annotations in zip(variant_names, versions, annotation_lists):
            version = normalize(raw_version)
            layers = version.get("layers") or []
            if target_layer_name:
                layers = prune_layers(layers, target_layer_name)

            variants.append({
                "name": name,
                "annotations": build_annotations(annotations, version),
                "layers": layers,
                "assets": version.get("assets") or [],
            })
        return variants

    # ------------------------------------------------------------------
    # Components
    # ------------------------------------------------------------------

    async def extract_component(self, url: str) -> Dict[str, Any]:
        link = parse_component_url(url)
        if not link:
            raise InvalidLinkError(
                "Component link is not valid. Expected formats: "
                + " or ".join(COMPONENT_URL_FORMATS)
            )

        self.registry.reset()

        try:
            if link.is_project_component:
                raw = await self._client.get_project_component(link.project_id, link.component_id)
                design_tokens = await self._fetch_project_tokens(link.project_id)
            else:
                raw = await self._client.get_styleguide_component(
                    link.styleguide_id, link.component_id,
                )
                design_tokens = await self._fetch_styleguide_tokens(link.styleguide_id)

            component = normalize(raw)

            section_id = (raw.get("section") or {}).get("id")
            section = None
            if section_id and link.styleguide_id:
                sections = await self._client.get_styleguide_component_sections(link.styleguide_id)
                section = next((s for s in sections if s.get("id") == section_id), None)

            section_components = []
            if section is not None:
                section_components = normalize(
                    await self._client.get_styleguide_components(link.styleguide_id, section_id)
                )
        except ZeplinClientError as e:
            raise ExtractionError(f"Failed to fetch component data: {e}") from e

        # Registered only once every fetch succeeded
        self.registry.register_all(_latest_version(component).get("assets") or [])
        if section is None:
            return self._single_component(component, design_tokens)

        for variant in section_components:
            self.registry.register_all(_latest_version(variant).get("assets") or [])

        logger.info(
            f"extract_component: section={section.get('name')!r}, "
            f"variants={len(section_components)}, assets={len(self.registry)}"
        )

        return {
            "type": "Component",
            "name": section.get("name"),
            "variants": [
                {
                    "name": variant.get("name"),
                    "props": _variant_props(variant),
                    "layers": _latest_version(variant).get("layers"),
                }
                for variant in section_components
            ],
            "designTokens": design_tokens,
        }

    def _single_component(self, component: Dict[str, Any], design_tokens: Any) -> Dict[str, Any]:
        logger.info(
            f"extract_component: component={component.get('name')!r}, assets={len(self.registry)}"
        )
        return {
            "type": "Component",
            "component": self.registry.strip_assets({"component": component})["component"],
            "designTokens": design_tokens,
        }

    # ------------------------------------------------------------------
    # Design tokens
    # ------------------------------------------------------------------

    async def _fetch_project_tokens(self, project_id: str) -> Any:
        return sanitize_tokens(await self._client.get_project_design_tokens(project_id))

    async def _fetch_styleguide_tokens(self, styleguide_id: str) -> Any:
        return sanitize_tokens(await self._client.get_styleguide_design_tokens(styleguide_id))
