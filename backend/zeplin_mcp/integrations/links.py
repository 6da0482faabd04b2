"""Zeplin link parsing and zpl.io shortlink resolution."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Tuple

import httpx

from .. import config, settings

logger = logging.getLogger("zeplin_mcp.integrations.links")

_APP = re.escape(config.ZEPLIN_APP_BASE.rstrip("/"))

SCREEN_URL = re.compile(rf"^{_APP}/project/([^/?#]+)/screen/([^/?#]+)")
STYLEGUIDE_COMPONENT_URL = re.compile(rf"^{_APP}/styleguide/([^/?#]+)/component/([^/?#]+)")
PROJECT_COMPONENT_URL = re.compile(rf"^{_APP}/project/([^/?#]+)/styleguide/component/([^/?#]+)")

SCREEN_URL_FORMAT = f"{config.ZEPLIN_APP_BASE}/project/{{projectId}}/screen/{{screenId}}"
COMPONENT_URL_FORMATS = (
    f"{config.ZEPLIN_APP_BASE}/styleguide/{{styleguideId}}/component/{{componentId}}",
    f"{config.ZEPLIN_APP_BASE}/project/{{projectId}}/styleguide/component/{{componentId}}",
)


class UrlResolutionError(Exception):
    """Raised when a zpl.io shortlink cannot be resolved."""


@dataclass(frozen=True)
class ComponentLink:
    """A component link; exactly one of project_id / styleguide_id is set."""

    component_id: str
    project_id: Optional[str] = None
    styleguide_id: Optional[str] = None

    @property
    def is_project_component(self) -> bool:
        return self.project_id is not None


def parse_screen_url(url: str) -> Optional[Tuple[str, str]]:
    """Return (project_id, screen_id) for a screen link, else None."""
    match = SCREEN_URL.match(url)
    if not match:
        return None
    return match.group(1), match.group(2)


def parse_component_url(url: str) -> Optional[ComponentLink]:
    match = STYLEGUIDE_COMPONENT_URL.match(url)
    if match:
        return ComponentLink(component_id=match.group(2), styleguide_id=match.group(1))

    match = PROJECT_COMPONENT_URL.match(url)
    if match:
        return ComponentLink(component_id=match.group(2), project_id=match.group(1))
    return None


async def resolve_url(url: str, timeout: float = settings.SHORTLINK_TIMEOUT) -> str:
    """Expand a zpl.io shortlink to its app.zeplin.io URL.

    Any other URL is returned unchanged.
    """
    if not url.startswith(config.ZEPLIN_SHORTLINK_PREFIX):
        return url

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            resp = await client.get(url, headers={"Accept": "application/json"})
    except httpx.HTTPError as e:
        raise UrlResolutionError(f"Failed to resolve URL: {e}") from e

    if resp.status_code != 200:
        raise UrlResolutionError(
            f"Failed to resolve URL: {resp.status_code} {resp.reason_phrase}"
        )

    try:
        resolved = resp.json()["url"]
    except (ValueError, KeyError, TypeError) as e:
        raise UrlResolutionError(f"Failed to resolve URL: unexpected response for {url}") from e

    logger.info(f"resolve_url: {url} → {resolved}")
    return resolved
