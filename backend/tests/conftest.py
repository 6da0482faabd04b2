"""Shared fixtures: sample Zeplin API payloads and a mocked Zeplin client.

Payloads follow the snake_case shape returned by the Zeplin REST API.
"""

from __future__ import annotations

import copy
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock

import pytest

# ---------------------------------------------------------------------------
# Sample payloads
# ---------------------------------------------------------------------------

SCREEN_VERSION: Dict[str, Any] = {
    "id": "version-1",
    "created": 1700000000,
    "creator": {"id": "user-1", "username": "designer"},
    "thumbnails": {"small": "https://cdn.zeplin.io/thumb-small.png"},
    "width": 375,
    "height": 812,
    "background_color": {"r": 255, "g": 255, "b": 255, "a": 1},
    "layers": [
        {
            "id": "layer-header",
            "source_id": "src-header",
            "type": "group",
            "name": "Header",
            "opacity": 1,
            "blend_mode": "normal",
            "rotation": 0,
            "rect": {"x": 0, "y": 0, "width": 375, "height": 88},
            "layers": [
                {
                    "id": "layer-logo",
                    "source_id": "src-logo",
                    "type": "shape",
                    "name": "Logo",
                    "opacity": 0.5,
                    "rect": {"x": 16, "y": 40, "width": 32, "height": 32},
                },
                {
                    "id": "layer-title",
                    "source_id": "src-title",
                    "type": "text",
                    "name": "Title",
                    "content": "Welcome back",
                    "text_styles": [],
                },
            ],
        },
        {
            "id": "layer-footer",
            "source_id": "src-footer",
            "type": "group",
            "name": "Footer",
            "component_name": "FooterBar",
            "layers": [],
        },
    ],
    "assets": [
        {
            "layer_source_id": "src-logo",
            "display_name": "logo",
            "layer_name": "Logo",
            "contents": [
                {"url": "https://cdn.zeplin.io/assets/logo.svg", "format": "svg", "density": 1},
                {"url": "https://cdn.zeplin.io/assets/logo@2x.png", "format": "png", "density": 2},
                {"url": "https://cdn.zeplin.io/assets/logo.png", "format": "png", "density": 1},
            ],
        },
        {
            "layer_source_id": "src-empty",
            "display_name": "empty",
            "layer_name": "Empty",
            "contents": [],
        },
    ],
}

ANNOTATIONS = [
    {
        "id": "note-1",
        "content": "Header stays sticky on scroll",
        "type": {"id": "type-1", "name": "Behavior"},
        "position": {"x": 0.5, "y": 0.25},
    },
]

DESIGN_TOKENS: Dict[str, Any] = {
    "colors": {
        "primary": {
            "value": "rgb(38, 43, 46)",
            "metadata": {"source": {"styleguide": {"id": "sg-1"}}},
        },
    },
    "spacing": {
        "small": {"value": 8, "metadata": {"unit": "px"}},
    },
    "metadata": {"version": 3},
}


@pytest.fixture
def screen_version() -> Dict[str, Any]:
    return copy.deepcopy(SCREEN_VERSION)


@pytest.fixture
def design_tokens() -> Dict[str, Any]:
    return copy.deepcopy(DESIGN_TOKENS)


@pytest.fixture
def nested_tree():
    """Layer tree A > (B, C > D)."""
    return [
        {
            "name": "A",
            "layers": [
                {"name": "B"},
                {"name": "C", "type": "group", "layers": [{"name": "D"}]},
            ],
        },
    ]


# ---------------------------------------------------------------------------
# Mocked Zeplin client
# ---------------------------------------------------------------------------


@pytest.fixture
def zeplin_client():
    """Zeplin client whose coroutines return the sample payloads."""
    client = MagicMock()
    client.get_screen = AsyncMock(return_value={"id": "screen-1", "name": "Login"})
    client.get_screen_variant = AsyncMock()
    client.get_latest_screen_version = AsyncMock(
        side_effect=lambda project_id, screen_id: copy.deepcopy(SCREEN_VERSION)
    )
    client.get_screen_annotations = AsyncMock(return_value=copy.deepcopy(ANNOTATIONS))
    client.get_project_component = AsyncMock()
    client.get_styleguide_component = AsyncMock()
    client.get_styleguide_component_sections = AsyncMock(return_value=[])
    client.get_styleguide_components = AsyncMock(return_value=[])
    client.get_project_design_tokens = AsyncMock(return_value=copy.deepcopy(DESIGN_TOKENS))
    client.get_styleguide_design_tokens = AsyncMock(return_value=copy.deepcopy(DESIGN_TOKENS))
    return client
