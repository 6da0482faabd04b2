"""Layer tree search and pruning.

Used when a caller asks for a single named element of a screen: the layer
is located depth-first, and the tree is cut down to that layer plus its
immediate parent so the response keeps one level of surrounding context
without shipping the whole screen.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

logger = logging.getLogger("zeplin_mcp.design.layers")

CHILDREN_FIELD = "layers"

# Zeplin REST returns snake_case; SDK-shaped payloads use camelCase
COMPONENT_NAME_FIELDS = ("component_name", "componentName")


@dataclass
class LocateResult:
    """Outcome of a layer search.

    Attributes:
        found: Whether a matching layer exists
        node: The matched layer, None when not found
        parent: Layer whose ``layers`` list directly holds the match;
            None for a top-level match or when not found
        path: Layers from a root down to the match, inclusive
    """

    found: bool
    node: Optional[Dict[str, Any]] = None
    parent: Optional[Dict[str, Any]] = None
    path: List[Dict[str, Any]] = field(default_factory=list)


def _matches(layer: Dict[str, Any], target_name: str) -> bool:
    for key in COMPONENT_NAME_FIELDS:
        if layer.get(key) == target_name:
            return True
    return layer.get("name") == target_name


def locate_layer(
    layers: Any,
    target_name: str,
    parent: Optional[Dict[str, Any]] = None,
    path: Optional[List[Dict[str, Any]]] = None,
) -> LocateResult:
    """Find the first layer named ``target_name`` (pre-order, depth-first).

    A layer matches on its component name first, then on its own name.
    Children are searched before later siblings.
    """
    if not isinstance(layers, list):
        return LocateResult(found=False)

    path = path or []
    for layer in layers:
        if not isinstance(layer, dict):
            continue

        current_path = [*path, layer]
        if _matches(layer, target_name):
            return LocateResult(found=True, node=layer, parent=parent, path=current_path)

        children = layer.get(CHILDREN_FIELD)
        if isinstance(children, list):
            result = locate_layer(children, target_name, layer, current_path)
            if result.found:
                return result

    return LocateResult(found=False)


def prune_layers(layers: Any, target_name: Optional[str]) -> Any:
    """Reduce a layer list to the target layer and its immediate parent.

    - no target name: ``layers`` is returned as is
    - ``layers`` not a list: ``[]``
    - no match: ``[]``
    - match with a parent: a shallow copy of the parent whose ``layers``
      holds only the match (the match keeps its own subtree)
    - top-level match: the match itself
    """
    if not target_name:
        return layers

    if not isinstance(layers, list):
        return []

    result = locate_layer(layers, target_name)
    if not result.found:
        logger.warning(f"prune_layers: no layer named '{target_name}'")
        return []

    if result.parent is not None:
        return [{**result.parent, CHILDREN_FIELD: [result.node]}]
    return [result.node]
