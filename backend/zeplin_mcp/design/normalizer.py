"""Design-document normalization.

Strips Zeplin API payloads down to what matters for code generation:
bookkeeping fields are dropped, default-valued style fields are collapsed,
multi-density asset exports are reduced to the 1x entry, and empty lists
are removed.

Pure functions over plain JSON data (dict / list / scalar). No schema is
assumed; field names are matched by string equality only.
"""

from __future__ import annotations

from typing import Any, Dict, List

# ---------------------------------------------------------------------------
# Elision rules
# ---------------------------------------------------------------------------

# Fields carrying no layout, styling, or content information
NOISE_FIELDS = frozenset({"id", "created", "creator", "thumbnails"})

# Field name -> value that equals the rendering default
DEFAULT_VALUES: Dict[str, Any] = {
    "opacity": 1,
    "blend_mode": "normal",
    "blendMode": "normal",
    "rotation": 0,
}

CONTENTS_FIELD = "contents"
CANONICAL_DENSITY = 1
METADATA_FIELD = "metadata"


def _is_empty_list(value: Any) -> bool:
    return isinstance(value, list) and not value


def _is_default(key: str, value: Any) -> bool:
    if key not in DEFAULT_VALUES or isinstance(value, bool):
        return False
    return value == DEFAULT_VALUES[key]


def _keep_content_entry(entry: Any) -> bool:
    """Keep 1x-density export entries and anything without a density."""
    if isinstance(entry, dict) and "density" in entry:
        return entry["density"] == CANONICAL_DENSITY
    return not _is_empty_list(entry)


def _normalize_contents(entries: List[Any]) -> List[Any]:
    kept = [normalize(entry) for entry in entries if _keep_content_entry(entry)]
    return [entry for entry in kept if not _is_empty_list(entry)]


def normalize(node: Any) -> Any:
    """Return a compacted copy of a design document.

    - lists: elements are normalized first, then empty-list elements dropped
    - dicts: noise fields and default-valued fields dropped, ``contents``
      reduced to 1x-density entries, fields that end up as empty lists omitted
    - scalars and None: returned unchanged

    A dict whose fields are all elided becomes ``{}``; only list-valued
    fields disappear entirely. The function is idempotent.
    """
    if isinstance(node, list):
        normalized = [normalize(item) for item in node]
        return [item for item in normalized if not _is_empty_list(item)]

    if isinstance(node, dict):
        result: Dict[str, Any] = {}
        for key, value in node.items():
            if key in NOISE_FIELDS:
                continue
            if _is_default(key, value):
                continue

            if key == CONTENTS_FIELD and isinstance(value, list):
                processed = _normalize_contents(value)
            else:
                processed = normalize(value)

            if _is_empty_list(processed):
                continue
            result[key] = processed
        return result

    return node


def remove_metadata(node: Any) -> Any:
    """Recursively drop every ``metadata`` field, whatever its value."""
    if isinstance(node, list):
        return [remove_metadata(item) for item in node]
    if isinstance(node, dict):
        return {
            key: remove_metadata(value)
            for key, value in node.items()
            if key != METADATA_FIELD
        }
    return node


def sanitize_tokens(document: Any) -> Any:
    """Normalize a design-token document, then strip its metadata.

    The two passes stay separate: metadata removal does not depend on the
    noise/default rules applied by normalize().
    """
    return remove_metadata(normalize(document))
