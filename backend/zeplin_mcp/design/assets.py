"""Asset registry — exportable assets indexed by layer source id.

Responses sent to the agent omit raw asset payloads to stay compact. The
assets found while building a response are recorded here instead, and a
later ``download_layer_asset`` call looks up the URL by layer source id
and format.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

logger = logging.getLogger("zeplin_mcp.design.assets")


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    """Value of the first present key (snake_case REST or camelCase SDK)."""
    for key in keys:
        if key in data:
            return data[key]
    return None


@dataclass(frozen=True)
class AssetContent:
    format: str
    url: str


@dataclass
class AssetRecord:
    """Downloadable content of one exported layer.

    Attributes:
        key: Layer source id, stable across versions of the layer
        display_name: Asset name shown in Zeplin
        layer_name: Name of the layer the asset was exported from
        contents: Available exports, in API order
    """

    key: str
    display_name: Optional[str] = None
    layer_name: Optional[str] = None
    contents: List[AssetContent] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AssetRecord":
        """Build a record from a Zeplin asset entry."""
        contents = []
        for entry in data.get("contents") or []:
            if not isinstance(entry, Mapping):
                continue
            fmt = entry.get("format")
            url = entry.get("url")
            if fmt and url:
                contents.append(AssetContent(format=fmt, url=url))

        return cls(
            key=_first(data, "key", "layer_source_id", "layerSourceId") or "",
            display_name=_first(data, "display_name", "displayName"),
            layer_name=_first(data, "layer_name", "layerName"),
            contents=contents,
        )


AssetLike = Union[AssetRecord, Mapping[str, Any]]


def _document_asset_lists(document: Any) -> List[List[Any]]:
    """Asset lists at the known locations of a response-shaped document."""
    found: List[List[Any]] = []
    if not isinstance(document, Mapping):
        return found

    variants = document.get("variants")
    if isinstance(variants, list):
        for variant in variants:
            if isinstance(variant, Mapping) and isinstance(variant.get("assets"), list):
                found.append(variant["assets"])

    component = document.get("component")
    if isinstance(component, Mapping):
        version = _first(component, "latest_version", "latestVersion")
        if isinstance(version, Mapping) and isinstance(version.get("assets"), list):
            found.append(version["assets"])

    return found


class AssetRegistry:
    """In-memory index from layer source id to asset record.

    Owned by one server process and reset at the start of every top-level
    extraction, so lookups only ever see assets of the latest response.
    """

    def __init__(self) -> None:
        self._records: Dict[str, AssetRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def keys(self) -> List[str]:
        return list(self._records)

    def reset(self) -> None:
        self._records.clear()

    def register(self, asset: AssetLike) -> bool:
        """Register one asset; returns False when it was skipped.

        Records without a key or without any content entry are skipped.
        """
        record = asset if isinstance(asset, AssetRecord) else AssetRecord.from_dict(asset)
        if not record.key or not record.contents:
            return False
        self._records[record.key] = record
        return True

    def register_all(self, assets: Iterable[AssetLike]) -> int:
        """Register several assets; returns how many were kept."""
        return sum(1 for asset in assets if self.register(asset))

    def lookup_by_key(self, key: str) -> Optional[AssetRecord]:
        return self._records.get(key)

    def lookup_url(self, key: str, fmt: str) -> Optional[str]:
        """URL of the first content entry of ``key`` in format ``fmt``."""
        record = self._records.get(key)
        if record is None:
            return None
        for content in record.contents:
            if content.format == fmt:
                return content.url
        return None

    def extract_from_document(self, document: Any) -> int:
        """Register assets found in ``variants[*].assets`` and
        ``component.latest_version.assets``. The document is not modified.
        """
        registered = 0
        for assets in _document_asset_lists(document):
            registered += self.register_all(a for a in assets if isinstance(a, Mapping))
        if registered:
            logger.info(f"extract_from_document: registered={registered}, total={len(self)}")
        return registered

    def strip_assets(self, document: Any) -> Any:
        """Register a document's assets and return a copy without them."""
        self.extract_from_document(document)
        if not isinstance(document, Mapping):
            return document

        result = copy.deepcopy(dict(document))
        for variant in result.get("variants") or []:
            if isinstance(variant, dict):
                variant.pop("assets", None)

        component = result.get("component")
        if isinstance(component, dict):
            for key in ("latest_version", "latestVersion"):
                version = component.get(key)
                if isinstance(version, dict):
                    version.pop("assets", None)
        return result
