"""Design-tree processing: normalization, layer pruning, asset indexing."""

from .assets import AssetContent, AssetRecord, AssetRegistry
from .layers import LocateResult, locate_layer, prune_layers
from .normalizer import normalize, remove_metadata, sanitize_tokens

__all__ = [
    "AssetContent",
    "AssetRecord",
    "AssetRegistry",
    "LocateResult",
    "locate_layer",
    "normalize",
    "prune_layers",
    "remove_metadata",
    "sanitize_tokens",
]
