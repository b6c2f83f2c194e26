"""Inventory and batched-destruction engine."""

from .executor import nuke_batch, nuke_inventory, split_batches
from .inventory import build_inventory, list_region
from .regions import RegionEnumerator
from .registry import ALL_RESOURCE_TYPES, ResourceType, ResourceTypeRegistry

__all__ = [
    "nuke_batch",
    "nuke_inventory",
    "split_batches",
    "build_inventory",
    "list_region",
    "RegionEnumerator",
    "ALL_RESOURCE_TYPES",
    "ResourceType",
    "ResourceTypeRegistry",
]
