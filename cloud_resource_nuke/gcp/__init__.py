"""GCP resource types, in the order they must be nuked."""

from ..core import ResourceTypeRegistry
from .context import GcpContext, GcpRegionEnumerator, default_context
from .gce import gce_instances

GCP_NUKE_ORDER = ("gce-instances",)


def get_registry(context: GcpContext, client=None) -> ResourceTypeRegistry:
    return ResourceTypeRegistry([gce_instances(context, client)], GCP_NUKE_ORDER)


__all__ = [
    "GCP_NUKE_ORDER",
    "GcpContext",
    "GcpRegionEnumerator",
    "default_context",
    "get_registry",
]
