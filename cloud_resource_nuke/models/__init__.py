"""Data models for the nuke engine."""

from .config import Config
from .resource import (
    ExclusionPolicy,
    Inventory,
    NukeError,
    ResourceDescriptor,
    ResourceGroup,
)

__all__ = [
    "Config",
    "ExclusionPolicy",
    "Inventory",
    "NukeError",
    "ResourceDescriptor",
    "ResourceGroup",
]
