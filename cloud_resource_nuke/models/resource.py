"""Resource descriptors, exclusion policy, inventory and nuke errors."""

from __future__ import annotations
import datetime
from dataclasses import dataclass, field
from typing import Iterable, Sequence


@dataclass(frozen=True)
class ResourceDescriptor:
    """A single discovered resource eligible for deletion."""

    identifier: str
    region: str
    resource_type: str
    created_at: datetime.datetime | None = None
    protected: bool = False
    name: str = ""


@dataclass(frozen=True)
class ExclusionPolicy:
    """
    Decides which descriptors must never be nuked.

    A descriptor is excluded when its region is excluded, when it carries a
    protection flag, or when it was created strictly after the cutoff.
    Descriptors without a creation time are never excluded by age.
    """

    excluded_regions: frozenset[str] = frozenset()
    cutoff: datetime.datetime | None = None

    def is_region_excluded(self, region: str) -> bool:
        return region in self.excluded_regions

    def excludes(self, descriptor: ResourceDescriptor) -> bool:
        if self.is_region_excluded(descriptor.region):
            return True
        if descriptor.protected:
            return True
        if self.cutoff is not None and descriptor.created_at is not None:
            return descriptor.created_at > self.cutoff
        return False

    def filter(
        self, descriptors: Iterable[ResourceDescriptor]
    ) -> list[ResourceDescriptor]:
        return [d for d in descriptors if not self.excludes(d)]


@dataclass(frozen=True)
class ResourceGroup:
    """All eligible descriptors of one resource type in one region."""

    resource_type: str
    descriptors: tuple[ResourceDescriptor, ...]

    @property
    def identifiers(self) -> list[str]:
        return [d.identifier for d in self.descriptors]


@dataclass
class Inventory:
    """
    Filtered resources of one run, keyed by region.

    Within a region, groups keep nuke order. Regions keep the order in which
    they were enumerated. Only non-empty groups and regions are stored.
    """

    regions: dict[str, tuple[ResourceGroup, ...]] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not self.regions

    def count(self) -> int:
        return sum(
            len(group.descriptors)
            for groups in self.regions.values()
            for group in groups
        )

    def summary_lines(self) -> list[str]:
        """Human-readable line per descriptor slated for deletion."""
        lines = []
        for region, groups in self.regions.items():
            for group in groups:
                for descriptor in group.descriptors:
                    label = descriptor.identifier
                    if descriptor.name and descriptor.name != descriptor.identifier:
                        label = f"{descriptor.identifier} ({descriptor.name})"
                    lines.append(f"* {group.resource_type}-{label}-{region}")
        return lines


@dataclass
class NukeError:
    """A terminal failure of one delete batch."""

    region: str
    resource_type: str
    identifiers: Sequence[str]
    error: Exception

    def __str__(self) -> str:
        return (
            f"[{self.region}] {self.resource_type}: failed to nuke "
            f"{len(self.identifiers)} resource(s) ({', '.join(self.identifiers)}): "
            f"{self.error}"
        )
