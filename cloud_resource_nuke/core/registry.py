"""Resource type plugins and the registry that orders them."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from ..errors import DuplicateResourceTypeError, InvalidResourceTypeError
from ..models import ResourceDescriptor

ALL_RESOURCE_TYPES = "all"

ListFunction = Callable[[str], list[ResourceDescriptor]]
DeleteFunction = Callable[[str, list[str]], None]


@dataclass(frozen=True)
class ResourceType:
    """
    Capabilities of one resource kind.

    ``list_resources(region)`` returns every descriptor of the kind in the
    region, unfiltered. ``delete_resources(region, identifiers)`` deletes one
    batch and raises on failure. ``max_batch_size`` <= 0 means no limit.
    ``regions`` is None when the kind exists in every region.
    """

    name: str
    list_resources: ListFunction
    delete_resources: DeleteFunction
    max_batch_size: int = 0
    regions: frozenset[str] | None = None
    description: str = ""

    def is_available_in(self, region: str) -> bool:
        return self.regions is None or region in self.regions


class ResourceTypeRegistry:
    """Lookup table of resource types, iterated in an explicit nuke order."""

    def __init__(
        self, resource_types: Iterable[ResourceType], nuke_order: Sequence[str]
    ):
        self._types: dict[str, ResourceType] = {}
        for resource_type in resource_types:
            if resource_type.name in self._types:
                raise DuplicateResourceTypeError(
                    f"Resource type '{resource_type.name}' registered twice"
                )
            self._types[resource_type.name] = resource_type

        if len(set(nuke_order)) != len(nuke_order):
            raise DuplicateResourceTypeError(
                f"Nuke order lists a resource type more than once: {list(nuke_order)}"
            )
        if set(nuke_order) != set(self._types):
            missing = sorted(set(self._types) - set(nuke_order))
            unknown = sorted(set(nuke_order) - set(self._types))
            raise DuplicateResourceTypeError(
                f"Nuke order does not match registered types "
                f"(missing: {missing}, unknown: {unknown})"
            )
        self._order = tuple(nuke_order)

    def __contains__(self, name: str) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def get(self, name: str) -> ResourceType:
        return self._types[name]

    def names(self) -> list[str]:
        """Canonical, sorted list of valid --resource-type values."""
        return sorted(self._types)

    def ordered(self) -> list[ResourceType]:
        return [self._types[name] for name in self._order]

    def validate(self, requested: Iterable[str]) -> None:
        """Raise InvalidResourceTypeError naming every unknown type."""
        invalid = [
            name
            for name in requested
            if name != ALL_RESOURCE_TYPES and name not in self._types
        ]
        if invalid:
            raise InvalidResourceTypeError(invalid)

    def select(self, requested: Iterable[str] | None) -> list[ResourceType]:
        """Resource types to nuke, in nuke order. Empty or "all" selects everything."""
        requested = set(requested or ())
        if not requested or ALL_RESOURCE_TYPES in requested:
            return self.ordered()
        return [t for t in self.ordered() if t.name in requested]
