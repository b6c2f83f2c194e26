"""Discovery pass: list every selected resource type in every region."""

from __future__ import annotations
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

from ..errors import DiscoveryError
from ..models import ExclusionPolicy, Inventory, ResourceGroup
from ..models.config import INVENTORY_MAX_WORKERS
from ..utils import get_logger
from .registry import ResourceType, ResourceTypeRegistry

logger = get_logger()


def list_region(
    region: str,
    resource_types: list[ResourceType],
    policy: ExclusionPolicy,
) -> tuple[ResourceGroup, ...]:
    """List and filter every resource type in one region, in nuke order."""
    start_time = time.time()
    logger.info(f"Checking region: {region}")
    groups = []

    for resource_type in resource_types:
        if not resource_type.is_available_in(region):
            logger.debug(
                "Resource type not available in region",
                extra={"resource_type": resource_type.name, "region": region},
            )
            continue

        try:
            found = resource_type.list_resources(region)
        except Exception as e:
            raise DiscoveryError(region, resource_type.name, e) from e

        eligible = policy.filter(found)
        skipped = len(found) - len(eligible)
        if skipped:
            logger.info(
                f"Excluded {skipped} {resource_type.name} resources",
                extra={"resource_type": resource_type.name, "region": region},
            )
        if eligible:
            groups.append(ResourceGroup(resource_type.name, tuple(eligible)))

    duration = time.time() - start_time
    logger.info(
        f"Completed {region} in {duration:.1f}s: "
        f"{sum(len(g.descriptors) for g in groups)} resources to nuke"
    )
    return tuple(groups)


def build_inventory(
    registry: ResourceTypeRegistry,
    regions: Iterable[str],
    policy: ExclusionPolicy,
    resource_types: Iterable[str] | None = None,
    max_workers: int | None = None,
) -> Inventory:
    """
    Build the filtered inventory for one run.

    Discovery is all-or-nothing: the first list failure raises DiscoveryError
    and no inventory is returned. Resource types with nothing eligible are
    left out of their region, and regions with nothing eligible are left out
    of the inventory.
    """
    resource_types = list(resource_types or ())
    registry.validate(resource_types)
    selected = registry.select(resource_types)

    regions_to_check = []
    for region in regions:
        if policy.is_region_excluded(region):
            logger.info(f"Skipping region: {region}")
            continue
        regions_to_check.append(region)

    workers = INVENTORY_MAX_WORKERS if max_workers is None else max_workers
    if workers > 1 and len(regions_to_check) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(list_region, region, selected, policy)
                for region in regions_to_check
            ]
            try:
                results = [future.result() for future in futures]
            except DiscoveryError:
                for future in futures:
                    future.cancel()
                raise
    else:
        results = [
            list_region(region, selected, policy) for region in regions_to_check
        ]

    inventory = Inventory()
    for region, groups in zip(regions_to_check, results):
        if groups:
            inventory.regions[region] = groups

    logger.info(
        f"Inventory complete: {inventory.count()} resources across "
        f"{len(inventory.regions)} regions"
    )
    return inventory
