"""Deletion pass: nuke an inventory in batches."""

from __future__ import annotations
import time
from typing import Callable, Sequence, TypeVar

from ..errors import PartialBatchError
from ..models import Inventory, NukeError
from ..models.config import BATCH_PAUSE_SECONDS, RATE_LIMIT_COOLDOWN_SECONDS
from ..utils import get_logger, is_rate_limit_error
from .registry import ResourceType, ResourceTypeRegistry

logger = get_logger()

T = TypeVar("T")


def split_batches(items: Sequence[T], limit: int | None) -> list[list[T]]:
    """Split items into consecutive batches of at most ``limit``; <= 0 or None means one batch."""
    if not limit or limit <= 0:
        return [list(items)]
    return [list(items[i : i + limit]) for i in range(0, len(items), limit)]


def nuke_batch(
    resource_type: ResourceType,
    region: str,
    batch: list[str],
    is_rate_limited: Callable[[Exception], bool] = is_rate_limit_error,
) -> NukeError | None:
    """
    Delete one batch, waiting out rate limits.

    Throttling retries the same batch after a fixed cooldown, as many times
    as it takes. Identifiers a throttled attempt reports as completed are
    dropped from the retry. Any other error is returned as a NukeError.
    """
    remaining = list(batch)
    attempt = 0
    while remaining:
        attempt += 1
        try:
            resource_type.delete_resources(region, remaining)
        except Exception as e:
            if is_rate_limited(e):
                completed = set(getattr(e, "completed", ()))
                remaining = [i for i in remaining if i not in completed]
                if not remaining:
                    break
                logger.info(
                    f"Request limit reached. Waiting {RATE_LIMIT_COOLDOWN_SECONDS}s "
                    "before retrying the same batch",
                    extra={
                        "resource_type": resource_type.name,
                        "region": region,
                        "attempt": attempt,
                        "remaining": len(remaining),
                    },
                )
                time.sleep(RATE_LIMIT_COOLDOWN_SECONDS)
                continue

            failed = list(e.failed) if isinstance(e, PartialBatchError) else remaining
            logger.error(
                "Failed to nuke batch",
                extra={
                    "resource_type": resource_type.name,
                    "region": region,
                    "identifiers": failed,
                    "error": str(e),
                },
            )
            return NukeError(region, resource_type.name, failed, e)
        break

    logger.info(
        f"Nuked {len(batch)} {resource_type.name} resources",
        extra={"resource_type": resource_type.name, "region": region},
    )
    return None


def nuke_inventory(
    registry: ResourceTypeRegistry,
    inventory: Inventory,
    is_rate_limited: Callable[[Exception], bool] = is_rate_limit_error,
) -> list[NukeError]:
    """
    Nuke every resource in the inventory, region by region, type by type.

    Failed batches do not stop sibling batches, types or regions. Returns
    every terminal error; an empty list means everything was nuked.
    """
    errors: list[NukeError] = []

    for region, groups in inventory.regions.items():
        logger.info(f"Nuking resources in region: {region}")

        for group in groups:
            resource_type = registry.get(group.resource_type)
            identifiers = group.identifiers
            batches = split_batches(identifiers, resource_type.max_batch_size)

            logger.info(
                f"Terminating {len(identifiers)} {resource_type.name} resources "
                f"in {len(batches)} batches",
                extra={"resource_type": resource_type.name, "region": region},
            )

            for i, batch in enumerate(batches):
                error = nuke_batch(resource_type, region, batch, is_rate_limited)
                if error:
                    errors.append(error)

                if i != len(batches) - 1:
                    logger.info(
                        f"Sleeping for {BATCH_PAUSE_SECONDS} seconds before "
                        "processing next batch..."
                    )
                    time.sleep(BATCH_PAUSE_SECONDS)

    if errors:
        logger.error(f"{len(errors)} batches failed to nuke")
    else:
        logger.info("All resources nuked successfully")
    return errors
