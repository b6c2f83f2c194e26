"""Compute Engine instances resource type."""

from __future__ import annotations
import concurrent.futures
import datetime

from google.api_core import exceptions as google_exceptions
from google.cloud import compute_v1

from ..core import ResourceType
from ..errors import PartialBatchError, RateLimitedError
from ..models import ResourceDescriptor
from ..utils import get_logger
from .context import GcpContext

logger = get_logger()

RESOURCE_TYPE = "gce-instances"

# Seconds to wait for one delete operation to finish
OPERATION_TIMEOUT_SECONDS = 300


def parse_creation_timestamp(value: str) -> datetime.datetime | None:
    """Parse an RFC 3339 creation timestamp such as 2024-01-02T03:04:05.678-08:00."""
    if not value:
        return None
    return datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))


def split_identifier(identifier: str) -> tuple[str, str]:
    """Identifiers are "<zone>/<instance name>"."""
    zone, _, name = identifier.partition("/")
    if not zone or not name:
        raise ValueError(f"Invalid GCE instance identifier: {identifier}")
    return zone, name


def list_instances(
    context: GcpContext, region: str, client=None
) -> list[ResourceDescriptor]:
    client = client or compute_v1.InstancesClient()
    descriptors = []

    for zone in context.zones(region):
        for instance in client.list(project=context.project, zone=zone):
            if instance.deletion_protection:
                logger.info(
                    "Instance protected",
                    extra={
                        "instance_name": instance.name,
                        "zone": zone,
                        "protection_reason": "Deletion protection enabled",
                    },
                )
            descriptors.append(
                ResourceDescriptor(
                    identifier=f"{zone}/{instance.name}",
                    region=region,
                    resource_type=RESOURCE_TYPE,
                    created_at=parse_creation_timestamp(instance.creation_timestamp),
                    protected=bool(instance.deletion_protection),
                    name=instance.name,
                )
            )

    return descriptors


def _await_operations(operations: dict, region: str, failed: dict) -> list[str]:
    """Wait for started delete operations; return the identifiers that finished."""
    finished = []
    for identifier, operation in operations.items():
        try:
            operation.result(timeout=OPERATION_TIMEOUT_SECONDS)
        except (
            google_exceptions.GoogleAPICallError,
            concurrent.futures.TimeoutError,
        ) as e:
            logger.error(
                f"Delete operation failed for instance {identifier}",
                extra={"region": region, "error": str(e)},
            )
            failed[identifier] = e
        else:
            logger.info(f"Deleted GCE instance {identifier}")
            finished.append(identifier)
    return finished


def delete_instances(
    context: GcpContext, region: str, identifiers: list[str], client=None
) -> None:
    """
    Start every delete in the batch, then wait for the operations to finish.

    A throttled request still waits for the operations already started and
    names them as completed on the RateLimitedError.
    """
    client = client or compute_v1.InstancesClient()
    operations = {}
    gone = []
    failed: dict[str, Exception] = {}

    for identifier in identifiers:
        zone, name = split_identifier(identifier)
        try:
            operations[identifier] = client.delete(
                project=context.project, zone=zone, instance=name
            )
        except google_exceptions.TooManyRequests as e:
            completed = gone + _await_operations(operations, region, failed)
            raise RateLimitedError(str(e), completed=completed) from e
        except google_exceptions.NotFound:
            logger.info(f"Instance {identifier} already deleted")
            gone.append(identifier)
        except google_exceptions.GoogleAPICallError as e:
            logger.error(
                f"Failed to delete instance {identifier}",
                extra={"region": region, "error": str(e)},
            )
            failed[identifier] = e

    _await_operations(operations, region, failed)

    if failed:
        raise PartialBatchError(RESOURCE_TYPE, failed)


def gce_instances(context: GcpContext, client=None) -> ResourceType:
    """Compute Engine instances bound to one project."""
    return ResourceType(
        name=RESOURCE_TYPE,
        list_resources=lambda region: list_instances(context, region, client),
        delete_resources=lambda region, ids: delete_instances(
            context, region, ids, client
        ),
        max_batch_size=0,
        regions=frozenset(context.region_zones),
        description="Compute Engine instances",
    )
