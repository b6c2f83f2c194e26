"""Shared plumbing for AWS resource type plugins."""

from __future__ import annotations
import datetime
from typing import Callable, Iterable

import boto3
from botocore.exceptions import ClientError, WaiterError

from ..errors import PartialBatchError, RateLimitedError
from ..models.config import WAITER_DELAY_SECONDS, WAITER_MAX_ATTEMPTS
from ..utils import get_error_code, get_logger
from ..utils.aws_helpers import RATE_LIMIT_ERROR_CODES

logger = get_logger()


def get_client(service_name: str, region: str):
    """Create a client on its own boto3 session, so listing threads never share one."""
    session = boto3.session.Session()
    return session.client(service_name, region_name=region)


def waiter_config() -> dict[str, int]:
    return {"Delay": WAITER_DELAY_SECONDS, "MaxAttempts": WAITER_MAX_ATTEMPTS}


def parse_aws_timestamp(value: str | datetime.datetime | None) -> datetime.datetime | None:
    """Normalize ISO strings (e.g. AMI CreationDate) and datetimes to aware UTC datetimes."""
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    return value


def delete_each(
    resource_type: str,
    identifiers: Iterable[str],
    delete_one: Callable[[str], None],
    not_found_codes: Iterable[str] = (),
    is_not_found: Callable[[ClientError], bool] | None = None,
    wait: Callable[[list[str]], None] | None = None,
) -> list[str]:
    """
    Delete identifiers one call at a time.

    Identifiers that are already gone count as deleted. Throttling stops the
    pass: ``wait`` runs for what was deleted so far and RateLimitedError
    carries those identifiers so a retry only sends the rest. Other failures
    are collected and raised together as PartialBatchError after the rest of
    the batch has been attempted. ``wait`` runs for every deleted identifier
    before returning them.
    """
    not_found_codes = set(not_found_codes)
    deleted = []
    failed: dict[str, Exception] = {}

    for identifier in identifiers:
        try:
            delete_one(identifier)
        except ClientError as e:
            error_code = get_error_code(e)
            if error_code in RATE_LIMIT_ERROR_CODES:
                logger.warning(
                    f"Throttled while deleting {resource_type} {identifier}",
                    extra={"resource_type": resource_type, "deleted": len(deleted)},
                )
                if deleted and wait:
                    wait(deleted)
                raise RateLimitedError(str(e), completed=deleted) from e
            if error_code in not_found_codes or (is_not_found and is_not_found(e)):
                logger.info(
                    f"{resource_type} {identifier} already deleted",
                    extra={"resource_type": resource_type, "error_code": error_code},
                )
                deleted.append(identifier)
                continue
            logger.error(
                f"Failed to delete {resource_type} {identifier}",
                extra={
                    "resource_type": resource_type,
                    "error_code": error_code,
                    "error": str(e),
                },
            )
            failed[identifier] = e
            continue
        except (WaiterError, LookupError) as e:
            logger.error(
                f"Failed to delete {resource_type} {identifier}",
                extra={"resource_type": resource_type, "error": str(e)},
            )
            failed[identifier] = e
            continue

        logger.info(f"Deleted {resource_type} {identifier}")
        deleted.append(identifier)

    if deleted and wait:
        wait(deleted)
    if failed:
        raise PartialBatchError(resource_type, failed)
    return deleted
