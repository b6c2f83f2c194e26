"""AWS helper functions."""

from __future__ import annotations
from botocore.exceptions import ClientError

from ..errors import RateLimitedError

# Error codes AWS uses to signal request throttling
RATE_LIMIT_ERROR_CODES = {
    "RequestLimitExceeded",
    "Throttling",
    "ThrottlingException",
    "TooManyRequestsException",
    "RequestThrottled",
    "SlowDown",
}


def convert_tags_to_dict(tags: list[dict[str, str]] | None) -> dict[str, str]:
    """Convert AWS tag list to dictionary."""
    return {tag["Key"]: tag["Value"] for tag in tags} if tags else {}


def get_error_code(error: ClientError) -> str:
    """Extract the AWS error code from a ClientError."""
    return error.response.get("Error", {}).get("Code", "Unknown")


def is_rate_limit_error(error: Exception) -> bool:
    """Check whether a delete failure is a throttling signal rather than a real failure."""
    if isinstance(error, RateLimitedError):
        return True
    if isinstance(error, ClientError):
        return get_error_code(error) in RATE_LIMIT_ERROR_CODES
    return "RequestLimitExceeded" in str(error)
