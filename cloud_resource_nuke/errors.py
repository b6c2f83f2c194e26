"""Exception hierarchy for configuration, discovery and deletion failures."""

from __future__ import annotations
from typing import Iterable


class NukeToolError(Exception):
    """Base class for every error raised by this tool."""


class ConfigurationError(NukeToolError):
    """Invalid operator input, detected before any discovery begins."""


class InvalidFlagError(ConfigurationError):
    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value
        super().__init__(f"Invalid value '{value}' for flag --{name}")


class InvalidResourceTypeError(ConfigurationError):
    def __init__(self, invalid: list[str]):
        self.invalid = invalid
        super().__init__(
            f"Invalid resource types {invalid} specified: "
            "Try --list-resource-types to get list of valid resource types."
        )


class InvalidDurationError(ConfigurationError):
    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid duration '{value}' (examples: 10m, 8h, 1h30m)")


class DuplicateResourceTypeError(ConfigurationError):
    """Two plugins registered under one name, or a broken nuke order."""


class DiscoveryError(NukeToolError):
    """A list call failed; the inventory would be incomplete."""

    def __init__(self, region: str, resource_type: str, cause: Exception):
        self.region = region
        self.resource_type = resource_type
        self.cause = cause
        super().__init__(f"Failed to list {resource_type} in {region}: {cause}")


class RegionsExhaustedError(NukeToolError):
    def __init__(self, attempted: list[str]):
        self.attempted = attempted
        super().__init__(
            f"Could not find any enabled regions: all seed regions exhausted "
            f"({len(attempted)} tried)"
        )


class RateLimitedError(NukeToolError):
    """
    Raised by a plugin when the provider asks to slow down.

    ``completed`` names the identifiers of the batch that were deleted
    before the throttle; they are not sent again.
    """

    def __init__(self, message: str, completed: Iterable[str] = ()):
        self.completed = list(completed)
        super().__init__(message)


class PartialBatchError(NukeToolError):
    """Some identifiers of a batch could not be deleted."""

    def __init__(self, resource_type: str, failed: dict[str, Exception]):
        self.resource_type = resource_type
        self.failed = failed
        details = "; ".join(f"{key}: {error}" for key, error in failed.items())
        super().__init__(
            f"{len(failed)} {resource_type} resource(s) could not be deleted: {details}"
        )
