"""Utility functions shared by the engine and the provider plugins."""

from .aws_helpers import (
    convert_tags_to_dict,
    get_error_code,
    is_rate_limit_error,
)
from .durations import parse_duration, cutoff_from_duration
from .logging_config import get_logger

__all__ = [
    "convert_tags_to_dict",
    "get_error_code",
    "is_rate_limit_error",
    "parse_duration",
    "cutoff_from_duration",
    "get_logger",
]
