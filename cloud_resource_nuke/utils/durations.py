"""Parsing of Go-style duration strings used by --older-than."""

from __future__ import annotations
import datetime
import re

from ..errors import InvalidDurationError

_UNIT_SECONDS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_COMPONENT = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(value: str) -> datetime.timedelta:
    """
    Parse a duration such as "10m", "8h", "1h30m" or "1.5h".

    The bare string "0" is accepted, as are a leading sign and any sequence
    of number+unit components.
    """
    text = value.strip()
    if not text:
        raise InvalidDurationError(value)

    sign = 1
    if text[0] in "+-":
        sign = -1 if text[0] == "-" else 1
        text = text[1:]

    if text == "0":
        return datetime.timedelta(0)

    total = 0.0
    position = 0
    while position < len(text):
        match = _COMPONENT.match(text, position)
        if not match:
            raise InvalidDurationError(value)
        total += float(match.group(1)) * _UNIT_SECONDS[match.group(2)]
        position = match.end()

    if position == 0:
        raise InvalidDurationError(value)

    return datetime.timedelta(seconds=sign * total)


def cutoff_from_duration(
    value: str, now: datetime.datetime | None = None
) -> datetime.datetime:
    """Convert an age filter into the absolute cutoff: now minus the duration."""
    if now is None:
        now = datetime.datetime.now(datetime.timezone.utc)
    return now - parse_duration(value)
