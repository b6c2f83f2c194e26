"""Region enumeration contract."""

from __future__ import annotations
from typing import Protocol


class RegionEnumerator(Protocol):
    """Resolves the enabled regions of an account or project."""

    def enabled_regions(self) -> list[str]:
        """Return enabled region names, raising if they cannot be determined."""
        ...
