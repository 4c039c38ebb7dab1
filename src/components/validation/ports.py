"""
Validation component port definitions.
"""

from __future__ import annotations

from datetime import date
from typing import Protocol


class ClockPort(Protocol):
    """Source of the current date for birth date checks."""

    def today(self) -> date:
        """Return the current local calendar date."""
        ...


class CatalogPort(Protocol):
    """Read-only candidate lists for fields restricted to fixed options."""

    def has_list(self, key: str) -> bool:
        """Check if a candidate list with this name exists."""
        ...

    def get_options(self, key: str) -> list[str]:
        """Get the candidate list in display order."""
        ...
