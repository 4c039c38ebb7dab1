"""
Suggestions component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class CatalogPort(Protocol):
    """Read-only candidate lists supplied by configuration."""

    def has_list(self, key: str) -> bool:
        """Check if a candidate list with this name exists."""
        ...

    def get_options(self, key: str) -> list[str]:
        """Get the candidate list in display order."""
        ...
