"""
Catalog adapter backed by the intake rules file.

Exposes the `catalog` section of `IntakeRules` through `CatalogPort`.
"""

from __future__ import annotations

from src.rules.models import IntakeRules


class RulesCatalog:
    def __init__(self, rules: IntakeRules) -> None:
        self._lists: dict[str, list[str]] = rules.catalog.as_lists()

    def has_list(self, key: str) -> bool:
        return key in self._lists

    def get_options(self, key: str) -> list[str]:
        if key not in self._lists:
            raise KeyError(f"Unknown candidate list: {key}")
        # Callers get a copy; the catalog stays read-only.
        return list(self._lists[key])

    def keys(self) -> list[str]:
        return sorted(self._lists)
