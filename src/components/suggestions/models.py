"""
Suggestions component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SuggestionError:
    """Suggestion lookup error."""

    code: str
    message: str
    field: str | None = None


# --- Input Models ---


@dataclass(frozen=True)
class FilterInput:
    """Input for filtering the candidates of an autocomplete field."""

    field: str  # catalog list name, e.g. "physicians"
    query: str = ""


# --- Output Models ---


@dataclass(frozen=True)
class FilterOutput:
    """
    Filter result for an autocomplete field.

    `selected` carries the single remaining candidate when `auto_select` is
    set; the form layer decides whether to write it into the field.
    """

    matches: tuple[str, ...] = ()
    auto_select: bool = False
    selected: str | None = None
    errors: list[SuggestionError] = field(default_factory=list)
    success: bool = True
