"""
Suggestions component - autocomplete candidate filtering.

Key behaviors:
- Word-start matching: every query word must be a prefix of some
  candidate word, case-insensitively, in any order
- An empty query matches every candidate
- Results keep the candidates' original order (no ranking)
- Auto-select is reported when exactly one candidate remains

Invariants:
- Filtering is idempotent for an unchanged query
- The component never mutates form state or the candidate list
"""

from __future__ import annotations

from collections.abc import Sequence

from src.components.suggestions.models import FilterInput, FilterOutput, SuggestionError
from src.components.suggestions.ports import CatalogPort


def split_words(text: str) -> list[str]:
    """Lowercase, whitespace-delimited words. Blank text has no words."""
    return (text or "").lower().split()


def match_word_start(candidate: str, query: str) -> bool:
    query_words = split_words(query)
    candidate_words = split_words(candidate)
    return all(
        any(word.startswith(query_word) for word in candidate_words)
        for query_word in query_words
    )


def filter_candidates(candidates: Sequence[str], query: str) -> list[str]:
    """Candidates matching `query`, in their original relative order."""
    return [candidate for candidate in candidates if match_word_start(candidate, query)]


def should_auto_select(filtered: Sequence[str]) -> bool:
    return len(filtered) == 1


def run_filter(inp: FilterInput, *, catalog: CatalogPort) -> FilterOutput:
    """
    Filter a catalog list for the current query.

    Args:
        inp: Catalog list name and the typed query.
        catalog: Candidate list source.

    Returns:
        FilterOutput with matches and the auto-select decision.
    """
    if not catalog.has_list(inp.field):
        return FilterOutput(
            errors=[
                SuggestionError(
                    code="UNKNOWN_FIELD",
                    message=f"No candidate list named '{inp.field}'",
                    field=inp.field,
                )
            ],
            success=False,
        )

    matches = filter_candidates(catalog.get_options(inp.field), inp.query)
    auto_select = should_auto_select(matches)
    return FilterOutput(
        matches=tuple(matches),
        auto_select=auto_select,
        selected=matches[0] if auto_select else None,
    )
