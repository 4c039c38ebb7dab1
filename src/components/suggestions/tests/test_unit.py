"""
Suggestions component unit tests.

Word-start filtering, order preservation, idempotence and auto-select.
"""

from __future__ import annotations

import pytest

from src.components.suggestions import (
    FilterInput,
    filter_candidates,
    match_word_start,
    run_filter,
    should_auto_select,
    split_words,
)

PHYSICIANS = ["Dr. John Smith", "Dr. Jane Roe", "Dr. Sarah Johnson", "Dr. Robert Chen"]


class MockCatalog:
    """In-memory candidate lists."""

    def __init__(self, lists: dict[str, list[str]]) -> None:
        self._lists = lists

    def has_list(self, key: str) -> bool:
        return key in self._lists

    def get_options(self, key: str) -> list[str]:
        return list(self._lists[key])


@pytest.fixture
def catalog() -> MockCatalog:
    return MockCatalog(
        {
            "physicians": PHYSICIANS,
            "us_states": ["New Hampshire", "New Jersey", "New Mexico", "New York", "Texas"],
        }
    )


# --- Word Splitting ---


class TestSplitWords:
    def test_lowercases(self) -> None:
        assert split_words("Dr. John SMITH") == ["dr.", "john", "smith"]

    def test_collapses_whitespace(self) -> None:
        assert split_words("  jo \t  sm ") == ["jo", "sm"]

    @pytest.mark.parametrize("text", ["", "   ", "\n"])
    def test_blank_has_no_words(self, text: str) -> None:
        assert split_words(text) == []


# --- Matching ---


class TestMatchWordStart:
    def test_words_in_any_order(self) -> None:
        assert match_word_start("Dr. John Smith", "sm jo") is True

    def test_case_insensitive(self) -> None:
        assert match_word_start("Dr. John Smith", "JOHN") is True

    def test_prefix_not_substring(self) -> None:
        assert match_word_start("Dr. John Smith", "mith") is False

    def test_every_query_word_must_match(self) -> None:
        assert match_word_start("Dr. John Smith", "jo xy") is False

    def test_same_candidate_word_can_serve_twice(self) -> None:
        assert match_word_start("Dr. John Smith", "jo joh") is True

    def test_empty_query_matches(self) -> None:
        assert match_word_start("Dr. John Smith", "") is True


# --- Filtering ---


class TestFilterCandidates:
    def test_word_start_query(self) -> None:
        assert filter_candidates(["Dr. John Smith", "Dr. Jane Roe"], "jo sm") == [
            "Dr. John Smith"
        ]
        assert should_auto_select(["Dr. John Smith"]) is True

    def test_empty_query_returns_all_in_order(self) -> None:
        assert filter_candidates(PHYSICIANS, "") == PHYSICIANS

    def test_whitespace_query_returns_all(self) -> None:
        assert filter_candidates(PHYSICIANS, "   ") == PHYSICIANS

    def test_preserves_original_order(self) -> None:
        assert filter_candidates(["AA", "AB", "BA"], "a") == ["AA", "AB"]

    def test_no_reranking_by_match_quality(self) -> None:
        candidates = ["Mary Johnson", "John Adams"]
        assert filter_candidates(candidates, "john") == candidates

    def test_no_match(self) -> None:
        assert filter_candidates(PHYSICIANS, "zz") == []

    def test_filter_is_idempotent(self) -> None:
        for query in ["", "dr", "jo", "jo sm", "r", "zz"]:
            once = filter_candidates(PHYSICIANS, query)
            assert filter_candidates(once, query) == once

    def test_candidates_not_mutated(self) -> None:
        candidates = list(PHYSICIANS)
        filter_candidates(candidates, "jo")
        assert candidates == PHYSICIANS


class TestShouldAutoSelect:
    @pytest.mark.parametrize(
        ("filtered", "expected"),
        [([], False), (["only"], True), (["a", "b"], False)],
    )
    def test_exactly_one(self, filtered: list[str], expected: bool) -> None:
        assert should_auto_select(filtered) is expected


# --- Entry Point ---


class TestRunFilter:
    def test_single_match_is_selected(self, catalog: MockCatalog) -> None:
        out = run_filter(FilterInput(field="physicians", query="jo sm"), catalog=catalog)
        assert out.success is True
        assert out.matches == ("Dr. John Smith",)
        assert out.auto_select is True
        assert out.selected == "Dr. John Smith"

    def test_several_matches(self, catalog: MockCatalog) -> None:
        out = run_filter(FilterInput(field="us_states", query="new"), catalog=catalog)
        assert out.matches == ("New Hampshire", "New Jersey", "New Mexico", "New York")
        assert out.auto_select is False
        assert out.selected is None

    def test_narrowing_to_one(self, catalog: MockCatalog) -> None:
        out = run_filter(FilterInput(field="us_states", query="new y"), catalog=catalog)
        assert out.selected == "New York"

    def test_empty_query_lists_everything(self, catalog: MockCatalog) -> None:
        out = run_filter(FilterInput(field="physicians"), catalog=catalog)
        assert out.matches == tuple(PHYSICIANS)

    def test_unknown_list(self, catalog: MockCatalog) -> None:
        out = run_filter(FilterInput(field="pharmacies", query="cvs"), catalog=catalog)
        assert out.success is False
        assert out.errors[0].code == "UNKNOWN_FIELD"
        assert out.matches == ()
