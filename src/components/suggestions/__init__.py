"""
Suggestions component - autocomplete filtering and auto-select.
"""

from .component import (
    filter_candidates,
    match_word_start,
    run_filter,
    should_auto_select,
    split_words,
)
from .models import FilterInput, FilterOutput, SuggestionError
from .ports import CatalogPort

__all__ = [
    # Entry points
    "run_filter",
    # Pure functions
    "filter_candidates",
    "match_word_start",
    "should_auto_select",
    "split_words",
    # Models
    "FilterInput",
    "FilterOutput",
    "SuggestionError",
    # Ports
    "CatalogPort",
]
