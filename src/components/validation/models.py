"""
Validation component models.

Value types, field rules and input/output models for intake form validation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from src.components.validation.ports import CatalogPort

# Oldest allowed birth year is this many years before the current year.
DEFAULT_MAX_AGE_YEARS = 150


# --- Validation Error ---


@dataclass(frozen=True)
class ValidationError:
    """Field validation error with a user-facing message."""

    code: str
    message: str
    field: str | None = None


# --- Value Types ---


@dataclass(frozen=True)
class BirthDate:
    """Calendar date parsed from an MM-DD-YYYY string (not yet range-checked)."""

    month: int
    day: int
    year: int

    def as_date(self) -> date:
        return date(self.year, self.month, self.day)


class FieldKind(Enum):
    """Format check applied to a field on top of its length bounds."""

    TEXT = "text"
    EMAIL = "email"
    PHONE = "phone"
    BIRTH_DATE = "birth_date"
    POSTAL_CODE = "postal_code"


# --- Field Rules ---


@dataclass(frozen=True)
class FieldRule:
    """
    Declarative rule for a single intake form field.

    `options_key` names a catalog list the value must belong to.
    `message` replaces every generated error message for the field.
    """

    field: str
    label: str
    required: bool = False
    min_length: int | None = None
    max_length: int | None = None
    kind: FieldKind = FieldKind.TEXT
    options_key: str | None = None
    message: str | None = None


@dataclass(frozen=True)
class ValidationContext:
    """Everything a field validator may consult besides the value itself."""

    today: date
    catalog: CatalogPort
    max_age_years: int = DEFAULT_MAX_AGE_YEARS


# --- Input Models ---


@dataclass(frozen=True)
class ValidateFieldInput:
    """Input for validating one field."""

    field: str
    value: str | None


@dataclass(frozen=True)
class ValidateFormInput:
    """Input for validating a whole submission."""

    values: Mapping[str, str | None]


# --- Output Models ---


@dataclass(frozen=True)
class ValidateFieldOutput:
    """Output for single field validation."""

    field: str
    errors: list[ValidationError] = field(default_factory=list)
    success: bool = True


@dataclass(frozen=True)
class FormValidationOutput:
    """Output for form validation; `cleaned` is only populated when valid."""

    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    cleaned: dict[str, str] = field(default_factory=dict)

    def errors_by_field(self) -> dict[str, list[str]]:
        grouped: dict[str, list[str]] = {}
        for error in self.errors:
            grouped.setdefault(error.field or "", []).append(error.message)
        return grouped
