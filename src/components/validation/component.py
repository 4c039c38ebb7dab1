"""
Intake field validation component.

Functional core for the patient intake form: birth date and postal code
predicates, the per-field rule registry and whole-form validation.

Key behaviors:
- Predicates return bool and never raise
- Birth dates are checked against an injected `today`, never the system clock
- Form validation reports every failing field, then cross-field rules

Invariants:
- Feb 29 is accepted only in leap years
- A birth date equal to today is valid; a later one is not
- The oldest valid birth year is today.year - max_age_years (inclusive)
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from datetime import MINYEAR, date, datetime

from src.components.validation.models import (
    DEFAULT_MAX_AGE_YEARS,
    BirthDate,
    FieldKind,
    FieldRule,
    FormValidationOutput,
    ValidateFieldInput,
    ValidateFieldOutput,
    ValidateFormInput,
    ValidationContext,
    ValidationError,
)
from src.components.validation.ports import CatalogPort, ClockPort

logger = logging.getLogger(__name__)

# --- Patterns ---

BIRTH_DATE_PATTERN = re.compile(r"[0-9]{2}-[0-9]{2}-[0-9]{4}")
US_POSTAL_CODE_PATTERN = re.compile(r"[0-9]{5}(?:-[0-9]{4})?")
EMAIL_REGEX = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@"
    r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)+$"
)
PHONE_FORMATTING = re.compile(r"[\s().+-]")

_DAYS_IN_MONTH = {
    1: 31,
    2: 28,
    3: 31,
    4: 30,
    5: 31,
    6: 30,
    7: 31,
    8: 31,
    9: 30,
    10: 31,
    11: 30,
    12: 31,
}


# --- Birth Date ---


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(month: int, year: int) -> int:
    """Number of days in `month` of `year`. Raises KeyError for an invalid month."""
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_IN_MONTH[month]


def matches_birth_date_format(text: str) -> bool:
    """Literal MM-DD-YYYY shape check, run before `is_valid_birth_date`."""
    return BIRTH_DATE_PATTERN.fullmatch(text or "") is not None


def _parse_int(part: str) -> int | None:
    if not part or not part.isascii() or not part.isdigit():
        return None
    return int(part)


def parse_birth_date(text: str) -> BirthDate | None:
    """Split an MM-DD-YYYY string into its parts; None if any part is not a number."""
    parts = (text or "").split("-")
    if len(parts) != 3:
        return None

    month, day, year = (_parse_int(p) for p in parts)
    if month is None or day is None or year is None:
        return None
    return BirthDate(month=month, day=day, year=year)


def is_valid_birth_date(
    text: str,
    today: date | datetime,
    *,
    max_age_years: int = DEFAULT_MAX_AGE_YEARS,
) -> bool:
    """
    Check an MM-DD-YYYY birth date against `today`.

    Args:
        text: Date string, already known to match MM-DD-YYYY.
        today: Current date (or date and time), supplied by the caller.
        max_age_years: Size of the allowed window of birth years.

    Returns:
        True if the date exists, lies within the window and is not in the future.
    """
    if isinstance(today, datetime):
        today = today.date()

    parsed = parse_birth_date(text)
    if parsed is None:
        return False

    current_year = today.year
    min_year = max(current_year - max_age_years, MINYEAR)
    if parsed.year > current_year or parsed.year < min_year:
        return False

    if parsed.month < 1 or parsed.month > 12:
        return False

    if parsed.day < 1 or parsed.day > days_in_month(parsed.month, parsed.year):
        return False

    return parsed.as_date() <= today


# --- Other Field Predicates ---


def is_valid_us_postal_code(text: str) -> bool:
    """US ZIP (12345) or ZIP+4 (12345-6789), format only."""
    return US_POSTAL_CODE_PATTERN.fullmatch(text or "") is not None


def is_valid_email(text: str) -> bool:
    normalized = (text or "").strip()
    if not normalized or len(normalized) > 254:
        return False
    return EMAIL_REGEX.match(normalized) is not None


def is_valid_us_phone(text: str) -> bool:
    """Ten digit US number, optionally prefixed with the country code 1."""
    digits = PHONE_FORMATTING.sub("", text or "")
    if not digits.isascii() or not digits.isdigit():
        return False
    if len(digits) == 11:
        return digits.startswith("1")
    return len(digits) == 10


def length_between(text: str, min_length: int | None, max_length: int | None) -> bool:
    length = len((text or "").strip())
    if min_length is not None and length < min_length:
        return False
    if max_length is not None and length > max_length:
        return False
    return True


def is_one_of(text: str, options: Iterable[str]) -> bool:
    return text in set(options)


# --- Field Rule Registry ---

FieldValidator = Callable[[str | None, ValidationContext], list[ValidationError]]

DEFAULT_FIELD_RULES: tuple[FieldRule, ...] = (
    FieldRule(
        field="physician",
        label="Physician",
        required=True,
        options_key="physicians",
        message="You must select a valid option for Physician",
    ),
    FieldRule(
        field="referring_provider",
        label="Referring Provider",
        required=True,
        options_key="referring_providers",
        message="You must select a valid option for Referring Provider",
    ),
    FieldRule(field="first_name", label="First name", required=True, min_length=2, max_length=50),
    FieldRule(field="middle_name", label="Middle name"),
    FieldRule(field="last_name", label="Last name", required=True, min_length=2, max_length=50),
    FieldRule(field="mobile_number", label="Mobile number", kind=FieldKind.PHONE),
    FieldRule(field="home_number", label="Home number", kind=FieldKind.PHONE),
    FieldRule(
        field="email",
        label="Email",
        required=True,
        kind=FieldKind.EMAIL,
        message="Invalid email address",
    ),
    FieldRule(
        field="preferred_contact_method",
        label="Preferred contact method",
        required=True,
        options_key="contact_methods",
    ),
    FieldRule(
        field="birth_sex",
        label="Birth sex",
        required=True,
        options_key="birth_sex_options",
        message="Invalid option for Birth Sex",
    ),
    FieldRule(
        field="date_of_birth",
        label="Date of birth",
        required=True,
        kind=FieldKind.BIRTH_DATE,
    ),
    FieldRule(
        field="address_line_1",
        label="Address line 1",
        required=True,
        min_length=5,
        message="Please enter a valid address",
    ),
    FieldRule(
        field="city",
        label="City",
        required=True,
        min_length=2,
        max_length=30,
        message="Enter a valid city name",
    ),
    FieldRule(
        field="state",
        label="State",
        required=True,
        min_length=2,
        options_key="us_states",
        message="Enter a valid state name",
    ),
    FieldRule(
        field="postal_code",
        label="Postal code",
        required=True,
        kind=FieldKind.POSTAL_CODE,
        message="Enter a valid US postal code",
    ),
    FieldRule(
        field="primary_insurance_company",
        label="Primary insurance company",
        required=True,
        options_key="insurance_companies",
        message="Invalid Insurance Company",
    ),
    FieldRule(
        field="primary_insurance_member_id",
        label="Primary insurance member ID",
        required=True,
        min_length=5,
        message="Invalid Insurance Member ID",
    ),
    FieldRule(
        field="secondary_insurance_company",
        label="Secondary insurance company",
        options_key="insurance_companies",
        message="Invalid Insurance Company",
    ),
    FieldRule(field="secondary_insurance_member_id", label="Secondary insurance member ID"),
)


def _default_message(rule: FieldRule, code: str) -> str:
    if code == "REQUIRED":
        return f"{rule.label} is required"
    if code == "TOO_SHORT":
        return f"{rule.label} must be at least {rule.min_length} characters"
    if code == "TOO_LONG":
        return f"{rule.label} must be at most {rule.max_length} characters"
    if code == "INVALID_OPTION":
        return f"Invalid option for {rule.label}"
    if code == "INVALID_DATE_FORMAT":
        return "Date must be in mm-dd-yyyy format"
    if code == "INVALID_BIRTH_DATE":
        return "Invalid date of birth"
    if code == "INVALID_POSTAL_CODE":
        return "Enter a valid US postal code"
    if code == "INVALID_EMAIL":
        return "Invalid email address"
    if code == "INVALID_PHONE":
        return f"{rule.label} must be a valid US number"
    return f"Invalid {rule.label}"


def _error(rule: FieldRule, code: str) -> ValidationError:
    return ValidationError(
        code=code,
        message=rule.message or _default_message(rule, code),
        field=rule.field,
    )


def _check_kind(rule: FieldRule, value: str, ctx: ValidationContext) -> ValidationError | None:
    if rule.kind is FieldKind.EMAIL and not is_valid_email(value):
        return _error(rule, "INVALID_EMAIL")
    if rule.kind is FieldKind.PHONE and not is_valid_us_phone(value):
        return _error(rule, "INVALID_PHONE")
    if rule.kind is FieldKind.POSTAL_CODE and not is_valid_us_postal_code(value):
        return _error(rule, "INVALID_POSTAL_CODE")
    if rule.kind is FieldKind.BIRTH_DATE:
        # Shape errors are reported separately from calendar errors.
        if not matches_birth_date_format(value):
            return _error(rule, "INVALID_DATE_FORMAT")
        if not is_valid_birth_date(value, ctx.today, max_age_years=ctx.max_age_years):
            return _error(rule, "INVALID_BIRTH_DATE")
    return None


def make_field_validator(rule: FieldRule) -> FieldValidator:
    """Build the validator for one rule: required, length, format, then options."""

    def validate(raw: str | None, ctx: ValidationContext) -> list[ValidationError]:
        value = (raw or "").strip()
        if not value:
            if not rule.required:
                return []
            # A blank date fails the MM-DD-YYYY shape check first.
            if rule.kind is FieldKind.BIRTH_DATE:
                return [_error(rule, "INVALID_DATE_FORMAT")]
            return [_error(rule, "REQUIRED")]

        if not length_between(value, rule.min_length, None):
            return [_error(rule, "TOO_SHORT")]
        if not length_between(value, None, rule.max_length):
            return [_error(rule, "TOO_LONG")]

        kind_error = _check_kind(rule, value, ctx)
        if kind_error is not None:
            return [kind_error]

        if rule.options_key is not None and not is_one_of(
            value, ctx.catalog.get_options(rule.options_key)
        ):
            return [_error(rule, "INVALID_OPTION")]

        return []

    return validate


def build_registry(rules: Iterable[FieldRule] = DEFAULT_FIELD_RULES) -> dict[str, FieldValidator]:
    """Map field id to validator, in rule order. Later rules replace earlier ones."""
    return {rule.field: make_field_validator(rule) for rule in rules}


# --- Cross-Field Rules ---

CrossFieldRule = Callable[[Mapping[str, str], ValidationContext], list[ValidationError]]


def require_a_phone_number(
    values: Mapping[str, str], ctx: ValidationContext
) -> list[ValidationError]:
    if values.get("mobile_number") or values.get("home_number"):
        return []
    return [
        ValidationError(
            code="PHONE_REQUIRED",
            message="Either mobile number or home number must be provided",
            field="mobile_number",
        )
    ]


def require_secondary_insurance_company(
    values: Mapping[str, str], ctx: ValidationContext
) -> list[ValidationError]:
    if not values.get("secondary_insurance_member_id") or values.get(
        "secondary_insurance_company"
    ):
        return []
    return [
        ValidationError(
            code="SECONDARY_INSURANCE_COMPANY_REQUIRED",
            message=(
                "Both secondary insurance company and secondary insurance member ID "
                "must be provided if one is filled"
            ),
            field="secondary_insurance_company",
        )
    ]


CROSS_FIELD_RULES: tuple[CrossFieldRule, ...] = (
    require_a_phone_number,
    require_secondary_insurance_company,
)


# --- Form Validation ---


def validate_field(
    field: str,
    value: str | None,
    ctx: ValidationContext,
    registry: Mapping[str, FieldValidator] | None = None,
) -> list[ValidationError]:
    """Validate one field. Raises KeyError for a field with no registered validator."""
    registry = registry if registry is not None else build_registry()
    return registry[field](value, ctx)


def validate_form(
    values: Mapping[str, str | None],
    ctx: ValidationContext,
    registry: Mapping[str, FieldValidator] | None = None,
    cross_field_rules: Iterable[CrossFieldRule] = CROSS_FIELD_RULES,
) -> FormValidationOutput:
    """
    Validate a submission.

    Every registered field is checked (missing keys count as empty), then the
    cross-field rules run over the stripped values. Keys without a validator
    are ignored.
    """
    registry = registry if registry is not None else build_registry()
    stripped = {name: (values.get(name) or "").strip() for name in registry}

    errors: list[ValidationError] = []
    for name, validator in registry.items():
        errors.extend(validator(values.get(name), ctx))
    for cross_rule in cross_field_rules:
        errors.extend(cross_rule(stripped, ctx))

    if errors:
        return FormValidationOutput(is_valid=False, errors=errors)

    cleaned = {name: value for name, value in stripped.items() if value}
    return FormValidationOutput(is_valid=True, cleaned=cleaned)


# --- Component Entry Points ---


def run_validate_field(
    inp: ValidateFieldInput,
    *,
    clock: ClockPort,
    catalog: CatalogPort,
    rules: Iterable[FieldRule] | None = None,
    max_age_years: int = DEFAULT_MAX_AGE_YEARS,
) -> ValidateFieldOutput:
    """
    Validate a single field value.

    Args:
        inp: Field id and raw value.
        clock: Clock port supplying today's date.
        catalog: Candidate lists for option-restricted fields.
        rules: Field rules; defaults to DEFAULT_FIELD_RULES.
        max_age_years: Birth year window.

    Returns:
        ValidateFieldOutput; an unknown field yields an UNKNOWN_FIELD error.
    """
    registry = build_registry(rules if rules is not None else DEFAULT_FIELD_RULES)
    if inp.field not in registry:
        return ValidateFieldOutput(
            field=inp.field,
            errors=[ValidationError("UNKNOWN_FIELD", f"Unknown field: {inp.field}", inp.field)],
            success=False,
        )

    ctx = ValidationContext(today=clock.today(), catalog=catalog, max_age_years=max_age_years)
    errors = validate_field(inp.field, inp.value, ctx, registry)
    return ValidateFieldOutput(field=inp.field, errors=errors, success=len(errors) == 0)


def run_validate_form(
    inp: ValidateFormInput,
    *,
    clock: ClockPort,
    catalog: CatalogPort,
    rules: Iterable[FieldRule] | None = None,
    max_age_years: int = DEFAULT_MAX_AGE_YEARS,
) -> FormValidationOutput:
    """Validate a whole submission against the field rules and cross-field rules."""
    registry = build_registry(rules if rules is not None else DEFAULT_FIELD_RULES)
    ctx = ValidationContext(today=clock.today(), catalog=catalog, max_age_years=max_age_years)

    result = validate_form(inp.values, ctx, registry)
    logger.debug(
        "Validated intake submission: valid=%s errors=%d",
        result.is_valid,
        len(result.errors),
    )
    return result
