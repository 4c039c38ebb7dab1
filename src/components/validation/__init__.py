"""
Validation component - intake form field validation.
"""

from .component import (
    CROSS_FIELD_RULES,
    DEFAULT_FIELD_RULES,
    CrossFieldRule,
    FieldValidator,
    build_registry,
    days_in_month,
    is_leap_year,
    is_one_of,
    is_valid_birth_date,
    is_valid_email,
    is_valid_us_phone,
    is_valid_us_postal_code,
    length_between,
    make_field_validator,
    matches_birth_date_format,
    parse_birth_date,
    require_a_phone_number,
    require_secondary_insurance_company,
    run_validate_field,
    run_validate_form,
    validate_field,
    validate_form,
)
from .models import (
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
from .ports import CatalogPort, ClockPort

__all__ = [
    # Entry points
    "run_validate_field",
    "run_validate_form",
    # Predicates
    "days_in_month",
    "is_leap_year",
    "is_one_of",
    "is_valid_birth_date",
    "is_valid_email",
    "is_valid_us_phone",
    "is_valid_us_postal_code",
    "length_between",
    "matches_birth_date_format",
    "parse_birth_date",
    # Registry
    "CROSS_FIELD_RULES",
    "DEFAULT_FIELD_RULES",
    "CrossFieldRule",
    "FieldValidator",
    "build_registry",
    "make_field_validator",
    "require_a_phone_number",
    "require_secondary_insurance_company",
    "validate_field",
    "validate_form",
    # Models
    "DEFAULT_MAX_AGE_YEARS",
    "BirthDate",
    "FieldKind",
    "FieldRule",
    "FormValidationOutput",
    "ValidateFieldInput",
    "ValidateFieldOutput",
    "ValidateFormInput",
    "ValidationContext",
    "ValidationError",
    # Ports
    "CatalogPort",
    "ClockPort",
]
