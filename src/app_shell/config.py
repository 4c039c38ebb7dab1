import logging
import os
import sys
from pathlib import Path

from src.components.validation import DEFAULT_FIELD_RULES, FieldKind, FieldRule
from src.rules.loader import load_rules
from src.rules.models import IntakeRules

logger = logging.getLogger(__name__)

DEFAULT_RULES_PATH = "rules.yaml"
RULES_PATH_ENV = "INTAKE_RULES_PATH"


def resolve_rules_path(explicit: str | None = None) -> Path:
    """Explicit path wins, then $INTAKE_RULES_PATH, then ./rules.yaml."""
    return Path(explicit or os.environ.get(RULES_PATH_ENV) or DEFAULT_RULES_PATH)


def load_checked_rules(path: Path) -> IntakeRules:
    """
    Load rules before startup, exiting with status 1 if they are unusable.
    """
    try:
        rules = load_rules(path)
    except FileNotFoundError:
        logger.error(f"Rules file {path} not found.")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Rules file {path} is invalid: {e}")
        sys.exit(1)

    logger.info("Rules loaded from %s", path)
    return rules


def field_rules_from(rules: IntakeRules) -> tuple[FieldRule, ...]:
    """
    Built-in field table with the rules file's `form_fields` applied.

    An entry for an existing field id replaces that rule; new ids are appended.
    """
    overrides = {
        name: FieldRule(
            field=name,
            label=spec.label,
            required=spec.required,
            min_length=spec.min_length,
            max_length=spec.max_length,
            kind=FieldKind(spec.kind),
            options_key=spec.options,
            message=spec.message,
        )
        for name, spec in rules.form_fields.items()
    }

    merged = [overrides.pop(rule.field, rule) for rule in DEFAULT_FIELD_RULES]
    merged.extend(overrides.values())
    return tuple(merged)
