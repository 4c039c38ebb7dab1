import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from src.adapters.catalog import RulesCatalog
from src.adapters.clock import FixedClock, SystemClock
from src.app_shell.config import field_rules_from, load_checked_rules, resolve_rules_path
from src.components.suggestions import FilterInput, run_filter
from src.components.validation import ValidateFormInput, run_validate_form
from src.rules.models import IntakeRules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")


def _read_submission(path: Path) -> dict[str, str | None]:
    if not path.exists():
        logger.error(f"Submission file {path} not found.")
        sys.exit(1)

    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        logger.error(f"Submission file {path} is not valid JSON: {e}")
        sys.exit(1)

    if not isinstance(data, dict):
        logger.error("Submission must be a JSON object of field values.")
        sys.exit(1)

    return {str(k): None if v is None else str(v) for k, v in data.items()}


def handle_check(rules: IntakeRules, args: argparse.Namespace) -> None:
    values = _read_submission(Path(args.submission))

    if args.today:
        try:
            clock = FixedClock(date.fromisoformat(args.today))
        except ValueError:
            logger.error(f"--today must be YYYY-MM-DD, got {args.today!r}")
            sys.exit(1)
    else:
        clock = SystemClock()

    result = run_validate_form(
        ValidateFormInput(values=values),
        clock=clock,
        catalog=RulesCatalog(rules),
        rules=field_rules_from(rules),
        max_age_years=rules.birth_date.max_age_years,
    )

    if result.is_valid:
        print("Submission is valid.")
        return

    for field_name, messages in result.errors_by_field().items():
        for message in messages:
            print(f"{field_name}: {message}")
    sys.exit(1)


def handle_suggest(rules: IntakeRules, args: argparse.Namespace) -> None:
    catalog = RulesCatalog(rules)
    result = run_filter(
        FilterInput(field=args.field, query=" ".join(args.query)),
        catalog=catalog,
    )

    if not result.success:
        for error in result.errors:
            logger.error(error.message)
        logger.error(f"Available lists: {', '.join(catalog.keys())}")
        sys.exit(1)

    for match in result.matches:
        print(match)
    if result.auto_select:
        print(f"auto-select: {result.selected}")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Patient intake form checks")
    parser.add_argument("--rules", help="Path to rules YAML (default: rules.yaml)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # check
    check_parser = subparsers.add_parser("check", help="Validate a JSON submission")
    check_parser.add_argument("submission", help="Path to a JSON object of field values")
    check_parser.add_argument("--today", help="Override today's date (YYYY-MM-DD)")

    # suggest
    suggest_parser = subparsers.add_parser("suggest", help="Filter an autocomplete list")
    suggest_parser.add_argument("field", help="Candidate list (physicians, us_states, ...)")
    suggest_parser.add_argument("query", nargs="*", help="Typed text")

    args = parser.parse_args(argv)

    rules = load_checked_rules(resolve_rules_path(args.rules))

    if args.command == "check":
        handle_check(rules, args)
    elif args.command == "suggest":
        handle_suggest(rules, args)


if __name__ == "__main__":
    main()
