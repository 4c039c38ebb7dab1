from pathlib import Path

import pytest

from src.adapters.catalog import RulesCatalog
from src.rules.loader import load_rules
from src.rules.models import IntakeRules

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def rules_path() -> Path:
    """The rules file shipped at the project root."""
    return PROJECT_ROOT / "rules.yaml"


@pytest.fixture
def rules(rules_path: Path) -> IntakeRules:
    return load_rules(rules_path)


@pytest.fixture
def catalog(rules: IntakeRules) -> RulesCatalog:
    return RulesCatalog(rules)
