import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from src.rules.models import IntakeRules

logger = logging.getLogger(__name__)


def _extract_yaml(content: str) -> str:
    """Return the first ```yaml fenced block, or the whole text if there is none."""
    yaml_lines = []
    in_block = False
    found_block = False

    for line in content.splitlines():
        s_line = line.strip()
        if s_line.startswith("```yaml"):
            in_block = True
            found_block = True
            continue
        if in_block and s_line.startswith("```"):
            break
        if in_block:
            yaml_lines.append(line)

    return "\n".join(yaml_lines) if found_block else content


def load_rules(path: Path) -> IntakeRules:
    """
    Load and validate the intake rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if the YAML or the schema is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    with open(path) as f:
        content = f.read()

    try:
        data = yaml.safe_load(_extract_yaml(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Rules file {path} must contain a mapping at the top level")

    try:
        rules = IntakeRules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Rules validation failed:\n{e}") from e

    logger.debug(
        "Loaded rules %s (version %s) from %s",
        rules.project.slug,
        rules.project.rules_version,
        path,
    )
    return rules
