from pathlib import Path

import yaml
from pydantic import ValidationError

from blogfront.rules.models import Rules


def extract_yaml_block(content: str) -> str:
    """
    Return the first ```yaml fenced block, or the whole text if there is none.

    Lets the rules live inside a markdown document next to their prose.
    """
    yaml_lines: list[str] = []
    in_block = False

    for line in content.splitlines():
        stripped = line.strip()
        if not in_block and stripped.startswith("```yaml"):
            in_block = True
            continue
        if in_block and stripped.startswith("```"):
            return "\n".join(yaml_lines)
        if in_block:
            yaml_lines.append(line)

    # Unterminated fence still counts as a block
    return "\n".join(yaml_lines) if in_block else content


def parse_rules(content: str) -> Rules:
    """
    Parse and validate rules from YAML text.
    Raises ValueError on YAML syntax or schema errors.
    """
    try:
        data = yaml.safe_load(extract_yaml_block(content))
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in rules file: {e}") from e

    try:
        return Rules.model_validate(data)
    except ValidationError as e:
        # Re-raise with a clear message for the caller/logs
        raise ValueError(f"Rules validation failed:\n{e}") from e


def load_rules(path: Path | str) -> Rules:
    """
    Load and validate the rules file.
    Raises FileNotFoundError if file missing.
    Raises ValueError if YAML or schema invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Rules file not found at: {path}")

    return parse_rules(path.read_text(encoding="utf-8"))
