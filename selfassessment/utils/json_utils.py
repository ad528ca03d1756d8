"""JSON helpers for stored documents and course config files."""
import json
from pathlib import Path
from typing import Any

from selfassessment.engine.errors import ConfigValidationError


def json_dump(payload: object) -> str:
    """Serialize to compact JSON, keeping non-ASCII course texts readable."""
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def json_load(data: str) -> Any:
    return json.loads(data)


def read_config_file(path: Path) -> Any:
    """
    Read a course config document from disk.

    Raises:
        ConfigValidationError: if the file is missing or not valid JSON.
    """
    try:
        return json_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise ConfigValidationError([f"{path}: file not found"]) from None
    except json.JSONDecodeError as e:
        raise ConfigValidationError(
            [f"{path}: not valid JSON: {e.msg} (line {e.lineno}, column {e.colno})"]
        ) from e
