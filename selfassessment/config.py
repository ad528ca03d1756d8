"""Application configuration and constants."""
import logging
import os
from pathlib import Path


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Directories
DATA_DIR = Path(os.environ.get("SELFASSESSMENT_DATA_DIR", Path.cwd() / "data"))
DATA_DIR.mkdir(parents=True, exist_ok=True)

# Course configs picked up by the CLI importer, laid out as <course>/<language>.json
COURSES_DIR = Path(os.environ.get("COURSES_DIR", DATA_DIR / "courses"))

# Database
DATABASE_URL = os.environ.get(
    "DATABASE_URL", f"sqlite:///{DATA_DIR / 'selfassessment.db'}"
)

# Pins
PIN_LENGTH = _parse_int_env("PIN_LENGTH", 8)
PIN_CREATE_ATTEMPTS = _parse_int_env("PIN_CREATE_ATTEMPTS", 16)

# Logging
LOG_LEVEL = logging.getLevelName(os.environ.get("LOG_LEVEL", "INFO").upper())
if not isinstance(LOG_LEVEL, int):
    LOG_LEVEL = logging.INFO
