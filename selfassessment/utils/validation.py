"""Validation utilities."""
from fastapi import HTTPException

from selfassessment.config import PIN_LENGTH


def validate_pin(pin: int) -> int:
    """Validate a participant pin (positive, at most PIN_LENGTH digits)."""
    if isinstance(pin, bool) or not isinstance(pin, int):
        raise HTTPException(status_code=400, detail="pin is required")
    if pin <= 0 or pin >= 10**PIN_LENGTH:
        raise HTTPException(status_code=400, detail="Invalid pin")
    return pin


def validate_name(name: str, value: str) -> str:
    """Validate a course name or language tag."""
    cleaned = value.strip() if isinstance(value, str) else ""
    if not cleaned:
        raise HTTPException(status_code=400, detail=f"{name} is required")
    if "/" in cleaned or "\\" in cleaned:
        raise HTTPException(status_code=400, detail=f"Invalid {name}")
    return cleaned
