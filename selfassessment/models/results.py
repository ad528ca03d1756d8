"""Result-related Pydantic models."""
from pydantic import BaseModel, Field

from selfassessment.engine.results import TestResult


class ResultResponse(BaseModel):
    """Model for stored results of a pin."""

    tests: list[TestResult] = Field(default_factory=list)
    validationCode: str | None = None


class LockResponse(BaseModel):
    """Model for a lock response."""

    validationCode: str
