"""Journal-related Pydantic models."""
from typing import Any

from pydantic import BaseModel, Field

from selfassessment.engine.journal import MinimalStructure


class LogPair(BaseModel):
    """One ``test id -> answer`` entry of a journal log set."""

    key: int
    val: Any = None


class LogSet(BaseModel):
    maps: list[LogPair] = Field(default_factory=list)


class JournalLogPayload(BaseModel):
    """Journal log in its list-of-pairs wire form."""

    sets: list[LogSet] = Field(default_factory=list)


class JournalStartRequest(BaseModel):
    """Model for starting a course."""

    pin: int
    course: str = Field(..., min_length=1)
    language: str = Field(..., min_length=1)


class JournalSaveRequest(BaseModel):
    """Model for saving a complete journal."""

    pin: int
    structure: MinimalStructure
    log: JournalLogPayload


class JournalLogSaveRequest(BaseModel):
    """Model for saving a journal log."""

    pin: int
    log: JournalLogPayload


class JournalStructureSaveRequest(BaseModel):
    """Model for saving a minimal journal structure."""

    pin: int
    structure: MinimalStructure


class JournalResponse(BaseModel):
    """Full journal: rebuilt structure and log in wire form."""

    structure: dict[str, Any]
    log: JournalLogPayload
