"""Pydantic models."""
from selfassessment.models.courses import ConfigErrorResponse, CourseSummary
from selfassessment.models.journal import (
    JournalLogPayload,
    JournalLogSaveRequest,
    JournalResponse,
    JournalSaveRequest,
    JournalStartRequest,
    JournalStructureSaveRequest,
)
from selfassessment.models.pins import PinRequest, PinResponse
from selfassessment.models.results import LockResponse, ResultResponse

__all__ = [
    "ConfigErrorResponse",
    "CourseSummary",
    "JournalLogPayload",
    "JournalLogSaveRequest",
    "JournalResponse",
    "JournalSaveRequest",
    "JournalStartRequest",
    "JournalStructureSaveRequest",
    "LockResponse",
    "PinRequest",
    "PinResponse",
    "ResultResponse",
]
