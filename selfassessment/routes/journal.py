"""Journal endpoints."""
import random
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session as DbSession

from selfassessment.database import get_db
from selfassessment.dependencies import get_rng
from selfassessment.models import (
    JournalLogSaveRequest,
    JournalResponse,
    JournalSaveRequest,
    JournalStartRequest,
    JournalStructureSaveRequest,
    PinRequest,
)
from selfassessment.services import journal_service
from selfassessment.utils import validate_name, validate_pin

router = APIRouter(prefix="/api/v1/journal", tags=["journal"])


@router.post("/start", response_model=JournalResponse)
def start_journal(
    payload: JournalStartRequest,
    db: Annotated[DbSession, Depends(get_db)],
    rng: Annotated[random.Random, Depends(get_rng)],
) -> dict[str, object]:
    """Start a course: build a fresh journal structure for the pin."""
    journal = journal_service.start_journal(
        db,
        validate_pin(payload.pin),
        validate_name("course", payload.course),
        validate_name("language", payload.language),
        rng,
    )
    return {
        "structure": journal.structure.model_dump(mode="json", by_alias=True),
        "log": journal.log.to_wire(),
    }


@router.post("/load", response_model=JournalResponse)
def load_journal(
    payload: PinRequest,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Load the full journal of a pin, structure rebuilt from the course config."""
    journal = journal_service.get_journal(db, validate_pin(payload.pin))
    return {
        "structure": journal.structure.model_dump(mode="json", by_alias=True),
        "log": journal.log.to_wire(),
    }


@router.post("/save")
def save_journal(
    payload: JournalSaveRequest,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, str]:
    """Save minimal structure and log of a pin."""
    journal_service.put_journal(
        db, validate_pin(payload.pin), payload.structure, payload.log.model_dump()
    )
    return {"status": "saved"}


@router.post("/log/load")
def load_journal_log(
    payload: PinRequest,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Load the journal log of a pin in wire form."""
    return journal_service.get_log(db, validate_pin(payload.pin)).to_wire()


@router.post("/log/save")
def save_journal_log(
    payload: JournalLogSaveRequest,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, str]:
    """Save the journal log of a pin."""
    journal_service.put_log(db, validate_pin(payload.pin), payload.log.model_dump())
    return {"status": "saved"}


@router.post("/structure/load")
def load_journal_structure(
    payload: PinRequest,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Load the minimal journal structure of a pin."""
    minimal = journal_service.get_minimal_structure(db, validate_pin(payload.pin))
    return minimal.model_dump(by_alias=True)


@router.post("/structure/save")
def save_journal_structure(
    payload: JournalStructureSaveRequest,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, str]:
    """Save the minimal journal structure of a pin."""
    journal_service.put_structure(db, validate_pin(payload.pin), payload.structure)
    return {"status": "saved"}
