"""Service layer for participant journals (the journal accessor)."""
import logging
import random
from datetime import datetime, timezone
from typing import Any

from fastapi import HTTPException
from pydantic import ValidationError
from sqlalchemy.orm import Session as DBSession

from selfassessment.engine import (
    Journal,
    JournalLog,
    JournalStructure,
    MalformedJournal,
    MinimalStructure,
    build_structure,
    to_minimal,
)
from selfassessment.models.db.participant import JournalRecord
from selfassessment.services import course_service
from selfassessment.services.pincode_service import get_participant
from selfassessment.utils import storage_errors

logger = logging.getLogger(__name__)


def get_journal_record(db: DBSession, pin: int) -> JournalRecord:
    """
    Get the stored journal of a pin.

    Raises:
        HTTPException: 404 if the pin has no journal.
    """
    with storage_errors(db, f"load journal {pin}"):
        record = db.get(JournalRecord, pin)
    if record is None:
        logger.warning(f"No journal for pin: {pin}")
        raise HTTPException(status_code=404, detail="No journal for pin")
    return record


def get_minimal_structure(db: DBSession, pin: int) -> MinimalStructure:
    """Get the persisted minimal structure of a pin."""
    record = get_journal_record(db, pin)
    if record.structure is None:
        raise HTTPException(status_code=404, detail="No journal structure for pin")
    try:
        return MinimalStructure.model_validate(record.structure)
    except ValidationError as e:
        raise MalformedJournal(f"Stored journal structure for pin {pin} is invalid: {e}") from e


def get_structure(db: DBSession, pin: int) -> JournalStructure:
    """Rebuild the full journal structure of a pin from its minimal form."""
    minimal = get_minimal_structure(db, pin)
    config = course_service.get_course_config(db, minimal.course, minimal.language)
    return build_structure(config, minimal)


def get_log(db: DBSession, pin: int) -> JournalLog:
    """Get the journal log of a pin (empty if nothing was answered yet)."""
    record = get_journal_record(db, pin)
    return JournalLog.from_wire(record.log)


def get_journal(db: DBSession, pin: int) -> Journal:
    """Get the full journal (rebuilt structure and log) of a pin."""
    return Journal(structure=get_structure(db, pin), log=get_log(db, pin))


def _check_minimal(db: DBSession, minimal: MinimalStructure) -> None:
    """Reject a minimal structure referencing ids unknown to its course config."""
    config = course_service.get_course_config(db, minimal.course, minimal.language)
    known_sets = {test_set.id for test_set in config.sets}
    known_tests = {test.id for test in config.tests}
    for minimal_set in minimal.sets:
        if minimal_set.set_id not in known_sets:
            raise HTTPException(
                status_code=400, detail=f"Unknown set id: {minimal_set.set_id}"
            )
        unknown = [test_id for test_id in minimal_set.tests if test_id not in known_tests]
        if unknown:
            raise HTTPException(status_code=400, detail=f"Unknown test ids: {unknown}")


def _upsert(
    db: DBSession,
    pin: int,
    minimal: MinimalStructure | None = None,
    log: JournalLog | None = None,
) -> JournalRecord:
    get_participant(db, pin)
    with storage_errors(db, f"save journal {pin}"):
        record = db.get(JournalRecord, pin)
        if record is None:
            record = JournalRecord(pin=pin)
            db.add(record)
        if minimal is not None:
            record.course = minimal.course
            record.language = minimal.language
            record.structure = minimal.model_dump(by_alias=True)
        if log is not None:
            record.log = log.to_wire()
        record.last_changed = datetime.now(timezone.utc)
        db.commit()
        db.refresh(record)
    return record


def put_journal(
    db: DBSession, pin: int, minimal: MinimalStructure, log: dict[str, Any]
) -> JournalRecord:
    """Store minimal structure and log (wire form) of a pin."""
    _check_minimal(db, minimal)
    record = _upsert(db, pin, minimal=minimal, log=JournalLog.from_wire(log))
    logger.info(f"Updated journal for pin: {pin}")
    return record


def put_structure(db: DBSession, pin: int, minimal: MinimalStructure) -> JournalRecord:
    """Store the minimal structure of a pin."""
    _check_minimal(db, minimal)
    record = _upsert(db, pin, minimal=minimal)
    logger.info(f"Updated journal structure for pin: {pin}")
    return record


def put_log(db: DBSession, pin: int, log: dict[str, Any]) -> JournalRecord:
    """Store the journal log (wire form) of a pin."""
    record = _upsert(db, pin, log=JournalLog.from_wire(log))
    logger.info(f"Updated journal log for pin: {pin}")
    return record


def start_journal(
    db: DBSession,
    pin: int,
    course: str,
    language: str,
    rng: random.Random | None = None,
) -> Journal:
    """
    Start a course for a pin: draw a fresh structure and an empty log.
    Replaces any journal the pin had before.
    """
    config = course_service.get_course_config(db, course, language)
    structure = build_structure(config, rng=rng)
    log = JournalLog.empty_for(structure)
    _upsert(db, pin, minimal=to_minimal(structure, course, language), log=log)
    logger.info(f"Started course {course}/{language} for pin: {pin}")
    return Journal(structure=structure, log=log)
