"""
Service layer for results (the result accessor and the lock/update workflows).

Results of a pin are recomputed on every update until a validation code is
generated for it. From then on they are frozen: every write of the stored
results is a single conditional UPDATE that only matches while no code
exists, so a concurrent lock and update cannot interleave into a state where
results changed after the code was issued.
"""
import json
import logging
import random
from datetime import datetime, timezone

from sqlalchemy import select, update as sql_update
from sqlalchemy.orm import Session as DBSession

from selfassessment.engine import (
    AlreadyLocked,
    ResultUnavailable,
    TestResult,
    calculate_results,
    flatten_results,
    generate_validation_code,
)
from selfassessment.models.db.participant import Participant
from selfassessment.services import course_service, journal_service
from selfassessment.services.pincode_service import get_participant
from selfassessment.utils import storage_errors

logger = logging.getLogger(__name__)


def get_result(db: DBSession, pin: int) -> dict[str, object]:
    """Get stored results and validation code of a pin."""
    participant = get_participant(db, pin)
    result: dict[str, object] = {"tests": participant.result_tests}
    if participant.validation_code:
        result["validationCode"] = participant.validation_code
    return result


def put_result(db: DBSession, pin: int, tests: list[TestResult]) -> bool:
    """
    Store the results of a pin unless they are locked.

    Returns:
        True if the results were written, False if a validation code exists.
    """
    payload = json.dumps([test.model_dump(by_alias=True) for test in tests])
    with storage_errors(db, f"store results {pin}"):
        written = db.execute(
            sql_update(Participant)
            .where(Participant.pin == pin, Participant.validation_code.is_(None))
            .values(result_tests_json=payload, result_updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        ).rowcount
        db.commit()
    return written > 0


def _stored_code(db: DBSession, pin: int) -> str | None:
    with storage_errors(db, f"load validation code {pin}"):
        return db.execute(
            select(Participant.validation_code).where(Participant.pin == pin)
        ).scalar_one_or_none()


def update(db: DBSession, pin: int) -> list[TestResult]:
    """
    Recalculate and store the results of a pin from its journal.

    Raises:
        AlreadyLocked: if a validation code exists; stored results are untouched.
        ResultUnavailable: if the journal references a test or log entry that
            does not exist.
    """
    participant = get_participant(db, pin)
    if participant.is_locked:
        logger.warning(f"Results for pin: {pin} are already locked, not updating them")
        raise AlreadyLocked(pin)

    minimal = journal_service.get_minimal_structure(db, pin)
    config = course_service.get_course_config(db, minimal.course, minimal.language)
    journal = journal_service.get_journal(db, pin)

    result_sets = calculate_results(config, journal)
    if result_sets is None:
        raise ResultUnavailable(f"Could not calculate results for pin {pin}")

    tests = flatten_results(result_sets)
    if not put_result(db, pin, tests):
        # locked between the check above and the write
        logger.warning(f"Results for pin: {pin} were locked during the update")
        raise AlreadyLocked(pin)

    logger.info(f"Updated result for pin: {pin}")
    return tests


def lock(db: DBSession, pin: int, rng: random.Random | None = None) -> str:
    """
    Generate the validation code of a pin, freezing its results.
    Idempotent: an existing code is returned unchanged.
    """
    participant = get_participant(db, pin)
    if participant.validation_code:
        logger.warning(f"Validation code already generated for pin: {pin}, using existing code")
        return participant.validation_code

    minimal = journal_service.get_minimal_structure(db, pin)
    config = course_service.get_course_config(db, minimal.course, minimal.language)
    code = generate_validation_code(config.validation_schema, rng)

    with storage_errors(db, f"store validation code {pin}"):
        written = db.execute(
            sql_update(Participant)
            .where(Participant.pin == pin, Participant.validation_code.is_(None))
            .values(validation_code=code)
            .execution_options(synchronize_session=False)
        ).rowcount
        db.commit()

    if not written:
        # another lock call won the race, its code stands
        code = _stored_code(db, pin)
        logger.warning(f"Validation code for pin: {pin} was generated concurrently")
        return code

    logger.info(f"Locked and generated validation code for pin: {pin}")
    return code
