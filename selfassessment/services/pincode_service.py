"""Service layer for participant pins."""
import logging
import random

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session as DBSession

from selfassessment.config import PIN_CREATE_ATTEMPTS, PIN_LENGTH
from selfassessment.engine import StorageError
from selfassessment.models.db.participant import Participant
from selfassessment.utils import storage_errors

logger = logging.getLogger(__name__)


def _random_pin(rng: random.Random) -> int:
    # no leading zero, so every pin has exactly PIN_LENGTH digits
    return rng.randrange(10 ** (PIN_LENGTH - 1), 10**PIN_LENGTH)


def create_pin(db: DBSession, rng: random.Random | None = None) -> int:
    """
    Create a participant with a new unique pseudo-random pin.

    Raises:
        StorageError: if no free pin was found or the database fails.
    """
    rng = rng or random.SystemRandom()
    for _ in range(PIN_CREATE_ATTEMPTS):
        pin = _random_pin(rng)
        with storage_errors(db, "look up pin"):
            if db.get(Participant, pin) is not None:
                continue
        with storage_errors(db, f"store pin {pin}"):
            try:
                db.add(Participant(pin=pin))
                db.commit()
            except IntegrityError:
                # taken concurrently, try another one
                db.rollback()
                continue
        logger.info(f"Created pin: {pin}")
        return pin

    raise StorageError(f"No free pin found after {PIN_CREATE_ATTEMPTS} attempts")


def get_participant(db: DBSession, pin: int) -> Participant:
    """
    Get participant by pin.

    Raises:
        HTTPException: 404 if the pin is unknown.
    """
    with storage_errors(db, f"load participant {pin}"):
        participant = db.get(Participant, pin)
    if participant is None:
        logger.warning(f"No participant for pin: {pin}")
        raise HTTPException(status_code=404, detail="Unknown pin")
    return participant
