"""Result endpoints."""
import random
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session as DbSession

from selfassessment.database import get_db
from selfassessment.dependencies import get_rng
from selfassessment.models import LockResponse, PinRequest, ResultResponse
from selfassessment.services import result_service
from selfassessment.utils import validate_pin

router = APIRouter(prefix="/api/v1/result", tags=["result"])


@router.post("/load", response_model=ResultResponse, response_model_exclude_none=True)
def load_result(
    payload: PinRequest,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Load the stored results of a pin."""
    return result_service.get_result(db, validate_pin(payload.pin))


@router.post("/update", response_model=ResultResponse, response_model_exclude_none=True)
def update_result(
    payload: PinRequest,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Recalculate the results of a pin; rejected once they are locked."""
    tests = result_service.update(db, validate_pin(payload.pin))
    return {"tests": tests}


@router.post("/lock", response_model=LockResponse)
def lock_result(
    payload: PinRequest,
    db: Annotated[DbSession, Depends(get_db)],
    rng: Annotated[random.Random, Depends(get_rng)],
) -> dict[str, str]:
    """Freeze the results of a pin and return its validation code."""
    return {"validationCode": result_service.lock(db, validate_pin(payload.pin), rng)}
