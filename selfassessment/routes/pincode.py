"""Pin endpoints."""
import random
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session as DbSession

from selfassessment.database import get_db
from selfassessment.dependencies import get_rng
from selfassessment.models import PinResponse
from selfassessment.services import pincode_service

router = APIRouter(prefix="/api/v1/pincode", tags=["pincode"])


@router.post("/create", status_code=201, response_model=PinResponse)
def create_pin(
    db: Annotated[DbSession, Depends(get_db)],
    rng: Annotated[random.Random, Depends(get_rng)],
) -> dict[str, int]:
    """Create a new anonymous participant."""
    return {"pin": pincode_service.create_pin(db, rng)}
