"""Pin-related Pydantic models."""
from pydantic import BaseModel


class PinRequest(BaseModel):
    """Request body identifying a participant."""

    pin: int


class PinResponse(BaseModel):
    """Model for a newly created pin."""

    pin: int
