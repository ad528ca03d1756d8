"""Course-related Pydantic models."""
from pydantic import BaseModel


class CourseSummary(BaseModel):
    """Model for a course in the course overview."""

    name: str
    icon: str | None = None
    languages: list[str]
    titles: dict[str, str | None]


class ConfigErrorResponse(BaseModel):
    """Model for a rejected course config."""

    detail: str
    errors: list[str]
