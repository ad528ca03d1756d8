"""Course endpoints."""
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session as DbSession

from selfassessment.database import get_db
from selfassessment.models import ConfigErrorResponse, CourseSummary
from selfassessment.services import course_service
from selfassessment.utils import validate_name

router = APIRouter(prefix="/api/v1/courses", tags=["courses"])


@router.get("", response_model=list[CourseSummary])
def list_courses(db: Annotated[DbSession, Depends(get_db)]) -> list[dict[str, object]]:
    """List all courses and their languages."""
    return course_service.list_courses(db)


@router.get("/{name}/{language}")
def get_course_config(
    name: str,
    language: str,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, Any]:
    """Get the config of a course in one language."""
    config = course_service.get_course_config(
        db, validate_name("course", name), validate_name("language", language)
    )
    return config.model_dump(mode="json", by_alias=True, exclude_unset=True)


@router.post(
    "/{name}/{language}",
    status_code=201,
    responses={400: {"model": ConfigErrorResponse}},
)
def import_course_config(
    name: str,
    language: str,
    document: Annotated[dict[str, Any], Body()],
    db: Annotated[DbSession, Depends(get_db)],
    icon: str | None = None,
) -> dict[str, object]:
    """Validate and store a course config for a language."""
    config = course_service.import_course_config(
        db,
        validate_name("course", name),
        validate_name("language", language),
        document,
        icon=icon,
    )
    return {"status": "imported", "course": name, "language": language, "title": config.title}
