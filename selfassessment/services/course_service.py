"""Service layer for course configs (the config accessor)."""
import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session as DBSession, selectinload

from selfassessment.engine import CourseConfig, validate_config
from selfassessment.models.db.course import Course, CourseConfigRecord
from selfassessment.utils import storage_errors

logger = logging.getLogger(__name__)


def get_course(db: DBSession, name: str) -> Course | None:
    """Get course by name with its configs loaded."""
    with storage_errors(db, f"load course {name}"):
        return db.execute(
            select(Course).options(selectinload(Course.configs)).where(Course.name == name)
        ).scalar_one_or_none()


def get_course_config(db: DBSession, name: str, language: str) -> CourseConfig:
    """
    Get the config of a course for a language.

    Raises:
        HTTPException: 404 if the course or the language does not exist.
        StorageError: if the database cannot be read.
    """
    with storage_errors(db, f"load course config {name}/{language}"):
        record = db.execute(
            select(CourseConfigRecord)
            .join(Course)
            .where(Course.name == name, CourseConfigRecord.language == language)
        ).scalar_one_or_none()

    if record is None:
        logger.warning(f"Could not find course: {name} config for language: {language}")
        raise HTTPException(status_code=404, detail="Course config not found")
    return validate_config(record.document)


def import_course_config(
    db: DBSession,
    name: str,
    language: str,
    document: Any,
    icon: str | None = None,
) -> CourseConfig:
    """
    Validate a config document and store it for a course and language.
    Creates the course if needed and replaces an existing config.

    Raises:
        ConfigValidationError: if the document is rejected; nothing is stored.
    """
    config = validate_config(document)

    with storage_errors(db, f"store course config {name}/{language}"):
        course = db.execute(select(Course).where(Course.name == name)).scalar_one_or_none()
        if course is None:
            course = Course(name=name, icon=icon or config.icon)
            db.add(course)
            db.flush()
        elif icon:
            course.icon = icon

        record = db.execute(
            select(CourseConfigRecord).where(
                CourseConfigRecord.course_id == course.id,
                CourseConfigRecord.language == language,
            )
        ).scalar_one_or_none()
        if record is None:
            record = CourseConfigRecord(course_id=course.id, language=language)
            db.add(record)

        record.document = config.model_dump(mode="json", by_alias=True, exclude_unset=True)
        record.updated_at = datetime.now(timezone.utc)
        db.commit()

    logger.info(f"Imported course config: {name}/{language} ({len(config.tests)} tests)")
    return config


def list_courses(db: DBSession) -> list[dict[str, object]]:
    """List courses with their languages and per-language titles."""
    with storage_errors(db, "list courses"):
        courses = db.execute(
            select(Course).options(selectinload(Course.configs)).order_by(Course.name)
        ).scalars().all()

    listing = []
    for course in courses:
        configs = sorted(course.configs, key=lambda record: record.language)
        listing.append(
            {
                "name": course.name,
                "icon": course.icon,
                "languages": [record.language for record in configs],
                "titles": {
                    record.language: record.document.get("title") for record in configs
                },
            }
        )
    return listing
