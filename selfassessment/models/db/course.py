"""Course and per-language course config database models."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import sqlalchemy as sa
from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from selfassessment.database import Base
from selfassessment.utils.json_utils import json_dump, json_load


class Course(Base):
    """A course participants can pick, available in one or more languages."""

    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, index=True, nullable=False)
    icon: Mapped[str | None] = mapped_column(String(500), nullable=True)

    configs: Mapped[list["CourseConfigRecord"]] = relationship(
        "CourseConfigRecord", back_populates="course", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Course(id={self.id}, name='{self.name}')>"


class CourseConfigRecord(Base):
    """
    Validated course config document for one language.
    Only documents that passed validation are stored.
    """

    __tablename__ = "course_configs"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    course_id: Mapped[int] = mapped_column(
        ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    language: Mapped[str] = mapped_column(String(16), nullable=False)
    config_json: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("course_id", "language", name="uq_course_language"),
    )

    course: Mapped["Course"] = relationship("Course", back_populates="configs")

    @property
    def document(self) -> dict[str, Any]:
        """Parse the stored config document."""
        return json_load(self.config_json)

    @document.setter
    def document(self, value: dict[str, Any]) -> None:
        self.config_json = json_dump(value)
