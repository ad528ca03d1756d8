"""
Participant and journal database models.
A participant is an anonymous user identified by a pin only.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import sqlalchemy as sa
from sqlalchemy import BigInteger, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from selfassessment.database import Base
from selfassessment.engine.errors import MalformedJournal, StorageError
from selfassessment.utils.json_utils import json_dump, json_load

logger = logging.getLogger(__name__)


class Participant(Base):
    """
    Pin holder and their stored results.
    Once ``validation_code`` is set the stored results are frozen.
    """

    __tablename__ = "participants"

    pin: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    # Results (flat TestResult list as JSON)
    result_tests_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    result_updated_at: Mapped[datetime | None] = mapped_column(
        sa.DateTime(timezone=True), nullable=True
    )
    validation_code: Mapped[str | None] = mapped_column(String(64), nullable=True)

    journal: Mapped["JournalRecord | None"] = relationship(
        "JournalRecord",
        back_populates="participant",
        uselist=False,
        cascade="all, delete-orphan",
    )

    @property
    def result_tests(self) -> list[dict[str, Any]]:
        """Parse stored test results from JSON."""
        if not self.result_tests_json:
            return []
        try:
            return json_load(self.result_tests_json)
        except ValueError as e:
            logger.error(f"Stored results for pin: {self.pin} are corrupt: {e}")
            raise StorageError(f"Stored results for pin {self.pin} are corrupt") from e

    @property
    def is_locked(self) -> bool:
        return bool(self.validation_code)

    def __repr__(self) -> str:
        return f"<Participant(pin={self.pin}, locked={self.is_locked})>"


def _load_journal_part(pin: int, part: str, raw: str) -> Any:
    try:
        return json_load(raw)
    except ValueError as e:
        logger.error(f"Stored journal {part} for pin: {pin} is corrupt: {e}")
        raise MalformedJournal(f"Stored journal {part} for pin {pin} is not valid JSON") from e


class JournalRecord(Base):
    """
    Persisted journal of a participant.
    The structure is kept in its minimal form and the log in its
    list-of-pairs wire form.
    """

    __tablename__ = "journals"

    pin: Mapped[int] = mapped_column(
        ForeignKey("participants.pin", ondelete="CASCADE"), primary_key=True
    )
    course: Mapped[str | None] = mapped_column(String(100), nullable=True)
    language: Mapped[str | None] = mapped_column(String(16), nullable=True)
    structure_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    log_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    last_changed: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    participant: Mapped["Participant"] = relationship("Participant", back_populates="journal")

    @property
    def structure(self) -> dict[str, Any] | None:
        """Parse minimal structure from JSON."""
        if not self.structure_json:
            return None
        return _load_journal_part(self.pin, "structure", self.structure_json)

    @structure.setter
    def structure(self, value: dict[str, Any] | None) -> None:
        self.structure_json = json_dump(value) if value is not None else None

    @property
    def log(self) -> dict[str, Any] | None:
        """Parse journal log (wire form) from JSON."""
        if not self.log_json:
            return None
        return _load_journal_part(self.pin, "log", self.log_json)

    @log.setter
    def log(self, value: dict[str, Any] | None) -> None:
        self.log_json = json_dump(value) if value is not None else None
