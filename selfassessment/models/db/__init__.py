"""Database models."""
from selfassessment.models.db.course import Course, CourseConfigRecord
from selfassessment.models.db.participant import JournalRecord, Participant

__all__ = [
    "Course",
    "CourseConfigRecord",
    "JournalRecord",
    "Participant",
]
