"""Error taxonomy of the assessment engine."""
from __future__ import annotations


class AssessmentError(Exception):
    """Base class for all engine errors."""


class ConfigValidationError(AssessmentError):
    """A course configuration failed the structural or semantic checks.

    ``errors`` holds every violation of the structural pass, or the single
    violation that stopped the semantic pass.
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "invalid course config")


class ReferentialIntegrityError(ConfigValidationError):
    """A group, set or info page references an id that is not declared."""


class InvalidGroupSelection(AssessmentError):
    """A test group asks to select more tests than it declares."""

    def __init__(self, group_id: int, select: int, available: int):
        self.group_id = group_id
        self.select = select
        self.available = available
        super().__init__(
            f"test group {group_id} selects {select} of {available} tests"
        )


class ConfigMissing(AssessmentError):
    """A scoring strategy was called without a test config."""


class MissingTestConfig(AssessmentError):
    """A journal structure references a test absent from the course config."""

    def __init__(self, test_id: int):
        self.test_id = test_id
        super().__init__(f"no test config for id {test_id}")


class MissingLogEntry(AssessmentError):
    """An evaluated test in the journal structure has no journal log entry."""

    def __init__(self, test_id: int):
        self.test_id = test_id
        super().__init__(f"no journal log entry for test id {test_id}")


class MalformedLogEntry(AssessmentError):
    """A log entry does not have the shape its test category expects."""


class MalformedJournal(AssessmentError):
    """A persisted journal could not be turned back into its in-memory form."""


class StorageError(AssessmentError):
    """Reading or writing the journal/result store failed."""


class AlreadyLocked(AssessmentError):
    """Results for a pin are frozen by an existing validation code."""

    def __init__(self, pin: int):
        self.pin = pin
        super().__init__(f"results for pin {pin} are locked")


class ResultUnavailable(AssessmentError):
    """Results could not be calculated from the stored journal."""
