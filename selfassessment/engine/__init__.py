"""
Assessment engine.

Pure functions over course configs and journals: validation, journal
structure construction, scoring and validation code generation. Nothing here
touches the database; randomness is passed in as a ``random.Random``.
"""
from selfassessment.engine.errors import (
    AlreadyLocked,
    AssessmentError,
    ConfigMissing,
    ConfigValidationError,
    InvalidGroupSelection,
    MalformedJournal,
    MalformedLogEntry,
    MissingLogEntry,
    MissingTestConfig,
    ReferentialIntegrityError,
    ResultUnavailable,
    StorageError,
)
from selfassessment.engine.journal import (
    Journal,
    JournalLog,
    JournalStructure,
    MinimalStructure,
)
from selfassessment.engine.results import (
    ResultSet,
    TestResult,
    calculate_results,
    compute_results,
    flatten_results,
)
from selfassessment.engine.schema import Category, CourseConfig
from selfassessment.engine.scoring import STRATEGIES, get_strategy
from selfassessment.engine.structure import build_structure, to_minimal
from selfassessment.engine.validation_code import generate_validation_code
from selfassessment.engine.validator import check_config, is_valid_config, validate_config

__all__ = [
    "AlreadyLocked",
    "AssessmentError",
    "Category",
    "ConfigMissing",
    "ConfigValidationError",
    "CourseConfig",
    "InvalidGroupSelection",
    "Journal",
    "JournalLog",
    "JournalStructure",
    "MalformedJournal",
    "MalformedLogEntry",
    "MinimalStructure",
    "MissingLogEntry",
    "MissingTestConfig",
    "ReferentialIntegrityError",
    "ResultSet",
    "ResultUnavailable",
    "STRATEGIES",
    "StorageError",
    "TestResult",
    "build_structure",
    "calculate_results",
    "check_config",
    "compute_results",
    "flatten_results",
    "generate_validation_code",
    "get_strategy",
    "is_valid_config",
    "to_minimal",
    "validate_config",
]
