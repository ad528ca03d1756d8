"""Utility modules."""
from selfassessment.utils.json_utils import json_dump, json_load, read_config_file
from selfassessment.utils.storage import storage_errors
from selfassessment.utils.validation import validate_name, validate_pin

__all__ = [
    "json_dump",
    "json_load",
    "read_config_file",
    "storage_errors",
    "validate_name",
    "validate_pin",
]
