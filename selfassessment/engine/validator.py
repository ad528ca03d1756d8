"""
Course configuration validation.

A document is checked in two passes. The structural pass validates it against
the closed schema in ``schema`` and reports every violation it finds. The
semantic pass runs on the parsed config and stops at the first violation, in
this order:

1. single test ids are unique
2. every option of a multiple-options or speed test carries ``correct``
3. test group ids are unique and every grouped test id is declared
4. test set ids are unique and every set element is a declared test or group
5. info page ids are unique and every ``belongs`` id is a declared test,
   group or set

A document is accepted whole or rejected; nothing is partially loaded.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable

from pydantic import ValidationError

from selfassessment.engine.errors import (
    ConfigValidationError,
    ReferentialIntegrityError,
)
from selfassessment.engine.schema import CATEGORIES_REQUIRING_CORRECT, CourseConfig

logger = logging.getLogger(__name__)


def _format_pydantic_errors(exc: ValidationError) -> list[str]:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
        errors.append(f"{location}: {error.get('msg', 'invalid value')}")
    return errors


def _first_duplicate(ids: Iterable[int]) -> int | None:
    seen: set[int] = set()
    for item in ids:
        if item in seen:
            return item
        seen.add(item)
    return None


def _check_semantics(config: CourseConfig) -> None:
    """Raise on the first semantic violation."""
    test_ids = [test.id for test in config.tests]
    duplicate = _first_duplicate(test_ids)
    if duplicate is not None:
        raise ConfigValidationError([f'tests: "id" not unique: {duplicate}'])

    for test in config.tests:
        if test.category not in CATEGORIES_REQUIRING_CORRECT:
            continue
        for position, option in enumerate(test.options):
            if not option.has_correct:
                raise ConfigValidationError(
                    [
                        f"tests: {test.category.value} test {test.id} requires the"
                        f' "correct" attribute for each option (option {position})'
                    ]
                )

    known_tests = set(test_ids)
    group_ids = [group.id for group in config.testgroups]
    duplicate = _first_duplicate(group_ids)
    if duplicate is not None:
        raise ConfigValidationError([f'testgroups: "id" not unique: {duplicate}'])
    for group in config.testgroups:
        for test_id in group.tests:
            if test_id not in known_tests:
                raise ReferentialIntegrityError(
                    [f"testgroups: group {group.id} references unknown test id {test_id}"]
                )

    known_groups = set(group_ids)
    set_ids = [test_set.id for test_set in config.sets]
    duplicate = _first_duplicate(set_ids)
    if duplicate is not None:
        raise ConfigValidationError([f'sets: "id" not unique: {duplicate}'])
    for test_set in config.sets:
        for element_id in test_set.elements:
            if element_id not in known_tests and element_id not in known_groups:
                raise ReferentialIntegrityError(
                    [f"sets: set {test_set.id} references unknown element id {element_id}"]
                )

    known_sets = set(set_ids)
    page_ids = [page.id for page in config.infopages]
    duplicate = _first_duplicate(page_ids)
    if duplicate is not None:
        raise ConfigValidationError([f'infopages: "id" not unique: {duplicate}'])
    for page in config.infopages:
        for owner_id in page.belongs:
            if (
                owner_id not in known_tests
                and owner_id not in known_groups
                and owner_id not in known_sets
            ):
                raise ReferentialIntegrityError(
                    [f"infopages: page {page.id} belongs to unknown element id {owner_id}"]
                )


def validate_config(doc: Any) -> CourseConfig:
    """
    Validate a raw course configuration document.

    Returns:
        The parsed, immutable course config.

    Raises:
        ConfigValidationError: with every structural violation, or with the
            first semantic one. Dangling references raise the subclass
            ReferentialIntegrityError.
    """
    if isinstance(doc, CourseConfig):
        config = doc
    else:
        try:
            config = CourseConfig.model_validate(doc)
        except ValidationError as exc:
            errors = _format_pydantic_errors(exc)
            logger.warning(f"Course config failed structural validation: {errors}")
            raise ConfigValidationError(errors) from exc

    try:
        _check_semantics(config)
    except ConfigValidationError as exc:
        logger.warning(f"Course config failed semantic validation: {exc.errors[0]}")
        raise
    return config


def check_config(doc: Any) -> list[str]:
    """Return the list of violations for a document (empty when valid)."""
    try:
        validate_config(doc)
    except ConfigValidationError as exc:
        return exc.errors
    return []


def is_valid_config(doc: Any) -> bool:
    """Check whether a document is an acceptable course config."""
    return not check_config(doc)
