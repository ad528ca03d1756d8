"""
Journal structure construction.

Turns a validated course config into the ordered sets a participant works
through. Test groups with a ``select`` count are narrowed to a random subset
on a fresh start; on resume the subset recorded in the participant's minimal
structure is reused so they see exactly the tests they were assigned.
"""
from __future__ import annotations

import logging
import random
from collections import Counter, defaultdict

from selfassessment.engine.errors import InvalidGroupSelection
from selfassessment.engine.journal import (
    InfoPageElement,
    JournalStructure,
    MinimalSet,
    MinimalStructure,
    StructureSet,
    TestElement,
)
from selfassessment.engine.schema import CourseConfig, InfoPage, SingleTest, TestGroup

logger = logging.getLogger(__name__)


def _pages_by_owner(config: CourseConfig) -> dict[int, list[InfoPage]]:
    pages: dict[int, list[InfoPage]] = defaultdict(list)
    for page in config.infopages:
        for owner_id in page.belongs:
            pages[owner_id].append(page)
    return pages


def _draw_group(group: TestGroup, rng: random.Random) -> list[int]:
    if group.select is None:
        return list(group.tests)
    candidates = list(dict.fromkeys(group.tests))
    if group.select > len(candidates):
        raise InvalidGroupSelection(group.id, group.select, len(candidates))
    # keep declared order so a resumed structure matches the fresh one
    chosen = set(rng.sample(candidates, group.select))
    return [test_id for test_id in candidates if test_id in chosen]


def _recorded_group(group: TestGroup, remaining: Counter) -> list[int]:
    """Take the group's tests still unclaimed in the recorded ids, consuming them."""
    taken = []
    for test_id in group.tests:
        if remaining[test_id] > 0:
            remaining[test_id] -= 1
            taken.append(test_id)
    return taken


def build_structure(
    config: CourseConfig,
    prior: MinimalStructure | None = None,
    rng: random.Random | None = None,
) -> JournalStructure:
    """
    Build the journal structure for a participant.

    Args:
        config: Validated course config; never modified.
        prior: Minimal structure persisted at the first start. When given,
            groups resolve to the recorded test ids and no randomness is used.
        rng: Random source for group selection on a fresh start.

    Raises:
        InvalidGroupSelection: a group selects more tests than it declares.
    """
    rng = rng or random.Random()
    tests: dict[int, SingleTest] = {test.id: test for test in config.tests}
    groups: dict[int, TestGroup] = {group.id: group for group in config.testgroups}
    pages = _pages_by_owner(config)

    # fresh draws happen once per group, so a group used by two sets shows
    # the same subset in both
    drawn: dict[int, list[int]] = {}
    recorded_anywhere: list[int] = []
    if prior is None:
        for group in config.testgroups:
            drawn[group.id] = _draw_group(group, rng)
    else:
        recorded_anywhere = prior.all_tests()

    sets = []
    for test_set in config.sets:
        remaining: Counter = Counter()
        if prior is not None:
            recorded = prior.tests_for(test_set.id)
            remaining = Counter(recorded if recorded is not None else recorded_anywhere)
            # standalone tests of the set claim their recorded ids before any group
            for element_id in test_set.elements:
                if element_id in tests and remaining[element_id] > 0:
                    remaining[element_id] -= 1

        elements: list[TestElement | InfoPageElement] = [
            InfoPageElement(page=page) for page in pages.get(test_set.id, [])
        ]
        for element_id in test_set.elements:
            elements.extend(InfoPageElement(page=page) for page in pages.get(element_id, []))

            if element_id in tests:
                elements.append(TestElement(test=tests[element_id]))
                continue

            group = groups[element_id]
            if prior is None:
                group_tests = drawn[group.id]
            else:
                group_tests = _recorded_group(group, remaining)
            for test_id in group_tests:
                elements.extend(
                    InfoPageElement(page=page) for page in pages.get(test_id, [])
                )
                elements.append(TestElement(test=tests[test_id]))

        texts = test_set.evaluation_texts
        sets.append(
            StructureSet(
                id=test_set.id,
                elements=elements,
                score_independent_text=texts.score_independent,
                score_dependent_texts=list(texts.score_dependent),
            )
        )

    structure = JournalStructure(sets=sets)
    logger.debug(
        f"Built {'resumed' if prior is not None else 'fresh'} structure for"
        f" '{config.title}' with {len(structure.test_ids())} tests"
    )
    return structure


def to_minimal(structure: JournalStructure, course: str, language: str) -> MinimalStructure:
    """Reduce a structure to the set and test ids needed to rebuild it."""
    return MinimalStructure(
        course=course,
        language=language,
        sets=[
            MinimalSet(set_id=test_set.id, tests=[test.id for test in test_set.tests()])
            for test_set in structure.sets
        ],
    )
