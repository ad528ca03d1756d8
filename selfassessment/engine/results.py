"""
Result calculation.

Walks a participant's journal structure set by set, scores every evaluated
test against the course config with the strategy of its category and
collects the results per set, in structure order.
"""
from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from selfassessment.engine.errors import MissingLogEntry, MissingTestConfig
from selfassessment.engine.journal import Journal
from selfassessment.engine.schema import CourseConfig
from selfassessment.engine.scoring import get_strategy

logger = logging.getLogger(__name__)


class TestResult(BaseModel):
    """Score of a single test."""

    __test__ = False
    model_config = ConfigDict(populate_by_name=True)

    id: int
    score: int = 0
    max_score: int = Field(default=0, alias="maxScore")
    correct_options: list[int] = Field(default_factory=list, alias="correctOptions")
    wrong_options: list[int] = Field(default_factory=list, alias="wrongOptions")


class ResultSet(BaseModel):
    """Results of the evaluated tests of one set."""

    model_config = ConfigDict(populate_by_name=True)

    set_id: int = Field(alias="set")
    tests: list[TestResult] = Field(default_factory=list)

    @property
    def score(self) -> int:
        return sum(result.score for result in self.tests)

    @property
    def max_score(self) -> int:
        return sum(result.max_score for result in self.tests)


def compute_results(config: CourseConfig, journal: Journal) -> list[ResultSet]:
    """
    Score every evaluated test of a journal.

    Raises:
        MissingTestConfig: a structure test is absent from the course config.
        MissingLogEntry: an evaluated test has no entry in the journal log.
    """
    tests = {test.id: test for test in config.tests}
    result_sets = []

    for set_index, structure_set in enumerate(journal.structure.sets):
        result_set = ResultSet(set_id=structure_set.id)
        for structure_test in structure_set.tests():
            test = tests.get(structure_test.id)
            if test is None:
                raise MissingTestConfig(structure_test.id)

            if not test.evaluated:
                logger.debug(f"Skipping test {test.id}; it is not marked as evaluated")
                continue

            found, entry = journal.log.find_in_set(set_index, test.id)
            if not found:
                raise MissingLogEntry(test.id)

            strategy = get_strategy(test.category)
            if strategy is None:
                logger.warning(
                    f"No scoring strategy for category {test.category!r}, test {test.id}"
                )
                continue

            outcome = strategy.score(test, entry)
            result_set.tests.append(
                TestResult(
                    id=test.id,
                    score=outcome.score,
                    max_score=outcome.max_score,
                    correct_options=outcome.correct,
                    wrong_options=outcome.wrong,
                )
            )
        result_sets.append(result_set)

    return result_sets


def calculate_results(config: CourseConfig, journal: Journal) -> list[ResultSet] | None:
    """Score a journal, or return None if it references missing data.

    A single missing test config or log entry discards the whole calculation.
    """
    try:
        return compute_results(config, journal)
    except (MissingTestConfig, MissingLogEntry) as exc:
        logger.warning(f"Result calculation aborted: {exc}")
        return None


def flatten_results(result_sets: list[ResultSet]) -> list[TestResult]:
    """Flat list of test results in structure order, as stored per pin."""
    return [result for result_set in result_sets for result in result_set.tests]
