"""
Scoring strategies, one per test category.

Every strategy scores one test config against the participant's log entry
for it and reports the score, the maximum score and the indices of the
options answered correctly and wrongly. Log entries that do not have the
shape a category expects are logged and skipped instead of failing the
whole calculation.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from selfassessment.engine.errors import ConfigMissing, MalformedLogEntry
from selfassessment.engine.schema import Category, SingleTest, TestOption

logger = logging.getLogger(__name__)

# Span recorded by the speed test UI when nothing was marked
NO_SELECTION = -1


@dataclass
class ScoreOutcome:
    score: int = 0
    max_score: int = 0
    correct: list[int] = field(default_factory=list)
    wrong: list[int] = field(default_factory=list)
    # option indices whose log entry could not be evaluated
    skipped: list[int] = field(default_factory=list)


class ScoringStrategy(ABC):
    """Abstract base for the category specific scoring algorithms."""

    def score(self, test: SingleTest | None, entry: Any) -> ScoreOutcome:
        """
        Score a log entry against a test config.

        Raises:
            ConfigMissing: if no test config is given.
        """
        if test is None:
            raise ConfigMissing(f"{type(self).__name__}: no test config to score against")

        outcome = ScoreOutcome(max_score=self.max_score(test))
        if not isinstance(entry, (list, tuple)):
            # nothing we can evaluate, e.g. the test was opened but never answered
            logger.error(
                f"Test {test.id}: expected a list of option answers, got {type(entry).__name__}"
            )
            outcome.skipped.extend(range(len(test.options)))
            return outcome

        for index, option in enumerate(test.options):
            answer = entry[index] if index < len(entry) else None
            try:
                verdict = self.judge(option, answer)
            except MalformedLogEntry as exc:
                logger.error(f"Test {test.id}, option {index}: {exc}")
                outcome.skipped.append(index)
                continue

            if verdict is True:
                outcome.score += 1
                outcome.correct.append(index)
            elif verdict is False:
                outcome.wrong.append(index)
        return outcome

    def max_score(self, test: SingleTest) -> int:
        """Number of options carrying a ``correct`` value."""
        return sum(1 for option in test.options if option.has_correct)

    @abstractmethod
    def judge(self, option: TestOption, answer: Any) -> bool | None:
        """Judge one option: True scores, False is wrong, None is neutral.

        Raises:
            MalformedLogEntry: if the answer cannot be evaluated.
        """


class ChoiceScoring(ScoringStrategy):
    """Checkbox, radio button and multiple choice tests.

    The log entry holds one boolean per option telling whether the
    participant selected it. Selecting a correct option scores; selecting an
    incorrect one is wrong; leaving an option unselected is neutral.
    """

    def max_score(self, test: SingleTest) -> int:
        return sum(1 for option in test.options if option.correct is True)

    def judge(self, option: TestOption, answer: Any) -> bool | None:
        if answer is None:
            return None
        if not isinstance(answer, bool):
            raise MalformedLogEntry(f"expected a boolean selection, got {answer!r}")
        if not answer:
            return None
        return option.correct is True


def _as_column(value: Any) -> int | None:
    """Normalize a column reference (int, numeric string or one-hot row)."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise MalformedLogEntry(f"expected a column, got {value!r}")
    if isinstance(value, int):
        return None if value == NO_SELECTION else value
    if isinstance(value, str):
        try:
            return _as_column(int(value.strip()))
        except ValueError:
            raise MalformedLogEntry(f"expected a numeric column, got {value!r}") from None
    if isinstance(value, (list, tuple)):
        if not all(isinstance(cell, bool) for cell in value):
            raise MalformedLogEntry(f"expected a row of booleans, got {value!r}")
        selected = [column for column, cell in enumerate(value) if cell]
        if not selected:
            return None
        if len(selected) > 1:
            raise MalformedLogEntry(f"more than one column selected: {selected}")
        return selected[0]
    raise MalformedLogEntry(f"expected a column, got {type(value).__name__}")


class GridScoring(ScoringStrategy):
    """Multiple options tests.

    Each option is a row whose ``correct`` value names the expected column
    of ``header``; the log entry holds the chosen column per row.
    """

    def judge(self, option: TestOption, answer: Any) -> bool | None:
        if not option.has_correct:
            return None
        chosen = _as_column(answer)
        if chosen is None:
            return None
        try:
            expected = _as_column(option.correct)
        except MalformedLogEntry as exc:
            raise MalformedLogEntry(f"option has an unusable correct value: {exc}") from None
        return chosen == expected


def find_occurrences(text: str, needle: str) -> list[tuple[int, int]]:
    """Locate the non-overlapping occurrences of needle as ``(start, end)`` spans."""
    occurrences = []
    start = text.find(needle)
    while start != -1:
        end = start + len(needle)
        occurrences.append((start, end))
        start = text.find(needle, end)
    return occurrences


class SpeedScoring(ScoringStrategy):
    """Speed tests.

    ``correct`` is a substring of the option text and ``index`` names which
    occurrence of it counts. The log entry holds the ``[start, end]``
    character span the participant marked per option, ``[-1, -1]`` when
    nothing was marked. A point is awarded when the span covers the counted
    occurrence and the marked text contains the substring.
    """

    def judge(self, option: TestOption, answer: Any) -> bool | None:
        needle = option.correct
        if not isinstance(needle, str) or not needle:
            raise MalformedLogEntry(f"correct value must be a non-empty string, got {needle!r}")
        try:
            target_index = int(option.index)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            raise MalformedLogEntry(
                f"index must be an integer or a numeric string, got {option.index!r}"
            ) from None

        if answer is None:
            return None
        if not isinstance(answer, (list, tuple)) or len(answer) < 2:
            raise MalformedLogEntry(f"expected a [start, end] span, got {answer!r}")
        start, end = answer[0], answer[1]
        if any(isinstance(value, bool) or not isinstance(value, int) for value in (start, end)):
            raise MalformedLogEntry(f"span bounds must be integers, got {answer!r}")

        if start == NO_SELECTION or end == NO_SELECTION:
            return None

        occurrences = find_occurrences(option.text, needle)
        if not 0 <= target_index < len(occurrences):
            return False
        target_start, target_end = occurrences[target_index]
        covers_target = start <= target_start and end >= target_end
        return covers_target and needle in option.text[start:end]


STRATEGIES: dict[Category, ScoringStrategy] = {
    Category.CHECKBOX: ChoiceScoring(),
    Category.RADIO_BUTTONS: ChoiceScoring(),
    Category.MULTIPLE_CHOICE: ChoiceScoring(),
    Category.MULTIPLE_OPTIONS: GridScoring(),
    Category.SPEED: SpeedScoring(),
}


def get_strategy(category: Category | str) -> ScoringStrategy | None:
    """Get the scoring strategy for a category, None if there is none."""
    try:
        category = Category(category)
    except ValueError:
        return None
    return STRATEGIES.get(category)
