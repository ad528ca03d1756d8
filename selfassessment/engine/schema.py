"""
Course configuration models.

A course configuration is authored as JSON and describes single tests, the
groups that draw from them, the sets a participant works through and the info
pages shown in between. The models below are the closed schema the
structural validation pass checks a document against; the semantic checks
(unique ids, resolvable references) live in ``validator``.
"""
from __future__ import annotations

import enum
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
)


class Category(str, enum.Enum):
    """Test category, decides both the UI shape and the scoring algorithm."""

    CHECKBOX = "checkbox"
    RADIO_BUTTONS = "radio-buttons"
    MULTIPLE_CHOICE = "multiple-choice"
    MULTIPLE_OPTIONS = "multiple-options"
    SPEED = "speed"


# Categories whose options must all carry a "correct" value
CATEGORIES_REQUIRING_CORRECT = frozenset({Category.MULTIPLE_OPTIONS, Category.SPEED})


class _ConfigModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    # not pytest test classes despite the names
    __test__ = False


class TestOption(_ConfigModel):
    """
    One option of a single test.

    ``correct`` is category specific: a bool for choice tests, the expected
    column for multiple-options tests and the substring to find for speed
    tests. ``index`` names the counted occurrence of that substring (speed
    only); it is kept as authored so a bad value fails at scoring time.
    """

    text: StrictStr
    correct: Any = None
    index: StrictInt | StrictStr | None = None

    @property
    def has_correct(self) -> bool:
        """Whether the option declares a ``correct`` value at all."""
        return "correct" in self.model_fields_set


class SingleTest(_ConfigModel):
    """Single test definition."""

    id: StrictInt
    type: StrictStr
    category: Category
    description: StrictStr
    task: StrictStr
    options: list[TestOption]
    evaluated: StrictBool
    seconds: StrictInt | None = None
    header: list[StrictStr] | None = None


class TestGroup(_ConfigModel):
    """Pool of tests, optionally narrowed to a random subset of ``select`` tests."""

    id: StrictInt
    tests: list[StrictInt]
    select: StrictInt | None = Field(default=None, ge=0)


class EvaluationTexts(_ConfigModel):
    """Messages shown with a set's result."""

    score_independent: StrictStr = Field(default="", alias="scoreIndependent")
    score_dependent: list[tuple[int, str]] = Field(
        default_factory=list, alias="scoreDependent"
    )


class TestSet(_ConfigModel):
    """Ordered list of test and test group ids worked through in one go."""

    id: StrictInt
    elements: list[StrictInt]
    evaluation_texts: EvaluationTexts = Field(
        default_factory=EvaluationTexts, alias="evaluationTexts"
    )


class InfoPage(_ConfigModel):
    """Text page shown before each test, group or set listed in ``belongs``."""

    id: StrictInt
    text: StrictStr = ""
    belongs: list[StrictInt] = Field(default_factory=list)


class CourseConfig(_ConfigModel):
    """A complete course configuration for one language."""

    title: StrictStr
    icon: StrictStr | None = None
    validation_schema: StrictStr = Field(
        validation_alias=AliasChoices("validationSchema", "validationSchemaTemplate"),
        serialization_alias="validationSchema",
    )
    tests: list[SingleTest]
    testgroups: list[TestGroup] = Field(default_factory=list)
    sets: list[TestSet] = Field(default_factory=list)
    infopages: list[InfoPage] = Field(default_factory=list)

    def find_test(self, test_id: int) -> SingleTest | None:
        """Find a single test by id."""
        for test in self.tests:
            if test.id == test_id:
                return test
        return None
