import pytest

from selfassessment.engine import STRATEGIES, Category, ConfigMissing, get_strategy
from selfassessment.engine.schema import SingleTest
from selfassessment.engine.scoring import (
    ChoiceScoring,
    GridScoring,
    SpeedScoring,
    find_occurrences,
)


def _test(category: str, options: list[dict], **extra) -> SingleTest:
    return SingleTest.model_validate(
        {
            "id": 1,
            "type": "logic",
            "category": category,
            "description": "d",
            "task": "t",
            "evaluated": True,
            "options": options,
            **extra,
        }
    )


def _speed_test(index: object = "1") -> SingleTest:
    return _test(
        "speed",
        [{"text": "ab:cd:ef", "correct": ":", "index": index}],
        seconds=10,
    )


def test_choice_selected_correct_option_scores() -> None:
    test = _test("radio-buttons", [{"text": "a", "correct": True}, {"text": "b", "correct": False}])
    outcome = ChoiceScoring().score(test, [True, False])
    assert outcome.score == 1
    assert outcome.max_score == 1
    assert outcome.correct == [0]
    assert outcome.wrong == []


def test_choice_selected_incorrect_option_is_wrong() -> None:
    test = _test(
        "checkbox",
        [
            {"text": "a", "correct": True},
            {"text": "b", "correct": True},
            {"text": "c", "correct": False},
        ],
    )
    outcome = ChoiceScoring().score(test, [False, True, True])
    assert outcome.score == 1
    assert outcome.max_score == 2
    assert outcome.correct == [1]
    assert outcome.wrong == [2]


def test_choice_short_entry_counts_missing_as_unselected() -> None:
    test = _test("checkbox", [{"text": "a", "correct": True}, {"text": "b", "correct": True}])
    outcome = ChoiceScoring().score(test, [True])
    assert (outcome.score, outcome.correct, outcome.wrong) == (1, [0], [])


def test_choice_non_boolean_selection_is_skipped() -> None:
    test = _test("checkbox", [{"text": "a", "correct": True}, {"text": "b", "correct": True}])
    outcome = ChoiceScoring().score(test, ["yes", True])
    assert outcome.correct == [1]
    assert outcome.skipped == [0]


def test_entry_that_is_not_a_list_is_skipped() -> None:
    test = _test("checkbox", [{"text": "a", "correct": True}])
    outcome = ChoiceScoring().score(test, False)
    assert outcome.score == 0
    assert outcome.max_score == 1
    assert outcome.skipped == [0]


def test_grid_matches_columns() -> None:
    test = _test(
        "multiple-options",
        [{"text": "r1", "correct": "0"}, {"text": "r2", "correct": "1"}, {"text": "r3", "correct": 1}],
        header=["Yes", "No"],
    )
    outcome = GridScoring().score(test, [0, "0", 1])
    assert outcome.score == 2
    assert outcome.max_score == 3
    assert outcome.correct == [0, 2]
    assert outcome.wrong == [1]


def test_grid_accepts_one_hot_rows_and_ignores_unanswered() -> None:
    test = _test(
        "multiple-options",
        [{"text": "r1", "correct": "0"}, {"text": "r2", "correct": "1"}, {"text": "r3", "correct": "1"}],
    )
    outcome = GridScoring().score(test, [[True, False], [True, False], [False, False]])
    assert outcome.correct == [0]
    assert outcome.wrong == [1]
    assert outcome.skipped == []


def test_grid_malformed_rows_are_skipped() -> None:
    test = _test("multiple-options", [{"text": "r1", "correct": "0"}, {"text": "r2", "correct": "1"}])
    outcome = GridScoring().score(test, [[True, True], "one"])
    assert outcome.score == 0
    assert outcome.skipped == [0, 1]


def test_find_occurrences_is_absolute_and_non_overlapping() -> None:
    assert find_occurrences("ab:cd:ef", ":") == [(2, 3), (5, 6)]
    assert find_occurrences("aaaa", "aa") == [(0, 2), (2, 4)]
    assert find_occurrences("abc", "x") == []


def test_speed_marking_the_counted_occurrence_scores() -> None:
    outcome = SpeedScoring().score(_speed_test(), [[5, 6]])
    assert outcome.score == 1
    assert outcome.max_score == 1
    assert outcome.correct == [0]


def test_speed_marking_another_occurrence_is_wrong() -> None:
    outcome = SpeedScoring().score(_speed_test(), [[2, 3]])
    assert outcome.score == 0
    assert outcome.wrong == [0]


def test_speed_no_selection_is_neutral() -> None:
    outcome = SpeedScoring().score(_speed_test(), [[-1, -1]])
    assert outcome.score == 0
    assert outcome.correct == []
    assert outcome.wrong == []
    assert outcome.skipped == []


def test_speed_wider_span_covering_target_scores() -> None:
    outcome = SpeedScoring().score(_speed_test(), [[4, 8]])
    assert outcome.correct == [0]


def test_speed_span_must_cover_whole_occurrence() -> None:
    test = _test("speed", [{"text": "the cat sat", "correct": "cat", "index": 0}])
    assert SpeedScoring().score(test, [[4, 6]]).wrong == [0]
    assert SpeedScoring().score(test, [[4, 7]]).correct == [0]


def test_speed_integer_index_is_accepted() -> None:
    outcome = SpeedScoring().score(_speed_test(index=1), [[5, 6]])
    assert outcome.correct == [0]


@pytest.mark.parametrize(
    "index, entry",
    [
        ("second", [[5, 6]]),
        (None, [[5, 6]]),
        ("1", [["5", "6"]]),
        ("1", [[5.0, 6.0]]),
        ("1", [[True, False]]),
        ("1", ["5-6"]),
    ],
)
def test_speed_malformed_entries_are_skipped(index: object, entry: list) -> None:
    outcome = SpeedScoring().score(_speed_test(index=index), entry)
    assert outcome.score == 0
    assert outcome.wrong == []
    assert outcome.skipped == [0]


@pytest.mark.parametrize("strategy", [ChoiceScoring(), GridScoring(), SpeedScoring()])
def test_missing_config_fails_identically(strategy) -> None:
    with pytest.raises(ConfigMissing):
        strategy.score(None, [True])


def test_registry_covers_every_category() -> None:
    assert set(STRATEGIES) == set(Category)
    assert isinstance(get_strategy("speed"), SpeedScoring)
    assert isinstance(get_strategy(Category.MULTIPLE_CHOICE), ChoiceScoring)
    assert get_strategy("essay") is None
