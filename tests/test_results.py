import random

import pytest

from selfassessment.engine import (
    Journal,
    JournalLog,
    MissingLogEntry,
    MissingTestConfig,
    build_structure,
    calculate_results,
    compute_results,
    flatten_results,
    validate_config,
)
from selfassessment.engine import scoring

PERFECT_ANSWERS = {
    1001: [True, False],
    1002: [True, True, False],
    1003: [0, 1],
    1004: [[5, 6]],
    1005: [True, False],
    1006: [True],
    1007: [True],
    1008: [True],
}


def _journal(config, answers=PERFECT_ANSWERS) -> Journal:
    structure = build_structure(config, rng=random.Random(7))
    log = JournalLog.empty_for(structure)
    for set_index, structure_set in enumerate(structure.sets):
        for test in structure_set.tests():
            if test.id in answers:
                log.record(set_index, test.id, answers[test.id])
    return Journal(structure=structure, log=log)


def test_results_follow_structure_order(course_config) -> None:
    journal = _journal(course_config)
    result_sets = compute_results(course_config, journal)

    assert [result_set.set_id for result_set in result_sets] == [3001, 3002]
    expected_ids = [test.id for test in journal.structure.sets[0].tests()]
    assert [result.id for result in result_sets[0].tests] == expected_ids
    assert [result.id for result in result_sets[1].tests] == [1003, 1004]


def test_unevaluated_tests_are_left_out(course_config) -> None:
    result_sets = compute_results(course_config, _journal(course_config))
    assert 1005 not in [result.id for result in flatten_results(result_sets)]


def test_perfect_answers_reach_max_score(course_config) -> None:
    result_sets = compute_results(course_config, _journal(course_config))
    for result_set in result_sets:
        assert result_set.score == result_set.max_score
    assert result_sets[0].max_score == 1 + 2 + 1 + 1
    assert result_sets[1].max_score == 2 + 1


def test_wrong_answers_are_reported_per_option(course_config) -> None:
    answers = {**PERFECT_ANSWERS, 1002: [False, True, True], 1003: [1, 1]}
    result_sets = compute_results(course_config, _journal(course_config, answers))
    results = {result.id: result for result in flatten_results(result_sets)}

    assert results[1002].score == 1
    assert results[1002].correct_options == [1]
    assert results[1002].wrong_options == [2]
    assert results[1003].correct_options == [1]
    assert results[1003].wrong_options == [0]


def test_result_serializes_with_wire_names(course_config) -> None:
    result = flatten_results(compute_results(course_config, _journal(course_config)))[0]
    assert result.model_dump(by_alias=True) == {
        "id": 1001,
        "score": 1,
        "maxScore": 1,
        "correctOptions": [0],
        "wrongOptions": [],
    }


def test_missing_log_entry_aborts(course_config) -> None:
    answers = {key: val for key, val in PERFECT_ANSWERS.items() if key != 1004}
    journal = _journal(course_config, answers)

    with pytest.raises(MissingLogEntry):
        compute_results(course_config, journal)
    assert calculate_results(course_config, journal) is None


def test_unevaluated_test_needs_no_log_entry(course_config) -> None:
    answers = {key: val for key, val in PERFECT_ANSWERS.items() if key != 1005}
    assert calculate_results(course_config, _journal(course_config, answers)) is not None


def test_missing_test_config_aborts(course_config) -> None:
    journal = _journal(course_config)
    reduced = course_config.model_copy(
        update={"tests": [test for test in course_config.tests if test.id != 1002]}
    )

    with pytest.raises(MissingTestConfig):
        compute_results(reduced, journal)
    assert calculate_results(reduced, journal) is None


def test_category_without_strategy_is_skipped(course_config, monkeypatch) -> None:
    strategies = {
        category: strategy
        for category, strategy in scoring.STRATEGIES.items()
        if category != "speed"
    }
    monkeypatch.setattr(scoring, "STRATEGIES", strategies)

    result_sets = compute_results(course_config, _journal(course_config))
    assert [result.id for result in result_sets[1].tests] == [1003]


def test_answers_are_read_from_their_own_set() -> None:
    config = validate_config(
        {
            "title": "Repeated test",
            "validationSchema": "[0-9]",
            "tests": [
                {
                    "id": 1,
                    "type": "logic",
                    "category": "radio-buttons",
                    "description": "d",
                    "task": "t",
                    "evaluated": True,
                    "options": [{"text": "a", "correct": True}, {"text": "b", "correct": False}],
                }
            ],
            "sets": [{"id": 20, "elements": [1]}, {"id": 21, "elements": [1]}],
        }
    )
    structure = build_structure(config, rng=random.Random(1))
    log = JournalLog(sets=[{1: [True, False]}, {1: [False, True]}])

    first, second = compute_results(config, Journal(structure=structure, log=log))

    assert (first.tests[0].score, first.tests[0].wrong_options) == (1, [])
    assert (second.tests[0].score, second.tests[0].wrong_options) == (0, [1])


def test_answer_logged_in_another_set_is_still_found(course_config) -> None:
    journal = _journal(course_config)
    merged = {key: val for entries in journal.log.sets for key, val in entries.items()}
    journal.log = JournalLog(sets=[merged])

    assert calculate_results(course_config, journal) is not None
