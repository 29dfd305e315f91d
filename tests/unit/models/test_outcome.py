"""Tests for outcome and test result models."""

import pytest
from pydantic import ValidationError

from relay_runner.models.outcome import (
    FailOutcome,
    PassOutcome,
    TestResult,
    TodoOutcome,
    count_failures,
    to_outcome,
)
from relay_runner.testing.factories import FailOutcomeFactory, TestResultFactory


def test_encode_uses_wire_shape() -> None:
    """Encodes labels, tagged outcomes and duration."""
    result = TestResult(
        labels=["math", "adds"],
        outcomes=[
            PassOutcome(),
            FailOutcome(message="Expected 4, got 5", given="2"),
            TodoOutcome(),
        ],
        duration=12.5,
    )

    assert result.encode() == {
        "labels": ["math", "adds"],
        "outcomes": [
            {"type": "PASS"},
            {"type": "FAIL", "message": "Expected 4, got 5", "given": "2"},
            {"type": "TODO"},
        ],
        "duration": 12.5,
    }


def test_fail_outcome_given_defaults_to_null() -> None:
    """Encodes a missing given as null."""
    assert FailOutcome(message="nope").to_wire() == {
        "type": "FAIL",
        "message": "nope",
        "given": None,
    }


def test_decode_reproduces_encoded_result() -> None:
    """Decoding an encoded result gives back the same labels, outcomes, duration."""
    result = TestResultFactory.build(
        outcomes=[FailOutcomeFactory.build(), TodoOutcome(), PassOutcome()]
    )

    decoded = TestResult.decode(result.encode())

    assert list(decoded.labels) == list(result.labels)
    assert list(decoded.outcomes) == list(result.outcomes)
    assert decoded.duration == result.duration


def test_decode_rejects_unknown_outcome_type() -> None:
    """Rejects outcomes with an unknown type tag."""
    with pytest.raises(ValidationError):
        TestResult.decode(
            {"labels": ["a"], "outcomes": [{"type": "MAYBE"}], "duration": 1}
        )


def test_decode_rejects_negative_duration() -> None:
    """Rejects negative durations."""
    with pytest.raises(ValidationError):
        TestResult.decode({"labels": ["a"], "outcomes": [], "duration": -1})


@pytest.mark.parametrize(
    ("outcomes", "expected"),
    [
        ([PassOutcome()], "pass"),
        ([], "pass"),
        ([PassOutcome(), TodoOutcome()], "todo"),
        ([TodoOutcome(), FailOutcome(message="x")], "fail"),
    ],
)
def test_status(
    outcomes: list[PassOutcome | FailOutcome | TodoOutcome], expected: str
) -> None:
    """Failures win over todos, todos win over passes."""
    result = TestResult(labels=["t"], outcomes=outcomes, duration=0)

    assert result.status == expected


def test_to_outcome_accepts_models_and_mappings() -> None:
    """Accepts outcome models as-is and decodes wire mappings."""
    outcome = PassOutcome()

    assert to_outcome(outcome) is outcome
    assert to_outcome({"type": "FAIL", "message": "m"}) == FailOutcome(message="m")


def test_to_outcome_rejects_other_values() -> None:
    """Raises TypeError for values that are not outcomes."""
    with pytest.raises(TypeError, match="Expected an outcome, got bool"):
        to_outcome(True)


def test_count_failures_counts_outcomes_not_tests() -> None:
    """Counts every failed outcome across all results."""
    results = [
        TestResult(
            labels=["a"],
            outcomes=[FailOutcome(message="1"), FailOutcome(message="2")],
            duration=1,
        ),
        TestResult(labels=["b"], outcomes=[PassOutcome()], duration=1),
        TestResult(labels=["c"], outcomes=[FailOutcome(message="3")], duration=1),
    ]

    assert count_failures(results) == 3
    assert count_failures([]) == 0
