"""Tests for the console reporter."""

from relay_runner.models.outcome import (
    FailOutcome,
    PassOutcome,
    TestResult,
    TodoOutcome,
)
from relay_runner.models.run import RunInfo
from relay_runner.reporters.console import ConsoleConfig, ConsoleReporter
from relay_runner.testing.factories import TestResultFactory

reporter = ConsoleReporter(config=ConsoleConfig())


def test_begin_includes_reproduction_hint() -> None:
    """Shows the test count and a command that replays the run."""
    text = reporter.report_begin(
        RunInfo(
            test_count=12,
            paths=["src/", "tests/"],
            fuzz_runs=100,
            initial_seed=7,
            suite="checkout.tests:suite",
        )
    )

    assert text.startswith("relay-runner\n------------\n")
    assert "Running 12 test(s)." in text
    assert (
        "run: relay-runner checkout.tests:suite --fuzz 100 --seed 7"
        " --path src/ --path tests/\n"
    ) in text


def test_reproduce_command_quotes_arguments() -> None:
    """Quotes paths so the command can be pasted into a shell."""
    command = reporter.reproduce_command(
        RunInfo(
            test_count=1,
            paths=["my tests/"],
            fuzz_runs=5,
            initial_seed=0,
            suite="suite:tests",
        )
    )

    assert command == "relay-runner suite:tests --fuzz 5 --seed 0 --path 'my tests/'"


def test_passing_test_has_no_payload_by_default() -> None:
    """Stays quiet for passing tests."""
    assert reporter.report_complete(TestResultFactory.build()) is None


def test_passing_test_shown_when_configured() -> None:
    """Lists passing tests when show_passing is set."""
    verbose = ConsoleReporter(config=ConsoleConfig(show_passing=True))

    text = verbose.report_complete(
        TestResult(labels=["math", "adds"], outcomes=[PassOutcome()], duration=1)
    )

    assert text == "✓ math > adds\n"


def test_failing_test_shows_given_and_message() -> None:
    """Shows the label path, fuzz input and indented failure message."""
    text = reporter.report_complete(
        TestResult(
            labels=["math", "adds"],
            outcomes=[FailOutcome(message="Expected 4\nGot 5", given="(2, 2)")],
            duration=1,
        )
    )

    assert text == "✗ math > adds\n    Given (2, 2)\n    Expected 4\n    Got 5\n"


def test_todo_test_is_marked() -> None:
    """Marks todo tests."""
    text = reporter.report_complete(
        TestResult(labels=["later"], outcomes=[TodoOutcome()], duration=0)
    )

    assert text == "◦ later\n    TODO\n"


def test_summary_passed() -> None:
    """Reports a passed run with counts and duration."""
    text = reporter.report_summary(1234.4, None, [TestResultFactory.build()])

    assert text.startswith("TEST RUN PASSED\n")
    assert "Duration: 1234 ms" in text
    assert "Passed:   1" in text
    assert "Failed:   0" in text
    assert "Todo" not in text


def test_summary_failed() -> None:
    """Reports a failed run."""
    failed = TestResult(labels=["a"], outcomes=[FailOutcome(message="x")], duration=1)

    text = reporter.report_summary(10, "skip directive used", [failed])

    assert text.startswith("TEST RUN FAILED\nbecause skip directive used\n")
    assert "Failed:   1" in text


def test_summary_incomplete_with_auto_fail_reason() -> None:
    """Reports an incomplete run when auto-failed without failures."""
    text = reporter.report_summary(10, "exclusive focus directive used", [])

    assert text.startswith(
        "TEST RUN INCOMPLETE\nbecause exclusive focus directive used"
    )


def test_summary_incomplete_with_todos() -> None:
    """Reports an incomplete run when tests are left todo."""
    todo = TestResult(labels=["a"], outcomes=[TodoOutcome()], duration=1)

    text = reporter.report_summary(10, None, [todo])

    assert text.startswith("TEST RUN INCOMPLETE\n")
    assert "Todo:     1" in text
