"""Fixtures for integration tests."""

import textwrap
from pathlib import Path

import pytest

SUITE_SOURCE = textwrap.dedent(
    """
    from relay_runner.models.outcome import FailOutcome, PassOutcome, TodoOutcome
    from relay_runner.models.run import DeclaredTest
    from relay_runner.registry import ExecutableTest


    def explode():
        raise ZeroDivisionError("division by zero")


    passing = [
        ExecutableTest(labels=["math", "adds"], thunk=lambda: [PassOutcome()]),
        ExecutableTest(labels=["math", "later"], thunk=lambda: [TodoOutcome()]),
    ]

    mixed = [
        ExecutableTest(labels=["ok"], thunk=lambda: [PassOutcome()]),
        ExecutableTest(labels=["bad"], thunk=lambda: [FailOutcome(message="nope")]),
        ExecutableTest(labels=["crash"], thunk=explode),
    ]

    focused = [
        DeclaredTest(
            test=ExecutableTest(labels=["only"], thunk=lambda: [PassOutcome()]),
            directive="only",
        ),
        DeclaredTest(
            test=ExecutableTest(labels=["other"], thunk=lambda: [PassOutcome()])
        ),
    ]
    """
)


@pytest.fixture
def suite_dir(tmp_path: Path) -> Path:
    """Write an importable suite module and return its directory."""
    (tmp_path / "integration_suite.py").write_text(SUITE_SOURCE)
    return tmp_path
