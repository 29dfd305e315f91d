"""Tests for suite loading."""

import sys
from collections.abc import Iterator
from pathlib import Path
from types import ModuleType

import pytest

from relay_runner.models.run import DeclaredTest
from relay_runner.suite_loader import SuiteLoadError, load_suite
from relay_runner.testing.suites import failing, passing

MODULE_NAME = "relay_runner_fake_suite"


def exploding_factory() -> list[DeclaredTest]:
    raise RuntimeError("fixture database unavailable")


@pytest.fixture
def fake_suite() -> Iterator[ModuleType]:
    """Register an importable module holding a few suites."""
    module = ModuleType(MODULE_NAME)
    module.declared = [  # type: ignore[attr-defined]
        DeclaredTest(test=passing("a"), directive="only"),
        DeclaredTest(test=failing("b")),
    ]
    module.plain = [passing("c")]  # type: ignore[attr-defined]
    module.build = lambda: [passing("d")]  # type: ignore[attr-defined]
    module.broken = ["not a test"]  # type: ignore[attr-defined]
    module.number = 5  # type: ignore[attr-defined]
    module.exploding = exploding_factory  # type: ignore[attr-defined]
    sys.modules[MODULE_NAME] = module
    yield module
    del sys.modules[MODULE_NAME]


def test_loads_declared_tests(fake_suite: ModuleType) -> None:
    """Returns declared tests unchanged."""
    assert load_suite(f"{MODULE_NAME}:declared") == fake_suite.declared


def test_wraps_plain_tests(fake_suite: ModuleType) -> None:
    """Treats executable tests as declared without a directive."""
    (declared,) = load_suite(f"{MODULE_NAME}:plain")

    assert declared.directive == "run"
    assert list(declared.test.labels) == ["c"]


def test_calls_suite_factories(fake_suite: ModuleType) -> None:
    """Calls the attribute when it is a factory."""
    (declared,) = load_suite(f"{MODULE_NAME}:build")

    assert list(declared.test.labels) == ["d"]


@pytest.mark.parametrize(
    ("target", "match"),
    [
        ("no_colon", "must look like"),
        (":attr", "must look like"),
        (f"{MODULE_NAME}:", "must look like"),
        ("relay_runner_missing_module:tests", "Could not import"),
        (f"{MODULE_NAME}:missing", "has no attribute 'missing'"),
        (f"{MODULE_NAME}:broken", "contains str, expected a test"),
        (f"{MODULE_NAME}:number", "Could not build suite .*TypeError"),
        (f"{MODULE_NAME}:exploding", "RuntimeError: fixture database unavailable"),
    ],
)
def test_rejects_bad_targets(fake_suite: ModuleType, target: str, match: str) -> None:
    """Raises SuiteLoadError describing the problem."""
    with pytest.raises(SuiteLoadError, match=match):
        load_suite(target)


def test_wraps_errors_raised_at_import(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Reports a module that fails while importing as a load error."""
    (tmp_path / "relay_runner_crashing_suite.py").write_text(
        "raise RuntimeError('missing settings')\n"
    )
    monkeypatch.syspath_prepend(str(tmp_path))

    with pytest.raises(SuiteLoadError, match="RuntimeError: missing settings"):
        load_suite("relay_runner_crashing_suite:tests")


def test_wraps_errors_raised_while_iterating(fake_suite: ModuleType) -> None:
    """Reports a generator suite that fails partway through."""

    def generate() -> Iterator[DeclaredTest]:
        yield DeclaredTest(test=passing("a"))
        raise LookupError("no more cases")

    fake_suite.generated = generate  # type: ignore[attr-defined]

    with pytest.raises(SuiteLoadError, match="LookupError: no more cases"):
        load_suite(f"{MODULE_NAME}:generated")
