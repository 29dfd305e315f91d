"""Run metadata, runner sources and run configuration."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from relay_runner.registry import ExecutableTest

ONLY_REASON = "exclusive focus directive used"
SKIP_REASON = "skip directive used"
NO_TESTS_REASON = (
    "No tests were found. Make sure the suite exposes a sequence of declared tests."
)

MAX_SEED = 2**32


@dataclass(frozen=True, kw_only=True)
class RunInfo:
    """Immutable metadata describing a run."""

    test_count: int
    paths: Sequence[str]
    fuzz_runs: int
    initial_seed: int
    suite: str | None = None  # `module:attribute` the tests were loaded from


@dataclass(frozen=True)
class Plain:
    """Every declared test runs."""

    tests: Sequence[ExecutableTest]


@dataclass(frozen=True)
class OnlyFocused:
    """Only tests marked with the exclusive focus directive run."""

    tests: Sequence[ExecutableTest]


@dataclass(frozen=True)
class Skipping:
    """Some declared tests were skipped; the rest run."""

    tests: Sequence[ExecutableTest]


@dataclass(frozen=True)
class Invalid:
    """The test set could not be assembled; nothing runs."""

    reason: str


type RunnerSource = Plain | OnlyFocused | Skipping | Invalid


@dataclass(frozen=True, kw_only=True)
class RunConfig:
    """Everything needed to initialize an orchestrator."""

    start_time: float
    paths: Sequence[str] = ()
    fuzz_runs: int = 100
    initial_seed: int = 0
    runner_source: RunnerSource
    reporter_kind: str = "console"
    reporter_options: Mapping[str, Any] = field(default_factory=dict)
    suite: str | None = None


@dataclass(frozen=True, kw_only=True)
class DeclaredTest:
    """A test as declared by a suite, before directives are applied."""

    test: ExecutableTest
    directive: Literal["run", "only", "skip"] = "run"


def collect_runner_source(declared: Sequence[DeclaredTest]) -> RunnerSource:
    """Apply focus/skip directives and validate labels.

    Returns Invalid for an empty suite, blank labels or duplicate label
    paths; otherwise OnlyFocused if any test is focused, Skipping if any
    test is skipped, Plain if neither.
    """
    if not declared:
        return Invalid(NO_TESTS_REASON)

    seen: set[tuple[str, ...]] = set()
    for entry in declared:
        labels = tuple(entry.test.labels)
        if not labels or any(not label.strip() for label in labels):
            return Invalid(
                f"A test has a blank label: {' > '.join(labels) or '<empty>'}. "
                "Give every test and group a non-empty description."
            )
        if labels in seen:
            return Invalid(
                f"Multiple tests share the label path: {' > '.join(labels)}. "
                "Give each test a unique description."
            )
        seen.add(labels)

    focused = [entry.test for entry in declared if entry.directive == "only"]
    if focused:
        return OnlyFocused(focused)

    kept = [entry.test for entry in declared if entry.directive != "skip"]
    if len(kept) < len(declared):
        return Skipping(kept)

    return Plain([entry.test for entry in declared])


def parse_seed(text: str) -> int:
    """Parse a seed given on the command line.

    Raises:
        ValueError: If the text is not an integer in [0, 2**32)

    """
    try:
        seed = int(text)
    except ValueError:
        raise ValueError(f"Invalid seed {text!r}: expected an integer") from None
    if not 0 <= seed < MAX_SEED:
        raise ValueError(f"Invalid seed {seed}: must be between 0 and {MAX_SEED - 1}")
    return seed
