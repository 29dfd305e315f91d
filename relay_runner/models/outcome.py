"""Models for assertion outcomes and per-test results."""

from collections.abc import Iterable, Mapping, Sequence
from typing import Annotated, Any, Literal

from pydantic import Field, TypeAdapter

from relay_runner.models.base import Model


class PassOutcome(Model):
    """An assertion that held."""

    type: Literal["PASS"] = "PASS"


class FailOutcome(Model):
    """An assertion that did not hold."""

    type: Literal["FAIL"] = "FAIL"
    message: str = Field(..., description="Failure description")
    given: str | None = Field(
        default=None, description="Input that produced the failure, if fuzzed"
    )


class TodoOutcome(Model):
    """An assertion intentionally left unimplemented."""

    type: Literal["TODO"] = "TODO"


Outcome = Annotated[
    PassOutcome | FailOutcome | TodoOutcome, Field(discriminator="type")
]

OUTCOME_ADAPTER = TypeAdapter(Outcome)


class TestResult(Model):
    """Result of running a single test."""

    __test__ = False

    labels: Sequence[str] = Field(..., description="Label path, outermost first")
    outcomes: Sequence[Outcome] = Field(default_factory=list)
    duration: float = Field(..., ge=0, description="Duration in milliseconds")

    @property
    def failures(self) -> Sequence[FailOutcome]:
        """Failed outcomes, in order."""
        return [o for o in self.outcomes if isinstance(o, FailOutcome)]

    @property
    def status(self) -> Literal["pass", "fail", "todo"]:
        """Overall status: any failure wins over any todo."""
        if self.failures:
            return "fail"
        if any(isinstance(o, TodoOutcome) for o in self.outcomes):
            return "todo"
        return "pass"

    def encode(self) -> dict[str, Any]:
        """Encode for the wire."""
        return self.to_wire()

    @classmethod
    def decode(cls, data: Mapping[str, Any]) -> "TestResult":
        """Decode from the wire form produced by encode()."""
        return cls.model_validate(data)


def to_outcome(value: Any) -> PassOutcome | FailOutcome | TodoOutcome:
    """Convert a produced assertion result into an outcome.

    Accepts outcome models or their wire form.

    Raises:
        TypeError: If the value is neither
        pydantic.ValidationError: If a mapping does not describe an outcome

    """
    if isinstance(value, PassOutcome | FailOutcome | TodoOutcome):
        return value
    if isinstance(value, Mapping):
        return OUTCOME_ADAPTER.validate_python(value)
    raise TypeError(f"Expected an outcome, got {type(value).__name__}")


def count_failures(results: Iterable[TestResult]) -> int:
    """Count failed outcomes across all results."""
    return sum(len(result.failures) for result in results)
