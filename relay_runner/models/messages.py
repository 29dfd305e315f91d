"""Control messages from the host and report messages back to it."""

from collections.abc import Mapping, Sequence
from typing import Annotated, Any, Literal

from pydantic import Field, JsonValue, TypeAdapter

from relay_runner.models.base import Model
from relay_runner.models.outcome import TestResult


class BeginRequest(Model):
    """Host asks for the run-start report."""

    type: Literal["BEGIN"] = "BEGIN"


class TestRequest(Model):
    """Host asks for the test at `index` to be run."""

    __test__ = False

    type: Literal["TEST"] = "TEST"
    index: int = Field(..., ge=0, strict=True)


class SummaryRequest(Model):
    """Host asks for the final verdict over the results it accumulated."""

    type: Literal["SUMMARY"] = "SUMMARY"
    results: Sequence[TestResult] = Field(default_factory=list)


InboundMessage = Annotated[
    BeginRequest | TestRequest | SummaryRequest, Field(discriminator="type")
]

INBOUND_ADAPTER = TypeAdapter(InboundMessage)


class BeginReport(Model):
    """Run-start payload from the reporter."""

    type: Literal["BEGIN"] = "BEGIN"
    format: str
    test_count: int
    message: JsonValue


class TestCompletedReport(Model):
    """A test finished; carries its encoded result."""

    __test__ = False

    type: Literal["TEST_COMPLETED"] = "TEST_COMPLETED"
    index: int
    summary: TestResult
    format: str
    message: JsonValue = None


class FinishedReport(Model):
    """Nothing is left to dispatch at or past the requested index."""

    type: Literal["FINISHED"] = "FINISHED"


class SummaryReport(Model):
    """Final verdict of the run."""

    type: Literal["SUMMARY"] = "SUMMARY"
    exit_code: Literal[0, 2, 3]
    format: str
    message: JsonValue


class ErrorReport(Model):
    """An inbound message could not be handled."""

    type: Literal["ERROR"] = "ERROR"
    message: str


type OutboundMessage = (
    BeginReport | TestCompletedReport | FinishedReport | SummaryReport | ErrorReport
)


def decode_inbound(
    raw: str | bytes | Mapping[str, Any],
) -> BeginRequest | TestRequest | SummaryRequest:
    """Decode a control message from JSON text or an already-parsed mapping.

    Raises:
        pydantic.ValidationError: If the message is malformed

    """
    if isinstance(raw, str | bytes):
        return INBOUND_ADAPTER.validate_json(raw)
    return INBOUND_ADAPTER.validate_python(raw)
