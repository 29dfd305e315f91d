"""Abstract base class for reporters."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar

from pydantic import JsonValue

from relay_runner.models.outcome import TestResult
from relay_runner.models.run import RunInfo


@dataclass(frozen=True, kw_only=True)
class Reporter(ABC):
    """Turns run events into payloads for the host.

    `format` names the payload schema so the host knows how to render the
    payloads it receives.
    """

    format: ClassVar[str]

    @abstractmethod
    def report_begin(self, run_info: RunInfo) -> JsonValue | None:
        """Build the run-start payload.

        Args:
            run_info: Metadata of the run being started

        Returns:
            Payload to send, or None to send no begin report

        """

    @abstractmethod
    def report_complete(self, result: TestResult) -> JsonValue | None:
        """Build the payload for one completed test, or None."""

    @abstractmethod
    def report_summary(
        self,
        duration: float,
        auto_fail_reason: str | None,
        results: Sequence[TestResult],
    ) -> JsonValue:
        """Build the final summary payload.

        Args:
            duration: Run duration in milliseconds
            auto_fail_reason: Reason the run is auto-failed, if any
            results: Results of every test the host ran

        Returns:
            Summary payload

        """
