"""Structured reporter emitting one JSON event object per run event."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, ClassVar

from relay_runner.models.outcome import PassOutcome, TestResult
from relay_runner.models.run import RunInfo
from relay_runner.reporters.base import Reporter
from relay_runner.reporters.json_report.config import JsonConfig


@dataclass(frozen=True, kw_only=True)
class JsonReporter(Reporter):
    """Emits runStart, testCompleted and runComplete events."""

    format: ClassVar[str] = "JSON"

    config: JsonConfig

    @classmethod
    def from_config(cls, config: JsonConfig) -> "JsonReporter":
        return cls(config=config)

    def report_begin(self, run_info: RunInfo) -> dict[str, Any]:
        return {
            "event": "runStart",
            "testCount": run_info.test_count,
            "fuzzRuns": run_info.fuzz_runs,
            "paths": list(run_info.paths),
            "initialSeed": run_info.initial_seed,
        }

    def report_complete(self, result: TestResult) -> dict[str, Any]:
        outcomes = [
            outcome.to_wire()
            for outcome in result.outcomes
            if self.config.include_passing_outcomes
            or not isinstance(outcome, PassOutcome)
        ]
        return {
            "event": "testCompleted",
            "status": result.status,
            "labels": list(result.labels),
            "outcomes": outcomes,
            "duration": result.duration,
        }

    def report_summary(
        self,
        duration: float,
        auto_fail_reason: str | None,
        results: Sequence[TestResult],
    ) -> dict[str, Any]:
        statuses = [result.status for result in results]
        return {
            "event": "runComplete",
            "passed": statuses.count("pass"),
            "failed": statuses.count("fail"),
            "todo": statuses.count("todo"),
            "duration": duration,
            "autoFail": auto_fail_reason,
        }
