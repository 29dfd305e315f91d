"""Plain-text reporter for terminal hosts."""

import shlex
from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar

from relay_runner.models.outcome import FailOutcome, TestResult, TodoOutcome
from relay_runner.models.run import RunInfo
from relay_runner.reporters.base import Reporter
from relay_runner.reporters.console.config import ConsoleConfig

STATUS_SYMBOLS = {
    "pass": "✓",
    "fail": "✗",
    "todo": "◦",
}


@dataclass(frozen=True, kw_only=True)
class ConsoleReporter(Reporter):
    """Renders run events as plain text."""

    format: ClassVar[str] = "CONSOLE"

    config: ConsoleConfig

    @classmethod
    def from_config(cls, config: ConsoleConfig) -> "ConsoleReporter":
        return cls(config=config)

    def report_begin(self, run_info: RunInfo) -> str:
        title = self.config.runner_name
        lines = [
            title,
            "-" * len(title),
            "",
            f"Running {run_info.test_count} test(s). To reproduce these results, run: "
            + self.reproduce_command(run_info),
            "",
        ]
        return "\n".join(lines)

    def reproduce_command(self, run_info: RunInfo) -> str:
        """Shell command that replays this run with the same seed."""
        args = [self.config.runner_name]
        if run_info.suite:
            args.append(run_info.suite)
        args += ["--fuzz", str(run_info.fuzz_runs)]
        args += ["--seed", str(run_info.initial_seed)]
        for path in run_info.paths:
            args += ["--path", path]
        return shlex.join(args)

    def report_complete(self, result: TestResult) -> str | None:
        if result.status == "pass" and not self.config.show_passing:
            return None

        symbol = STATUS_SYMBOLS[result.status]
        lines = [f"{symbol} {' > '.join(result.labels)}"]
        for outcome in result.outcomes:
            if isinstance(outcome, FailOutcome):
                if outcome.given is not None:
                    lines.append(f"    Given {outcome.given}")
                lines.extend(f"    {line}" for line in outcome.message.splitlines())
            elif isinstance(outcome, TodoOutcome):
                lines.append("    TODO")
        return "\n".join(lines) + "\n"

    def report_summary(
        self,
        duration: float,
        auto_fail_reason: str | None,
        results: Sequence[TestResult],
    ) -> str:
        statuses = [result.status for result in results]
        passed = statuses.count("pass")
        failed = statuses.count("fail")
        todo = statuses.count("todo")

        if failed:
            headline = "TEST RUN FAILED"
        elif auto_fail_reason is not None or todo:
            headline = "TEST RUN INCOMPLETE"
        else:
            headline = "TEST RUN PASSED"

        lines = [headline]
        if auto_fail_reason is not None:
            lines.append(f"because {auto_fail_reason}")
        lines.extend(
            [
                "",
                f"Duration: {round(duration)} ms",
                f"Passed:   {passed}",
                f"Failed:   {failed}",
            ]
        )
        if todo:
            lines.append(f"Todo:     {todo}")
        return "\n".join(lines) + "\n"
