"""JUnit XML reporter for CI hosts."""

import xml.etree.ElementTree as ET
from collections.abc import Sequence
from dataclasses import dataclass
from typing import ClassVar

from relay_runner.models.outcome import TestResult
from relay_runner.models.run import RunInfo
from relay_runner.reporters.base import Reporter
from relay_runner.reporters.junit_xml.config import JUnitConfig


def _seconds(milliseconds: float) -> str:
    return f"{milliseconds / 1000:.3f}"


@dataclass(frozen=True, kw_only=True)
class JUnitReporter(Reporter):
    """Emits a single JUnit XML document as the run summary.

    JUnit has no notion of streaming, so begin and per-test events produce
    no payload.
    """

    format: ClassVar[str] = "JUNIT"

    config: JUnitConfig

    @classmethod
    def from_config(cls, config: JUnitConfig) -> "JUnitReporter":
        return cls(config=config)

    def report_begin(self, run_info: RunInfo) -> None:
        return None

    def report_complete(self, result: TestResult) -> None:
        return None

    def report_summary(
        self,
        duration: float,
        auto_fail_reason: str | None,
        results: Sequence[TestResult],
    ) -> str:
        statuses = [result.status for result in results]
        suite = ET.Element(
            "testsuite",
            {
                "name": self.config.suite_name,
                "tests": str(len(results)),
                "failures": str(statuses.count("fail")),
                "skipped": str(statuses.count("todo")),
                "errors": "0",
                "time": _seconds(duration),
            },
        )

        if auto_fail_reason is not None:
            properties = ET.SubElement(suite, "properties")
            ET.SubElement(
                properties, "property", {"name": "autoFail", "value": auto_fail_reason}
            )

        for result in results:
            *groups, name = result.labels or [""]
            case = ET.SubElement(
                suite,
                "testcase",
                {
                    "classname": " ".join(groups),
                    "name": name,
                    "time": _seconds(result.duration),
                },
            )
            if result.status == "fail":
                failure = ET.SubElement(
                    case, "failure", {"message": result.failures[0].message}
                )
                failure.text = "\n\n".join(
                    outcome.message
                    if outcome.given is None
                    else f"Given {outcome.given}\n\n{outcome.message}"
                    for outcome in result.failures
                )
            elif result.status == "todo":
                ET.SubElement(case, "skipped", {"message": "TODO"})

        return ET.tostring(suite, encoding="unicode", xml_declaration=True)
