"""Orchestrator driving test dispatch on behalf of a host."""

import asyncio
import enum
import inspect
import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from pydantic import ValidationError

from relay_runner.channels.base import Channel, RawMessage
from relay_runner.models.messages import (
    BeginReport,
    BeginRequest,
    ErrorReport,
    FinishedReport,
    OutboundMessage,
    SummaryReport,
    SummaryRequest,
    TestCompletedReport,
    TestRequest,
    decode_inbound,
)
from relay_runner.models.outcome import (
    FailOutcome,
    Outcome,
    TestResult,
    count_failures,
    to_outcome,
)
from relay_runner.models.run import (
    ONLY_REASON,
    SKIP_REASON,
    Invalid,
    OnlyFocused,
    Plain,
    RunConfig,
    RunInfo,
    Skipping,
)
from relay_runner.registry import ExecutableTest, TestRegistry
from relay_runner.reporters.base import Reporter
from relay_runner.reporters.loading import create_reporter
from relay_runner.verdict import compute_exit_code

log = logging.getLogger(__name__)


def now_ms() -> float:
    """Current time in milliseconds on a monotonic clock."""
    return time.monotonic() * 1000


class Phase(enum.Enum):
    READY = "ready"
    RUNNING = "running"
    DONE = "done"


@dataclass(kw_only=True)
class Orchestrator:
    """Owns the pending tests of a run and answers host control messages.

    Messages are handled one at a time; the host decides the order in which
    tests run and the orchestrator never dispatches on its own.
    """

    registry: TestRegistry
    run_info: RunInfo
    reporter: Reporter
    start_time: float
    auto_fail_reason: str | None = None
    clock: Callable[[], float] = now_ms
    phase: Phase = Phase.READY
    exit_code: int | None = None
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)

    @classmethod
    def initialize(
        cls,
        config: RunConfig,
        *,
        reporter: Reporter | None = None,
        clock: Callable[[], float] = now_ms,
    ) -> tuple["Orchestrator", Sequence[OutboundMessage]]:
        """Build an orchestrator for a run.

        Args:
            config: Run configuration assembled by the caller
            reporter: Reporter to use instead of loading `config.reporter_kind`
            clock: Millisecond clock used for test and run durations

        Returns:
            The orchestrator and the messages to send right away (always none;
            the host asks for the begin report explicitly)

        """
        match config.runner_source:
            case Plain(tests):
                auto_fail_reason = None
            case OnlyFocused(tests):
                auto_fail_reason = ONLY_REASON
            case Skipping(tests):
                auto_fail_reason = SKIP_REASON
            case Invalid(reason):
                tests = []
                auto_fail_reason = reason

        registry = TestRegistry.from_tests(tests)
        run_info = RunInfo(
            test_count=len(registry),
            paths=config.paths,
            fuzz_runs=config.fuzz_runs,
            initial_seed=config.initial_seed,
            suite=config.suite,
        )
        if reporter is None:
            reporter = create_reporter(config.reporter_kind, config.reporter_options)

        log.info(
            "Initialized run: tests=%d reporter=%s auto_fail=%s",
            run_info.test_count,
            reporter.format,
            auto_fail_reason,
        )
        orchestrator = cls(
            registry=registry,
            run_info=run_info,
            reporter=reporter,
            start_time=config.start_time,
            auto_fail_reason=auto_fail_reason,
            clock=clock,
        )
        return orchestrator, []

    async def serve(self, channel: Channel) -> int | None:
        """Answer messages from the channel until the run is summarized.

        Returns:
            The exit code from the summary, or None if the host closed the
            channel first

        """
        while self.phase is not Phase.DONE:
            raw = await channel.receive()
            if raw is None:
                log.warning("Channel closed before the run was summarized")
                return None
            for message in await self.handle(raw):
                await channel.send(message)
        return self.exit_code

    async def handle(self, raw: RawMessage) -> Sequence[OutboundMessage]:
        """Process one inbound message to completion.

        Returns:
            Messages to send to the host, in order (possibly none)

        """
        async with self._lock:
            try:
                request = decode_inbound(raw)
            except ValidationError as e:
                log.warning("Could not decode message: %s", e)
                return [ErrorReport(message=str(e))]

            if self.phase is Phase.DONE:
                log.warning("Ignoring %s message: run already summarized", request.type)
                return [
                    ErrorReport(
                        message=f"Run already summarized; ignoring {request.type}"
                    )
                ]

            match request:
                case BeginRequest():
                    return self._begin()
                case TestRequest(index=index):
                    return await self._request_test(index)
                case SummaryRequest(results=results):
                    return self._summarize(results)

    def _begin(self) -> Sequence[OutboundMessage]:
        payload = self.reporter.report_begin(self.run_info)
        if payload is None:
            return []
        return [
            BeginReport(
                format=self.reporter.format,
                test_count=self.run_info.test_count,
                message=payload,
            )
        ]

    async def _request_test(self, index: int) -> Sequence[OutboundMessage]:
        if index >= self.run_info.test_count:
            return [FinishedReport()]

        entry = self.registry.lookup_and_remove(index)
        if entry is None:
            log.warning("No pending test with index %d; already dispatched?", index)
            return []

        self.phase = Phase.RUNNING
        result = await self._dispatch(entry)
        log.debug(
            "Test completed: index=%d status=%s duration=%.1fms",
            index,
            result.status,
            result.duration,
        )
        return [
            TestCompletedReport(
                index=index,
                summary=result,
                format=self.reporter.format,
                message=self.reporter.report_complete(result),
            )
        ]

    async def _dispatch(self, entry: ExecutableTest) -> TestResult:
        started = self.clock()
        outcomes = await run_thunk(entry)
        finished = self.clock()
        return TestResult(
            labels=entry.labels,
            outcomes=outcomes,
            duration=max(finished - started, 0.0),
        )

    def _summarize(self, results: Sequence[TestResult]) -> Sequence[OutboundMessage]:
        duration = max(self.clock() - self.start_time, 0.0)
        failed_count = count_failures(results)
        self.exit_code = compute_exit_code(failed_count, self.auto_fail_reason)
        payload = self.reporter.report_summary(
            duration, self.auto_fail_reason, results
        )
        self.phase = Phase.DONE

        log.info(
            "Run summarized: results=%d failed_outcomes=%d exit_code=%d",
            len(results),
            failed_count,
            self.exit_code,
        )
        return [
            SummaryReport(
                exit_code=self.exit_code,
                format=self.reporter.format,
                message=payload,
            )
        ]


async def run_thunk(entry: ExecutableTest) -> list[Outcome]:
    """Run a test's thunk, turning any exception into a single failure.

    `SystemExit` from test code counts as a failure too; interrupts and
    cancellation still propagate.
    """
    try:
        produced = entry.thunk()
        if inspect.isawaitable(produced):
            produced = await produced
        return [to_outcome(value) for value in produced]
    except (Exception, SystemExit) as e:
        log.info("Test %s raised", " > ".join(entry.labels), exc_info=True)
        return [
            FailOutcome(
                message=f"This test failed because it threw an exception: {e!r}"
            )
        ]
