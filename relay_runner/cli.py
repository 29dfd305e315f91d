"""CLI entry point for the test relay runner."""

import argparse
import asyncio
import json
import logging
import random
import sys
from collections.abc import Sequence
from contextlib import AbstractAsyncContextManager
from typing import Any, Literal

from relay_runner.channels.base import Channel
from relay_runner.channels.stream import StreamChannel
from relay_runner.channels.websocket import WebSocketChannel
from relay_runner.models.run import (
    MAX_SEED,
    Invalid,
    RunConfig,
    RunnerSource,
    collect_runner_source,
    parse_seed,
)
from relay_runner.orchestrator import Orchestrator, now_ms
from relay_runner.suite_loader import SuiteLoadError, load_suite

EXIT_CHANNEL_CLOSED = 1


def resolve_runner_source(suite: str, seed: str | None) -> tuple[RunnerSource, int]:
    """Load the suite and validate the seed.

    Problems are folded into an Invalid runner source so the host still gets a
    summary explaining them.
    """
    log = logging.getLogger("relay_runner")

    initial_seed = random.randrange(MAX_SEED)
    if seed is not None:
        try:
            initial_seed = parse_seed(seed)
        except ValueError as e:
            log.error("%s", e)
            return Invalid(str(e)), 0

    try:
        declared = load_suite(suite)
    except SuiteLoadError as e:
        log.error("%s", e)
        return Invalid(str(e)), initial_seed

    return collect_runner_source(declared), initial_seed


def open_channel(
    transport: Literal["stdio", "websocket"], url: str | None
) -> AbstractAsyncContextManager[Channel]:
    """Open the channel to the host for the chosen transport."""
    if transport == "websocket":
        if url is None:
            raise ValueError("--url is required for the websocket transport")
        return WebSocketChannel.from_url(url)
    return StreamChannel.from_stdio()


async def run(
    suite: str,
    reporter_key: str = "console",
    reporter_config_json: str = "{}",
    seed: str | None = None,
    fuzz_runs: int = 100,
    paths: Sequence[str] = (),
    transport: Literal["stdio", "websocket"] = "stdio",
    url: str | None = None,
) -> int:
    """Serve one run to the host and return the exit code."""
    log = logging.getLogger("relay_runner")
    start_time = now_ms()

    runner_source, initial_seed = resolve_runner_source(suite, seed)
    reporter_options: dict[str, Any] = json.loads(reporter_config_json)

    config = RunConfig(
        start_time=start_time,
        paths=tuple(paths),
        fuzz_runs=fuzz_runs,
        initial_seed=initial_seed,
        runner_source=runner_source,
        reporter_kind=reporter_key,
        reporter_options=reporter_options,
        suite=suite,
    )
    orchestrator, initial_messages = Orchestrator.initialize(config)

    log.info("Serving %d test(s) over %s", orchestrator.run_info.test_count, transport)
    async with open_channel(transport, url) as channel:
        for message in initial_messages:
            await channel.send(message)
        exit_code = await orchestrator.serve(channel)

    if exit_code is None:
        log.error("Host closed the channel before requesting a summary")
        return EXIT_CHANNEL_CLOSED
    return exit_code


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run tests on request from a host process"
    )
    parser.add_argument(
        "suite",
        help="Declared tests to serve, as module:attribute",
    )
    parser.add_argument(
        "--reporter",
        default="console",
        help="Reporter key (console, json, junit)",
    )
    parser.add_argument(
        "--reporter-config",
        default="{}",
        help="JSON configuration for the reporter",
    )
    parser.add_argument(
        "--seed",
        default=None,
        help="Initial seed for fuzzed tests (random if omitted)",
    )
    parser.add_argument(
        "--fuzz",
        type=int,
        default=100,
        help="Number of fuzz runs per fuzzed test",
    )
    parser.add_argument(
        "--path",
        action="append",
        default=[],
        dest="paths",
        help="Source path under test (repeatable)",
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "websocket"],
        default="stdio",
        help="How to reach the host",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Host websocket URL (websocket transport only)",
    )

    args = parser.parse_args()
    if args.transport == "websocket" and args.url is None:
        parser.error("--url is required for the websocket transport")

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    exit_code = asyncio.run(
        run(
            suite=args.suite,
            reporter_key=args.reporter,
            reporter_config_json=args.reporter_config,
            seed=args.seed,
            fuzz_runs=args.fuzz,
            paths=args.paths,
            transport=args.transport,
            url=args.url,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
