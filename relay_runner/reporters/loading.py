"""Reporter lookup through the `relay_runner.reporters` entry points."""

import logging
from collections.abc import Mapping
from importlib.metadata import EntryPoint, entry_points
from typing import Any

from relay_runner.reporters.base import Reporter
from relay_runner.reporters.manifest import ReporterManifest

log = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "relay_runner.reporters"


class ReporterNotFoundError(Exception):
    """No usable reporter is registered under the requested kind."""


def installed_reporters() -> dict[str, EntryPoint]:
    """Map each registered reporter kind to its entry point."""
    return {entry.name: entry for entry in entry_points(group=ENTRY_POINT_GROUP)}


def load_reporter_manifest(kind: str) -> ReporterManifest[Any]:
    """Import the manifest registered for a reporter kind.

    Raises:
        ReporterNotFoundError: If nothing is registered under `kind`, or the
            entry point does not resolve to a ReporterManifest

    """
    reporters = installed_reporters()
    if kind not in reporters:
        raise ReporterNotFoundError(
            f"Unknown reporter {kind!r}; installed reporters: "
            f"{', '.join(sorted(reporters)) or 'none'}"
        )

    manifest = reporters[kind].load()
    if not isinstance(manifest, ReporterManifest):
        raise ReporterNotFoundError(
            f"Entry point {reporters[kind].value!r} for reporter {kind!r} "
            f"is a {type(manifest).__name__}, not a ReporterManifest"
        )
    return manifest


def create_reporter(kind: str, options: Mapping[str, Any] | None = None) -> Reporter:
    """Build the reporter registered for `kind` from raw options.

    Raises:
        ReporterNotFoundError: If no reporter is registered under `kind`
        pydantic.ValidationError: If the options do not fit the reporter config

    """
    reporter = load_reporter_manifest(kind).create(options)
    log.debug("Created %s reporter for kind %r", reporter.format, kind)
    return reporter
