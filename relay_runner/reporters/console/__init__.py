"""Console reporter module."""

from relay_runner.reporters.console.config import ConsoleConfig
from relay_runner.reporters.console.manifest import console_manifest
from relay_runner.reporters.console.reporter import ConsoleReporter

__all__ = ["ConsoleConfig", "ConsoleReporter", "console_manifest"]
