"""Console reporter manifest."""

from relay_runner.reporters.console.config import ConsoleConfig
from relay_runner.reporters.console.reporter import ConsoleReporter
from relay_runner.reporters.manifest import ReporterManifest

console_manifest = ReporterManifest(
    config_cls=ConsoleConfig,
    reporter_factory=ConsoleReporter.from_config,
)
