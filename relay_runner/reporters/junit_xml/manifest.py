"""JUnit reporter manifest."""

from relay_runner.reporters.junit_xml.config import JUnitConfig
from relay_runner.reporters.junit_xml.reporter import JUnitReporter
from relay_runner.reporters.manifest import ReporterManifest

junit_manifest = ReporterManifest(
    config_cls=JUnitConfig,
    reporter_factory=JUnitReporter.from_config,
)
