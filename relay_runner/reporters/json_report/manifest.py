"""JSON reporter manifest."""

from relay_runner.reporters.json_report.config import JsonConfig
from relay_runner.reporters.json_report.reporter import JsonReporter
from relay_runner.reporters.manifest import ReporterManifest

json_manifest = ReporterManifest(
    config_cls=JsonConfig,
    reporter_factory=JsonReporter.from_config,
)
