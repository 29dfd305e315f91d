"""JSON reporter module."""

from relay_runner.reporters.json_report.config import JsonConfig
from relay_runner.reporters.json_report.manifest import json_manifest
from relay_runner.reporters.json_report.reporter import JsonReporter

__all__ = ["JsonConfig", "JsonReporter", "json_manifest"]
