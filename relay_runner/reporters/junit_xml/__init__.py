"""JUnit reporter module."""

from relay_runner.reporters.junit_xml.config import JUnitConfig
from relay_runner.reporters.junit_xml.manifest import junit_manifest
from relay_runner.reporters.junit_xml.reporter import JUnitReporter

__all__ = ["JUnitConfig", "JUnitReporter", "junit_manifest"]
