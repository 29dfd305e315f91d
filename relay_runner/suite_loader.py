"""Load declared tests from an importable module attribute."""

import importlib
import logging
from collections.abc import Sequence

from relay_runner.models.run import DeclaredTest
from relay_runner.registry import ExecutableTest

log = logging.getLogger(__name__)


class SuiteLoadError(Exception):
    """Raised when a suite target cannot be resolved to declared tests."""


def load_suite(target: str) -> Sequence[DeclaredTest]:
    """Resolve a `module:attribute` target to declared tests.

    Plain ExecutableTest entries are treated as declared without a directive.

    Raises:
        SuiteLoadError: If the target is malformed, cannot be imported, or does
            not name a sequence of tests

    """
    module_name, sep, attribute = target.partition(":")
    if not sep or not module_name or not attribute:
        raise SuiteLoadError(
            f"Suite target must look like 'module:attribute': {target!r}"
        )

    try:
        module = importlib.import_module(module_name)
    except Exception as e:
        raise SuiteLoadError(
            f"Could not import suite module {module_name!r}: {_describe(e)}"
        ) from e

    try:
        suite = getattr(module, attribute)
    except AttributeError:
        raise SuiteLoadError(
            f"Module {module_name!r} has no attribute {attribute!r}"
        ) from None

    try:
        items = list(suite() if callable(suite) else suite)
    except Exception as e:
        raise SuiteLoadError(f"Could not build suite {target}: {_describe(e)}") from e

    declared: list[DeclaredTest] = []
    for item in items:
        match item:
            case DeclaredTest():
                declared.append(item)
            case ExecutableTest():
                declared.append(DeclaredTest(test=item))
            case _:
                raise SuiteLoadError(
                    f"{target} contains {type(item).__name__}, expected a test"
                )

    log.info("Loaded %d test(s) from %s", len(declared), target)
    return declared


def _describe(error: Exception) -> str:
    return f"{type(error).__name__}: {error}"
