"""Describes how a reporter plugin is configured and built."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from relay_runner.reporters.base import Reporter


@dataclass(frozen=True, kw_only=True)
class ReporterManifest[ConfigT: BaseModel]:
    """Pairs a reporter's options schema with the callable that builds it.

    Each reporter package exports one manifest and registers it under the
    `relay_runner.reporters` entry-point group.
    """

    config_cls: type[ConfigT]
    reporter_factory: Callable[[ConfigT], Reporter]

    def create(self, options: Mapping[str, Any] | None = None) -> Reporter:
        """Validate host-supplied options and build the reporter.

        Args:
            options: Raw reporter options, usually decoded from
                `--reporter-config`; missing keys take the config defaults

        Raises:
            pydantic.ValidationError: If the options do not fit `config_cls`

        """
        config = self.config_cls.model_validate(dict(options or {}))
        return self.reporter_factory(config)
