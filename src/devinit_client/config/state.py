"""Shared invocation configuration."""

import logging
from dataclasses import dataclass
from typing import Optional

from ..runner.models import InvocationSpec
from .provider import ConfigurationProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunnerSettings:
    """Snapshot of the values every invocation is seeded with."""

    executable_path: str = ""
    config_file_path: Optional[str] = None


class ConfigState:
    """Process-wide source of the executable and config-file paths.

    Values are read from ``provider`` at construction and on every
    ``refresh()``. Each refresh replaces the whole snapshot in a single
    assignment, so readers see either the old pair or the new one.
    """

    def __init__(self, provider: ConfigurationProvider):
        self.provider = provider
        self._settings = RunnerSettings()
        self.refresh()

    @property
    def settings(self) -> RunnerSettings:
        return self._settings

    def refresh(self) -> None:
        """Re-read both paths from the configuration provider.

        Call this whenever the host reports a configuration change.
        """
        self.provider.reload()

        config_path = self.provider.get_config_path()
        self._settings = RunnerSettings(
            executable_path=self.provider.get_executable_path(),
            config_file_path=config_path if config_path else None,
        )
        logger.debug(f"Runner settings refreshed: {self._settings}")

    def new_invocation_spec(self) -> InvocationSpec:
        """Create a File/WriteToPath spec seeded with the current paths."""
        settings = self._settings
        return InvocationSpec(
            executable_path=settings.executable_path,
            config_file_path=settings.config_file_path,
        )
