"""Sources of user configuration for ConfigState."""

from pathlib import Path
from typing import Dict, Optional, Protocol, Union

from .loader import default_settings_path, load_user_settings
from .models import UserSettings


class ConfigurationProvider(Protocol):
    """Read access to the user's configuration.

    ``reload()`` re-reads the underlying source; getters answer from the
    last load.
    """

    def reload(self) -> None: ...

    def get_executable_path(self) -> str: ...

    def get_config_path(self) -> str: ...

    def get_template_associations(self) -> Dict[str, str]: ...

    def get_default_variables(self, template_name: str) -> Dict[str, str]: ...


class YamlConfigurationProvider:
    """ConfigurationProvider backed by a YAML settings file.

    Nothing is read until the first ``reload()``; until then every getter
    answers with the default settings. ``ConfigState`` reloads on
    construction, so the file is read once per refresh.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else default_settings_path()
        self.settings = UserSettings()

    def reload(self) -> None:
        self.settings = load_user_settings(self.path)

    def get_executable_path(self) -> str:
        return self.settings.environment.executable_path

    def get_config_path(self) -> str:
        return self.settings.environment.configuration_file

    def get_template_associations(self) -> Dict[str, str]:
        return dict(self.settings.automation.template_associations)

    def get_default_variables(self, template_name: str) -> Dict[str, str]:
        defaults = self.settings.automation.default_template_variables
        return dict(defaults.get(template_name, {}))
