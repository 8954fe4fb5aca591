"""User configuration and shared invocation settings."""

from .environment import EnvironmentSubstitutionError, substitute_environment_variables
from .loader import SettingsError, default_settings_path, load_user_settings
from .models import AutomationSettings, EnvironmentSettings, UserSettings
from .provider import ConfigurationProvider, YamlConfigurationProvider
from .state import ConfigState, RunnerSettings

__all__ = [
    # Settings file
    "UserSettings",
    "EnvironmentSettings",
    "AutomationSettings",
    "load_user_settings",
    "default_settings_path",
    "SettingsError",
    "substitute_environment_variables",
    "EnvironmentSubstitutionError",
    # Providers and state
    "ConfigurationProvider",
    "YamlConfigurationProvider",
    "ConfigState",
    "RunnerSettings",
]
