"""YAML user settings loader."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

import click
import yaml
from pydantic import ValidationError

from .environment import EnvironmentSubstitutionError, substitute_environment_variables
from .models import UserSettings

logger = logging.getLogger(__name__)

APP_NAME = "devinit-client"
SETTINGS_ENV_VAR = "DEVINIT_CLIENT_SETTINGS"


class SettingsError(Exception):
    """Exception raised when the user settings file cannot be used."""

    pass


def default_settings_path() -> Path:
    """Return the settings file location.

    ``$DEVINIT_CLIENT_SETTINGS`` wins over the per-user application
    directory.
    """
    override = os.environ.get(SETTINGS_ENV_VAR)
    if override:
        return Path(override)
    return Path(click.get_app_dir(APP_NAME)) / "settings.yml"


def load_user_settings(file_path: Optional[Union[str, Path]] = None) -> UserSettings:
    """Load and validate the user settings file.

    Args:
        file_path: Settings file to read. Defaults to
            ``default_settings_path()``.

    Returns:
        Validated UserSettings. A missing file yields default settings.

    Raises:
        SettingsError: If the file is unreadable, is not valid YAML, or does
            not match the schema
    """
    path = Path(file_path) if file_path is not None else default_settings_path()

    if not path.exists():
        logger.debug(f"No settings file at {path}, using defaults")
        return UserSettings()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise SettingsError(f"Cannot read settings file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise SettingsError(
            f"Failed to parse YAML file {path}: {e}. "
            f"Suggestion: Check YAML syntax using a validator."
        ) from e

    if data is None:
        return UserSettings()
    if not isinstance(data, dict):
        raise SettingsError(
            f"Settings file {path} must contain a mapping, "
            f"got {type(data).__name__}"
        )

    try:
        data = substitute_environment_variables(data)
    except EnvironmentSubstitutionError as e:
        raise SettingsError(
            f"Environment variable substitution failed in {path}: {e}"
        ) from e

    try:
        settings = UserSettings(**data)
    except ValidationError as e:
        raise SettingsError(f"Settings validation failed for {path}:\n{e}") from e

    logger.debug(f"Loaded settings from {path}")
    return settings
