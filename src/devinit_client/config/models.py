from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class EnvironmentSettings(BaseModel):
    """Where to find the generator tool and its configuration.

    Attributes:
        executable_path: Path to the ``devinit`` executable. Empty means
            search PATH.
        configuration_file: Path to the ``devinitrc.yml`` file handed to the
            tool. Empty means the tool's own default.
    """

    executable_path: str = ""
    configuration_file: str = ""


class AutomationSettings(BaseModel):
    """Template automation settings.

    Attributes:
        template_associations: Filename glob to file template name, in
            priority order.
        default_template_variables: Stored default variable values, keyed by
            template name.

    Example:
        AutomationSettings(
            template_associations={"*.py": "python"},
            default_template_variables={"python": {"author": "Jane"}},
        )
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    template_associations: Dict[str, str] = Field(default_factory=dict)
    default_template_variables: Dict[str, Dict[str, str]] = Field(
        default_factory=dict
    )


class UserSettings(BaseModel):
    """Top-level user settings file."""

    environment: EnvironmentSettings = Field(default_factory=EnvironmentSettings)
    automation: AutomationSettings = Field(default_factory=AutomationSettings)
