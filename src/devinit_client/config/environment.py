"""Environment variable substitution for user settings values."""

import os
import re
from typing import Any

_VARIABLE_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)([:?-].*?)?\}")


class EnvironmentSubstitutionError(Exception):
    """Exception raised when environment variable substitution fails."""

    pass


def substitute_environment_variables(value: Any, strict: bool = False) -> Any:
    """Substitute environment variables in settings values.

    Supports the following formats:
    - ${VAR} - Variable value, left untouched if unset (error if strict)
    - ${VAR:default} - Optional variable with default value
    - ${VAR:-default} - Optional variable with default (bash-style)
    - ${VAR:?error_message} - Required with custom error message

    Mapping keys are never substituted, only values. Unlike the tool's own
    template variables, settings values stay strings: no type coercion.

    Args:
        value: Value to process (can be string, dict, list, or primitive)
        strict: If True, unset variables without a default raise an error

    Returns:
        Value with environment variables substituted

    Raises:
        EnvironmentSubstitutionError: If required variables are missing
    """
    if isinstance(value, str):
        return _substitute_in_string(value, strict)
    elif isinstance(value, dict):
        return {
            k: substitute_environment_variables(v, strict) for k, v in value.items()
        }
    elif isinstance(value, list):
        return [substitute_environment_variables(item, strict) for item in value]
    else:
        return value


def _substitute_in_string(text: str, strict: bool) -> str:
    """Substitute environment variables in a string value."""
    if "${" not in text:
        return text

    def replace_var(match: re.Match) -> str:
        var_name = match.group(1)
        modifier = match.group(2)

        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value

        if modifier is None:
            if strict:
                raise EnvironmentSubstitutionError(
                    f"Required environment variable '{var_name}' is not set. "
                    f"Suggestion: Set the variable with 'export {var_name}=value'"
                )
            return match.group(0)

        if modifier.startswith(":?"):
            error_msg = modifier[2:] or f"Variable {var_name} is required"
            raise EnvironmentSubstitutionError(
                f"Environment variable substitution failed: {error_msg}. "
                f"Suggestion: Set the variable with 'export {var_name}=value'"
            )

        if modifier.startswith(":-"):
            return modifier[2:]
        if modifier.startswith(":"):
            return modifier[1:]

        raise EnvironmentSubstitutionError(
            f"Invalid environment variable syntax: {match.group(0)}. "
            "Supported formats: ${VAR}, ${VAR:default}, ${VAR:-default}, "
            "${VAR:?message}"
        )

    return _VARIABLE_PATTERN.sub(replace_var, text)
