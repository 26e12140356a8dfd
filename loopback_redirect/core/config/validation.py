"""Loading and validation of environment configuration.

Values are read according to ConfigSchema, converted to the spec's type and
checked with the spec's validator. Failures surface as ConfigError naming the
variable, the raw value and what is wrong with it.
"""

import os
from typing import Any

from loopback_redirect.core.config.schema import ConfigSchema, EnvVarSpec
from loopback_redirect.core.redirect.exceptions import ValidationError


class ConfigError(Exception):
    """Configuration validation error.

    Attributes:
        env_var: The environment variable name
        value: The raw value that failed validation
        message: Human-readable error message
    """

    def __init__(self, env_var: str, value: str, message: str) -> None:
        self.env_var = env_var
        self.value = value
        self.message = message
        super().__init__(f"{env_var}={value}: {message}")


def load_env_var(spec: EnvVarSpec) -> Any:
    """Load and validate a single environment variable.

    Unset and empty variables both fall back to the spec default, which is
    trusted and not validated.

    Raises:
        ConfigError: If the value cannot be converted or fails validation
    """
    raw_value = os.environ.get(spec.name)
    if raw_value is None or raw_value == "":
        return spec.default

    try:
        value = spec.type_hint(raw_value)
    except ValueError as e:
        raise ConfigError(
            spec.name, raw_value, f"Cannot convert to {spec.type_hint.__name__}: {e}"
        ) from e

    if spec.validator is not None:
        try:
            spec.validator(value)
        except ValidationError as e:
            raise ConfigError(spec.name, raw_value, e.message) from e

    return value


def load_all_specs() -> dict[str, Any]:
    """Load all environment variables according to schema.

    Returns:
        Dictionary mapping env var names to validated values.
        Values that failed validation are ConfigError instances.
    """
    result: dict[str, Any] = {}
    for spec in ConfigSchema.all_specs().values():
        try:
            result[spec.name] = load_env_var(spec)
        except ConfigError as e:
            result[spec.name] = e
    return result


def validate_all() -> list[ConfigError]:
    """Validate all environment variables and return any errors, sorted by name."""
    errors = [value for value in load_all_specs().values() if isinstance(value, ConfigError)]
    return sorted(errors, key=lambda error: error.env_var)
