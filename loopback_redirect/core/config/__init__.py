"""Environment-driven configuration."""

from loopback_redirect.core.config.schema import ConfigSchema, EnvVarSpec
from loopback_redirect.core.config.validation import (
    ConfigError,
    load_all_specs,
    load_env_var,
    validate_all,
)

__all__ = [
    "ConfigSchema",
    "EnvVarSpec",
    "ConfigError",
    "load_env_var",
    "load_all_specs",
    "validate_all",
]
