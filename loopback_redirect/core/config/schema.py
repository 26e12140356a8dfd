"""Declarative schema for environment variable configuration.

This module provides a single source of truth for all environment variables,
including type coercion, validation, and documentation. Listener settings are
checked with the same validators ``ListenerSettings`` runs, so a value the
``config`` command accepts is a value the listener accepts.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from loopback_redirect.core.redirect.constants import ListenerDefaults, ValidationLimits
from loopback_redirect.core.redirect.exceptions import ValidationError
from loopback_redirect.core.redirect.validation import (
    validate_loopback_address,
    validate_port,
    validate_range,
    validate_string,
    validate_timeout,
    validate_url,
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class EnvVarSpec:
    """Specification for a single environment variable.

    Attributes:
        name: Environment variable name (e.g., "REDIRECT_PORT", "LOG_LEVEL")
        default: Default value if env var not set
        type_hint: Type the raw string is converted to (int, float, str)
        description: Human-readable description for docs
        validator: Optional check on the converted value; raises ValidationError
    """

    name: str
    default: Any
    type_hint: type
    description: str
    validator: Callable[[Any], object] | None = None


def _validate_log_level(value: str) -> None:
    # Allow trailing comments, e.g. "DEBUG  # verbose"
    parts = value.split()
    level = parts[0].upper() if parts else ""
    if level not in LOG_LEVELS:
        raise ValidationError("LOG_LEVEL", value, f"must be one of {', '.join(LOG_LEVELS)}")


def _validate_socket_timeout(field_name: str) -> Callable[[float], None]:
    def check(value: float) -> None:
        validate_range(value, field_name, min_value=ValidationLimits.MIN_SOCKET_TIMEOUT_SECONDS)

    return check


class ConfigSchema:
    """Registry of all configuration environment variables."""

    # === Logging ===

    LOG_LEVEL = EnvVarSpec(
        name="LOG_LEVEL",
        default="INFO",
        type_hint=str,
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        validator=_validate_log_level,
    )

    # === Listener Settings ===

    REDIRECT_BIND_ADDRESS = EnvVarSpec(
        name="REDIRECT_BIND_ADDRESS",
        default=ListenerDefaults.BIND_ADDRESS,
        type_hint=str,
        description="Loopback IP address the redirect listener binds to",
        validator=lambda x: validate_loopback_address(x, "bind_address"),
    )

    REDIRECT_HOST = EnvVarSpec(
        name="REDIRECT_HOST",
        default=ListenerDefaults.REDIRECT_HOST,
        type_hint=str,
        description="Host name used in the redirect URL handed to the provider",
        validator=lambda x: validate_string(x, "redirect_host"),
    )

    REDIRECT_PORT = EnvVarSpec(
        name="REDIRECT_PORT",
        default=ListenerDefaults.PORT,
        type_hint=int,
        description="Fixed listener port (0 = OS-assigned ephemeral port)",
        validator=lambda x: validate_port(x, "port"),
    )

    REDIRECT_REQUEST_TIMEOUT = EnvVarSpec(
        name="REDIRECT_REQUEST_TIMEOUT",
        default=ListenerDefaults.REQUEST_TIMEOUT,
        type_hint=float,
        description="Socket timeout in seconds for each browser connection",
        validator=_validate_socket_timeout("request_timeout"),
    )

    REDIRECT_SHUTDOWN_TIMEOUT = EnvVarSpec(
        name="REDIRECT_SHUTDOWN_TIMEOUT",
        default=ListenerDefaults.SHUTDOWN_TIMEOUT,
        type_hint=float,
        description="Seconds to wait for the serving thread when stopping",
        validator=_validate_socket_timeout("shutdown_timeout"),
    )

    REDIRECT_WAIT_TIMEOUT = EnvVarSpec(
        name="REDIRECT_WAIT_TIMEOUT",
        default=ListenerDefaults.WAIT_TIMEOUT,
        type_hint=float,
        description="Seconds interactive logins wait for the redirect",
        validator=lambda x: validate_timeout(x, "wait_timeout"),
    )

    REDIRECT_LANDING_URL = EnvVarSpec(
        name="REDIRECT_LANDING_URL",
        default=None,
        type_hint=str,
        description=(
            "Optional page the success page refreshes to after "
            f"{ListenerDefaults.LANDING_REFRESH_DELAY} seconds"
        ),
        validator=lambda x: validate_url(x, "landing_url"),
    )

    @classmethod
    def all_specs(cls) -> dict[str, EnvVarSpec]:
        """Get all environment variable specifications.

        Returns:
            Dictionary mapping spec names to EnvVarSpec objects
        """
        return {
            name: getattr(cls, name)
            for name in dir(cls)
            if isinstance(getattr(cls, name), EnvVarSpec)
        }
