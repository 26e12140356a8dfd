"""
Validation utilities for the redirect capture library.

All validation functions raise ValidationError with descriptive
messages when validation fails.

Example:
    >>> validate_port(80, "port")
    ValidationError: Invalid 'port': must be 0 or at least 1024 (got 80)
"""

from __future__ import annotations

import ipaddress
import urllib.parse

from .constants import ValidationLimits
from .exceptions import ValidationError

# =============================================================================
# TYPE VALIDATION
# =============================================================================


def validate_type(value: object, expected_type: type | tuple[type, ...], field_name: str) -> None:
    """Validate that value is of expected type.

    Args:
        value: The value to validate
        expected_type: Type or tuple of types to check against
        field_name: Name of the field (for error messages)

    Raises:
        ValidationError: If value is not of expected type
    """
    # bool is an int subclass; never accept it where a number is expected
    if isinstance(value, bool) and bool not in (
        expected_type if isinstance(expected_type, tuple) else (expected_type,)
    ):
        raise ValidationError(field_name, value, "must not be a boolean")

    if not isinstance(value, expected_type):
        type_names = (
            expected_type.__name__
            if isinstance(expected_type, type)
            else " or ".join(t.__name__ for t in expected_type)
        )
        raise ValidationError(
            field_name, value, f"must be {type_names}, got {type(value).__name__}"
        )


def validate_string(value: object, field_name: str, allow_empty: bool = False) -> str:
    """Validate that value is a string (optionally non-empty).

    Example:
        >>> validate_string("", "expected_state")
        ValidationError: Invalid 'expected_state': must be a non-empty string (got '')
    """
    validate_type(value, str, field_name)
    assert isinstance(value, str)  # for type narrowing

    if not allow_empty and not value:
        raise ValidationError(field_name, value, "must be a non-empty string")

    return value


# =============================================================================
# RANGE VALIDATION
# =============================================================================


def validate_range(
    value: float,
    field_name: str,
    min_value: float | None = None,
    max_value: float | None = None,
) -> None:
    """Validate that a number is within the specified range (inclusive).

    Raises:
        ValidationError: If value is outside range
    """
    validate_type(value, (int, float), field_name)

    if min_value is not None and value < min_value:
        raise ValidationError(field_name, value, f"must be at least {min_value}")

    if max_value is not None and value > max_value:
        raise ValidationError(field_name, value, f"must be at most {max_value}")


def validate_port(port: int, field_name: str = "port") -> None:
    """Validate a listener port.

    Valid ports are 0 (OS-assigned) or 1024-65535 (non-privileged ports).

    Raises:
        ValidationError: If port is invalid
    """
    validate_type(port, int, field_name)

    if port == ValidationLimits.EPHEMERAL_PORT:
        return

    if port < ValidationLimits.MIN_PORT:
        raise ValidationError(
            field_name, port, f"must be 0 or at least {ValidationLimits.MIN_PORT}"
        )

    if port > ValidationLimits.MAX_PORT:
        raise ValidationError(field_name, port, f"must be at most {ValidationLimits.MAX_PORT}")


def validate_timeout(value: float, field_name: str = "timeout") -> None:
    """Validate a timeout in seconds against ValidationLimits."""
    validate_range(
        value,
        field_name,
        min_value=ValidationLimits.MIN_TIMEOUT_SECONDS,
        max_value=ValidationLimits.MAX_TIMEOUT_SECONDS,
    )


# =============================================================================
# FORMAT VALIDATION
# =============================================================================


def validate_url(value: str, field_name: str, require_https: bool = False) -> str:
    """Validate that value is a well-formed absolute URL.

    Args:
        value: URL string to validate
        field_name: Name of the field (for error messages)
        require_https: If True, only HTTPS URLs are allowed

    Returns:
        The validated URL string

    Raises:
        ValidationError: If URL is malformed or has wrong scheme

    Example:
        >>> validate_url("http://example.com", "authorize_endpoint", require_https=True)
        ValidationError: Invalid 'authorize_endpoint': URL must use HTTPS scheme (got ...)
    """
    validate_string(value, field_name)

    try:
        parsed = urllib.parse.urlparse(value)
    except ValueError as e:
        raise ValidationError(field_name, value, f"malformed URL: {e}") from e

    if not parsed.scheme or not parsed.netloc:
        raise ValidationError(field_name, value, "URL must have scheme and netloc")

    if parsed.scheme not in ("http", "https"):
        raise ValidationError(field_name, value, "URL must use HTTP or HTTPS scheme")

    if require_https and parsed.scheme != "https":
        raise ValidationError(field_name, value, "URL must use HTTPS scheme")

    return value


def validate_loopback_address(value: str, field_name: str = "bind_address") -> str:
    """Validate that value is a literal loopback IP address.

    The listener must never be reachable from outside the machine, so
    host names and wildcard addresses are rejected.

    Example:
        >>> validate_loopback_address("0.0.0.0")
        ValidationError: Invalid 'bind_address': must be a loopback address (got '0.0.0.0')
    """
    validate_string(value, field_name)

    try:
        address = ipaddress.ip_address(value)
    except ValueError as e:
        raise ValidationError(field_name, value, "must be a literal IP address") from e

    if not address.is_loopback:
        raise ValidationError(field_name, value, "must be a loopback address")

    return value


__all__ = [
    "validate_type",
    "validate_string",
    "validate_range",
    "validate_port",
    "validate_timeout",
    "validate_url",
    "validate_loopback_address",
]
