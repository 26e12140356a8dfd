"""
Custom exception hierarchy for the redirect capture library.

All exceptions inherit from RedirectCaptureError, allowing users to
catch all library-specific errors with a single except clause.

Authorization errors (missing state, state mismatch, provider denial,
missing code) are not raised by the listener. They are recorded as the
session result and handed back by ``RedirectListener.result()``.

Example:
    >>> code, error = listener.result()
    >>> if error is not None:
    ...     print(f"Authorization failed: {error}")
"""

from __future__ import annotations

from .constants import ErrorReason


class RedirectCaptureError(Exception):
    """Base exception for all redirect capture errors."""

    pass


class ValidationError(RedirectCaptureError):
    """Raised when input validation fails.

    Attributes:
        field: Name of the field that failed validation
        value: The invalid value that was provided
        message: Human-readable explanation of the validation error

    Example:
        >>> ListenerSettings(port=80)
        >>> ValidationError: Invalid 'port': must be 0 or at least 1024 (got 80)
    """

    def __init__(self, field: str, value: object, message: str) -> None:
        self.field = field
        self.value = value
        self.message = message
        super().__init__(f"Invalid {field!r}: {message} (got {value!r})")

    def __repr__(self) -> str:
        return (
            f"ValidationError(field={self.field!r}, value={self.value!r}, message={self.message!r})"
        )


# =============================================================================
# LISTENER LIFECYCLE
# =============================================================================


class ListenerError(RedirectCaptureError):
    """Raised when the listener is used out of order.

    Example:
        >>> listener.wait()  # never started
        >>> ListenerError: Redirect listener has not been started
    """

    pass


class BindError(ListenerError):
    """Raised synchronously by ``start`` when no local port could be acquired."""

    def __init__(self, address: str, port: int, reason: str) -> None:
        self.address = address
        self.port = port
        self.reason = reason
        super().__init__(f"Cannot bind redirect listener to {address}:{port}: {reason}")


class ShutdownError(ListenerError):
    """Graceful shutdown did not complete cleanly.

    Never raised by ``stop``; it is logged and kept on
    ``RedirectListener.shutdown_error``.
    """

    pass


# =============================================================================
# AUTHORIZATION OUTCOMES
# =============================================================================


class AuthorizationError(RedirectCaptureError):
    """Base class for failed redirects.

    Attributes:
        reason: Machine-readable reason (see ErrorReason)
    """

    reason: str = ""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AuthorizationError):
            return NotImplemented
        return type(self) is type(other) and self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class MissingStateError(AuthorizationError):
    """The redirect arrived without a state parameter."""

    reason = ErrorReason.MISSING_STATE

    def __init__(self) -> None:
        super().__init__("missing OAuth state")


class StateMismatchError(AuthorizationError):
    """The state parameter differs from the one issued at start.

    This is the CSRF signal: the redirect belongs to another session
    or was forged.
    """

    reason = ErrorReason.STATE_MISMATCH

    def __init__(self) -> None:
        super().__init__("mismatched OAuth state")


class AuthorizationDeniedError(AuthorizationError):
    """The identity provider reported an error on the redirect.

    Attributes:
        error: The ``error`` parameter (e.g. ``access_denied``)
        description: The ``error_description`` parameter, empty if absent
    """

    reason = ErrorReason.AUTHORIZATION_DENIED

    def __init__(self, error: str, description: str = "") -> None:
        self.error = error
        self.description = description
        super().__init__(error, description)

    def __str__(self) -> str:
        return f"authentication error: {self.error}; description: {self.description}"


class CodeMissingError(AuthorizationError):
    """State matched but the redirect carried neither a code nor an error."""

    reason = ErrorReason.CODE_MISSING

    def __init__(self) -> None:
        super().__init__("authorization code missing in query string")


class AuthorizationTimeoutError(RedirectCaptureError):
    """Raised by InteractiveLogin when no redirect arrived in time."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"No authorization redirect received within {timeout:g} seconds")


__all__ = [
    "RedirectCaptureError",
    "ValidationError",
    "ListenerError",
    "BindError",
    "ShutdownError",
    "AuthorizationError",
    "MissingStateError",
    "StateMismatchError",
    "AuthorizationDeniedError",
    "CodeMissingError",
    "AuthorizationTimeoutError",
]
