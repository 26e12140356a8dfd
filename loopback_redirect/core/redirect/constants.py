"""
Centralized constants for the redirect capture library.

Constants are grouped by:
- Configurable defaults: Values users may want to override
- Protocol constants: Fixed by the OAuth 2.0 redirect convention
- Validation limits: Valid ranges for parameters
"""

from __future__ import annotations

# =============================================================================
# CONFIGURABLE DEFAULTS
# =============================================================================
# These values can be overridden via ListenerSettings or environment variables.


class ListenerDefaults:
    """Default values for the loopback listener.

    - Port 0: let the OS hand out a free ephemeral port
    - 10s request timeout: bounds idle browser pre-connects
    - 300s wait timeout: 5 minutes is reasonable for user interaction
    """

    BIND_ADDRESS = "127.0.0.1"
    REDIRECT_HOST = "localhost"
    PORT = 0

    REQUEST_TIMEOUT = 10.0  # seconds
    SHUTDOWN_TIMEOUT = 5.0  # seconds
    WAIT_TIMEOUT = 300.0  # seconds (5 minutes)

    # Seconds before the success page refreshes to the landing URL
    LANDING_REFRESH_DELAY = 10


class StateDefaults:
    """State nonce generation defaults."""

    # 32 random bytes -> 43 URL-safe characters
    NONCE_BYTES = 32


# =============================================================================
# PROTOCOL CONSTANTS
# =============================================================================


class RedirectProtocol:
    """Constants defined by the OAuth 2.0 authorization response (RFC 6749 4.1.2)."""

    # HTTP status codes
    HTTP_OK = 200
    HTTP_METHOD_NOT_ALLOWED = 405

    # Query parameters on the redirect
    PARAM_STATE = "state"
    PARAM_CODE = "code"
    PARAM_ERROR = "error"
    PARAM_ERROR_DESCRIPTION = "error_description"

    # Authorize request
    RESPONSE_TYPE_CODE = "code"


class ErrorReason:
    """Machine-readable reasons carried by authorization errors."""

    MISSING_STATE = "missing_state"
    STATE_MISMATCH = "state_mismatch"
    AUTHORIZATION_DENIED = "authorization_denied"
    CODE_MISSING = "code_missing"


# =============================================================================
# VALIDATION RANGES
# =============================================================================


class ValidationLimits:
    """Valid ranges for user-configurable parameters."""

    # Port range: 1024-65535 (non-privileged ports); 0 means OS-assigned
    EPHEMERAL_PORT = 0
    MIN_PORT = 1024
    MAX_PORT = 65535

    # Timeout limits (seconds)
    MIN_TIMEOUT_SECONDS = 1
    MAX_TIMEOUT_SECONDS = 3600  # 1 hour

    # Lower bound for per-connection and shutdown join timeouts
    MIN_SOCKET_TIMEOUT_SECONDS = 0.1


__all__ = [
    "ListenerDefaults",
    "StateDefaults",
    "RedirectProtocol",
    "ErrorReason",
    "ValidationLimits",
]
