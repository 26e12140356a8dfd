"""
Loopback Redirect Capture

Capture the result of an OAuth 2.0 authorization-code redirect on a
short-lived HTTP listener bound to the loopback interface.

This library provides:
- A one-shot redirect listener with CSRF state enforcement
- State nonce and authorize URL helpers
- An interactive login orchestrator

Basic Usage:
    >>> from loopback_redirect.core.redirect import RedirectListener, generate_state
    >>>
    >>> state = generate_state()
    >>> listener = RedirectListener()
    >>> redirect_uri = listener.start(state)
    >>> # ... send the browser to the provider with redirect_uri and state ...
    >>> listener.wait()
    >>> code, error = listener.result()
    >>> listener.stop()
"""

# Helpers
from .authorize import build_authorize_url, generate_state

# Exceptions
from .exceptions import (
    AuthorizationDeniedError,
    AuthorizationError,
    AuthorizationTimeoutError,
    BindError,
    CodeMissingError,
    ListenerError,
    MissingStateError,
    RedirectCaptureError,
    ShutdownError,
    StateMismatchError,
    ValidationError,
)

# Flow
from .flow import InteractiveLogin, InteractiveLoginConfig

# Listener
from .listener import ListenerSettings, RedirectListener
from .result import AuthorizationResult, evaluate_redirect
from .server import RedirectHandler, RedirectHTTPServer

__all__ = [
    # Listener
    "RedirectListener",
    "ListenerSettings",
    "RedirectHTTPServer",
    "RedirectHandler",
    "AuthorizationResult",
    "evaluate_redirect",
    # Flow
    "InteractiveLogin",
    "InteractiveLoginConfig",
    # Helpers
    "generate_state",
    "build_authorize_url",
    # Exceptions
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
