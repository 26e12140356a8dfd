"""Authorization result and redirect evaluation.

``evaluate_redirect`` is the whole request handling protocol as a pure
function: it turns the query string of one inbound redirect into an
``AuthorizationResult``. The HTTP layer only decides whether that result
becomes the session's terminal value.
"""

from __future__ import annotations

import hmac
import urllib.parse
from dataclasses import dataclass

from .constants import RedirectProtocol
from .exceptions import (
    AuthorizationDeniedError,
    AuthorizationError,
    CodeMissingError,
    MissingStateError,
    StateMismatchError,
)


@dataclass(frozen=True)
class AuthorizationResult:
    """Outcome of a redirect capture session.

    Attributes:
        code: Authorization code, non-empty only on success
        error: Authorization error, None on success or while pending

    The default instance (no code, no error) is the pending value.
    """

    code: str = ""
    error: AuthorizationError | None = None

    @property
    def ok(self) -> bool:
        return bool(self.code) and self.error is None

    def as_tuple(self) -> tuple[str, AuthorizationError | None]:
        return self.code, self.error


PENDING = AuthorizationResult()


def _first(params: dict[str, list[str]], name: str) -> str | None:
    values = params.get(name)
    if not values:
        return None
    return values[0]


def states_match(received: str, expected: str) -> bool:
    """Compare state nonces in constant time."""
    return hmac.compare_digest(received.encode("utf-8"), expected.encode("utf-8"))


def evaluate_redirect(query: str, expected_state: str) -> AuthorizationResult:
    """Evaluate the query string of an authorization redirect.

    State is validated before code or error are looked at, so a request
    carrying a plausible code with the wrong state is always rejected.

    Args:
        query: Raw query string (without the leading ``?``)
        expected_state: State nonce issued for this session

    Returns:
        AuthorizationResult holding either the code or the error
    """
    params = urllib.parse.parse_qs(query, keep_blank_values=True)

    state = _first(params, RedirectProtocol.PARAM_STATE)
    if state is None:
        return AuthorizationResult(error=MissingStateError())
    if not states_match(state, expected_state):
        return AuthorizationResult(error=StateMismatchError())

    error = _first(params, RedirectProtocol.PARAM_ERROR)
    if error:
        description = _first(params, RedirectProtocol.PARAM_ERROR_DESCRIPTION) or ""
        return AuthorizationResult(error=AuthorizationDeniedError(error, description))

    code = _first(params, RedirectProtocol.PARAM_CODE)
    if code:
        return AuthorizationResult(code=code)

    return AuthorizationResult(error=CodeMissingError())


__all__ = [
    "AuthorizationResult",
    "PENDING",
    "evaluate_redirect",
    "states_match",
]
