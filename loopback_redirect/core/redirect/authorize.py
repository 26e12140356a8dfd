"""State nonce and authorize URL helpers.

The listener only compares state; these helpers produce it and embed it,
together with the listener's redirect URL, in the provider's authorize
request.
"""

from __future__ import annotations

import secrets
import urllib.parse
from collections.abc import Mapping

from .constants import RedirectProtocol, StateDefaults
from .validation import validate_range, validate_string, validate_url


def generate_state(nbytes: int = StateDefaults.NONCE_BYTES) -> str:
    """Generate an unguessable state nonce.

    Uses secrets.token_urlsafe(), so the value can be placed in a query
    string without further encoding.

    Args:
        nbytes: Number of random bytes (at least 16)

    Returns:
        URL-safe random string
    """
    validate_range(nbytes, "nbytes", min_value=16)
    return secrets.token_urlsafe(nbytes)


def build_authorize_url(
    authorize_endpoint: str,
    client_id: str,
    redirect_uri: str,
    state: str,
    *,
    resource: str | None = None,
    scope: str | None = None,
    prompt: str | None = None,
    extra_params: Mapping[str, str] | None = None,
) -> str:
    """Build the provider authorize URL for the authorization-code flow.

    Existing query parameters on ``authorize_endpoint`` are kept.

    Args:
        authorize_endpoint: Provider authorize endpoint (HTTPS)
        client_id: OAuth client ID
        redirect_uri: URL returned by RedirectListener.start()
        state: State nonce passed to RedirectListener.start()
        resource: Optional resource parameter
        scope: Optional space-separated scopes
        prompt: Optional prompt parameter (e.g. ``select_account``)
        extra_params: Additional provider-specific parameters

    Returns:
        URL to navigate the browser to

    Raises:
        ValidationError: If a required argument is empty or malformed

    Example:
        >>> build_authorize_url(
        ...     "https://login.example.com/oauth2/authorize",
        ...     "client-123",
        ...     "http://localhost:53124",
        ...     "s1",
        ... )
        'https://login.example.com/oauth2/authorize?response_type=code&client_id=client-123&...'
    """
    validate_url(authorize_endpoint, "authorize_endpoint", require_https=True)
    validate_string(client_id, "client_id")
    validate_url(redirect_uri, "redirect_uri")
    validate_string(state, "state")

    params: dict[str, str] = {
        "response_type": RedirectProtocol.RESPONSE_TYPE_CODE,
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        RedirectProtocol.PARAM_STATE: state,
    }
    if resource:
        params["resource"] = resource
    if scope:
        params["scope"] = scope
    if prompt:
        params["prompt"] = prompt
    if extra_params:
        params.update(extra_params)

    parts = urllib.parse.urlsplit(authorize_endpoint)
    query = urllib.parse.urlencode(params)
    if parts.query:
        query = f"{parts.query}&{query}"
    return urllib.parse.urlunsplit(parts._replace(query=query))


__all__ = [
    "generate_state",
    "build_authorize_url",
]
