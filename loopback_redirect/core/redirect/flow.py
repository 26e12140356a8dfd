"""Interactive authorization-code login over a loopback redirect.

This module provides high-level orchestration. HTTP server
infrastructure is in server.py, lifecycle in listener.py.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from .authorize import build_authorize_url, generate_state
from .exceptions import AuthorizationTimeoutError
from .listener import ListenerSettings, RedirectListener
from .validation import validate_string, validate_timeout, validate_url

logger = logging.getLogger(__name__)


@dataclass
class InteractiveLoginConfig:
    """Configuration for an interactive login.

    Attributes:
        authorize_endpoint: Provider authorize endpoint (must be HTTPS)
        client_id: OAuth client ID
        resource: Optional resource parameter
        scope: Optional space-separated scopes
        prompt: Optional prompt parameter
        extra_params: Additional provider-specific authorize parameters
        timeout: Seconds to wait for the redirect, None to wait forever

    Raises:
        ValidationError: If any parameter fails validation
    """

    authorize_endpoint: str
    client_id: str
    resource: str | None = None
    scope: str | None = None
    prompt: str | None = None
    extra_params: Mapping[str, str] = field(default_factory=dict)
    timeout: float | None = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        validate_url(self.authorize_endpoint, "authorize_endpoint", require_https=True)
        validate_string(self.client_id, "client_id")
        if self.timeout is not None:
            validate_timeout(self.timeout, "timeout")


class InteractiveLogin:
    """Run one authorization-code login through a loopback listener.

    The flow:
    1. Generates a state nonce and starts a RedirectListener
    2. Builds the authorize URL with the listener's redirect URL
    3. Hands the URL to ``present`` (print it, open a browser, ...)
    4. Waits for the redirect, optionally bounded by the timeout
    5. Stops the listener and returns the code

    Example:
        >>> login = InteractiveLogin(
        ...     InteractiveLoginConfig("https://login.example.com/authorize", "client-123")
        ... )
        >>> code = login.run(present=print)
    """

    def __init__(
        self,
        config: InteractiveLoginConfig,
        settings: ListenerSettings | None = None,
        state_factory: Callable[[], str] = generate_state,
    ):
        self.config = config
        self.settings = settings or ListenerSettings()
        self.state_factory = state_factory

    def run(self, present: Callable[[str], None]) -> str:
        """Run the login and return the authorization code.

        Args:
            present: Called with the authorize URL once the listener is up

        Returns:
            The authorization code

        Raises:
            BindError: If the listener could not bind
            AuthorizationTimeoutError: If no redirect arrived within the timeout
            AuthorizationError: The captured error (state mismatch, denial, ...)
        """
        state = self.state_factory()

        with RedirectListener(self.settings) as listener:
            redirect_uri = listener.start(state)
            authorize_url = build_authorize_url(
                self.config.authorize_endpoint,
                self.config.client_id,
                redirect_uri,
                state,
                resource=self.config.resource,
                scope=self.config.scope,
                prompt=self.config.prompt,
                extra_params=self.config.extra_params,
            )
            present(authorize_url)

            if not listener.wait(self.config.timeout):
                assert self.config.timeout is not None
                logger.warning(
                    "Gave up waiting for the authorization redirect",
                    extra={"correlation_id": listener.session_id},
                )
                raise AuthorizationTimeoutError(self.config.timeout)

            code, error = listener.result()

        if error is not None:
            raise error
        return code


__all__ = [
    "InteractiveLoginConfig",
    "InteractiveLogin",
]
