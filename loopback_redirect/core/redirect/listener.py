"""Loopback redirect listener.

This module provides the caller-facing lifecycle around
``RedirectHTTPServer``: start on a loopback port, wait for the
redirect, read the result, stop.

Example:
    >>> from loopback_redirect.core.redirect import RedirectListener, generate_state
    >>> state = generate_state()
    >>> with RedirectListener() as listener:
    ...     redirect_uri = listener.start(state)
    ...     # send the user to the provider with redirect_uri and state
    ...     listener.wait()
    ...     code, error = listener.result()
"""

from __future__ import annotations

import ipaddress
import logging
import socket
import threading
import uuid
from dataclasses import dataclass
from types import TracebackType

from .constants import ListenerDefaults, ValidationLimits
from .exceptions import (
    AuthorizationError,
    BindError,
    ListenerError,
    ShutdownError,
)
from .result import PENDING, AuthorizationResult
from .server import RedirectHTTPServer
from .validation import (
    validate_loopback_address,
    validate_port,
    validate_range,
    validate_string,
    validate_timeout,
    validate_url,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListenerSettings:
    """Configuration for a redirect listener.

    Attributes:
        bind_address: Loopback IP the server binds to
        redirect_host: Host name used in the returned redirect URL
        port: Fixed port, or 0 to let the OS choose
        request_timeout: Socket timeout for each browser connection
        shutdown_timeout: Bound on joining the serving thread in stop()
        wait_timeout: Default wait bound for interactive callers
        landing_url: Optional page the success page refreshes to

    Raises:
        ValidationError: If any parameter fails validation
    """

    bind_address: str = ListenerDefaults.BIND_ADDRESS
    redirect_host: str = ListenerDefaults.REDIRECT_HOST
    port: int = ListenerDefaults.PORT
    request_timeout: float = ListenerDefaults.REQUEST_TIMEOUT
    shutdown_timeout: float = ListenerDefaults.SHUTDOWN_TIMEOUT
    wait_timeout: float = ListenerDefaults.WAIT_TIMEOUT
    landing_url: str | None = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        validate_loopback_address(self.bind_address, "bind_address")
        validate_string(self.redirect_host, "redirect_host")
        validate_port(self.port, "port")
        validate_range(
            self.request_timeout,
            "request_timeout",
            min_value=ValidationLimits.MIN_SOCKET_TIMEOUT_SECONDS,
        )
        validate_range(
            self.shutdown_timeout,
            "shutdown_timeout",
            min_value=ValidationLimits.MIN_SOCKET_TIMEOUT_SECONDS,
        )
        validate_timeout(self.wait_timeout, "wait_timeout")
        if self.landing_url is not None:
            validate_url(self.landing_url, "landing_url")

    @classmethod
    def load(cls) -> ListenerSettings:
        """Build settings from environment variables.

        Raises:
            ConfigError: If an environment variable is malformed
        """
        # Import config lazily; its schema validates with this package's helpers
        from loopback_redirect.core.config.schema import ConfigSchema
        from loopback_redirect.core.config.validation import load_env_var

        return cls(
            bind_address=load_env_var(ConfigSchema.REDIRECT_BIND_ADDRESS),
            redirect_host=load_env_var(ConfigSchema.REDIRECT_HOST),
            port=load_env_var(ConfigSchema.REDIRECT_PORT),
            request_timeout=load_env_var(ConfigSchema.REDIRECT_REQUEST_TIMEOUT),
            shutdown_timeout=load_env_var(ConfigSchema.REDIRECT_SHUTDOWN_TIMEOUT),
            wait_timeout=load_env_var(ConfigSchema.REDIRECT_WAIT_TIMEOUT),
            landing_url=load_env_var(ConfigSchema.REDIRECT_LANDING_URL),
        )

    @property
    def address_family(self) -> socket.AddressFamily:
        if ipaddress.ip_address(self.bind_address).version == 6:
            return socket.AF_INET6
        return socket.AF_INET


class RedirectListener:
    """One-shot loopback listener for an OAuth authorization redirect.

    Each instance owns exactly one session: it can be started once, and
    the first redirect it evaluates becomes its immutable result.
    ``stop`` may be called at any time and from any thread, including
    while another thread is blocked in ``wait``.
    """

    def __init__(self, settings: ListenerSettings | None = None):
        self.settings = settings or ListenerSettings()
        self.session_id = uuid.uuid4().hex
        self.shutdown_error: ShutdownError | None = None

        self._server: RedirectHTTPServer | None = None
        self._thread: threading.Thread | None = None
        self._redirect_url: str | None = None
        self._started = False
        self._stopped = False
        self._lifecycle_lock = threading.Lock()

    @property
    def redirect_url(self) -> str:
        if self._redirect_url is None:
            raise ListenerError("Redirect listener has not been started")
        return self._redirect_url

    @property
    def completed(self) -> bool:
        return self._server is not None and self._server.completed

    def start(self, expected_state: str) -> str:
        """Bind the listener and start serving in the background.

        Args:
            expected_state: State nonce sent to the provider for this attempt

        Returns:
            The redirect URL, ``http://localhost:<port>``

        Raises:
            ValidationError: If expected_state is empty
            ListenerError: If this listener was already started
            BindError: If the port could not be acquired
        """
        validate_string(expected_state, "expected_state")

        with self._lifecycle_lock:
            if self._started or self._stopped:
                raise ListenerError("Redirect listener can only be started once")
            self._started = True

            settings = self.settings
            try:
                server = RedirectHTTPServer(
                    (settings.bind_address, settings.port),
                    expected_state,
                    session_id=self.session_id,
                    request_timeout=settings.request_timeout,
                    landing_url=settings.landing_url,
                    address_family=settings.address_family,
                )
            except OSError as e:
                raise BindError(settings.bind_address, settings.port, str(e)) from e

            thread = threading.Thread(
                target=server.serve_forever,
                name=f"redirect-listener-{server.port}",
                daemon=True,
            )
            thread.start()

            self._server = server
            self._thread = thread
            self._redirect_url = f"http://{settings.redirect_host}:{server.port}"

        logger.info(
            "Redirect listener started on %s:%d",
            settings.bind_address,
            server.port,
            extra={"correlation_id": self.session_id},
        )
        return self._redirect_url

    def stop(self) -> None:
        """Shut the listener down gracefully.

        Stops accepting connections, waits for in-flight handlers to finish
        writing their response, and releases the port. Safe to call more
        than once, before start, or concurrently with wait().
        """
        with self._lifecycle_lock:
            if self._stopped or self._server is None:
                self._stopped = True
                return
            self._stopped = True
            server, thread = self._server, self._thread

        extra = {"correlation_id": self.session_id}
        try:
            server.shutdown()
            server.server_close()
        except OSError as e:
            self._record_shutdown_error(f"Error closing redirect listener: {e}")
            return

        assert thread is not None
        thread.join(timeout=self.settings.shutdown_timeout)
        if thread.is_alive():
            self._record_shutdown_error(
                f"Serving thread still alive after {self.settings.shutdown_timeout:g}s"
            )
            return

        logger.info("Redirect listener stopped", extra=extra)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the first redirect has been handled.

        Args:
            timeout: Maximum seconds to wait; None waits without limit

        Returns:
            True once the session completed, False if timeout elapsed first

        Raises:
            ListenerError: If the listener was never started
        """
        server = self._server
        if server is None:
            raise ListenerError("Redirect listener has not been started")
        return server.wait_for_completion(timeout)

    def result(self) -> tuple[str, AuthorizationError | None]:
        """Get the captured ``(code, error)`` pair.

        Before the session completed this is the pending value ``("", None)``;
        always call wait() first.
        """
        return self.authorization_result().as_tuple()

    def authorization_result(self) -> AuthorizationResult:
        if self._server is None:
            return PENDING
        return self._server.result

    def _record_shutdown_error(self, message: str) -> None:
        self.shutdown_error = ShutdownError(message)
        logger.warning(message, extra={"correlation_id": self.session_id})

    def __enter__(self) -> RedirectListener:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()


__all__ = [
    "ListenerSettings",
    "RedirectListener",
]
