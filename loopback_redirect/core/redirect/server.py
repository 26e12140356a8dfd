"""HTTP server for capturing the authorization redirect.

This module contains the HTTP server infrastructure: the threaded
server that owns the once-only session result and the request handler
that evaluates each redirect. Lifecycle management lives in listener.py.
"""

import html
import http.server
import logging
import socket
import threading
import urllib.parse

from .constants import ListenerDefaults, RedirectProtocol
from .result import PENDING, AuthorizationResult, evaluate_redirect

logger = logging.getLogger(__name__)

# HTML page shown after a successful redirect
_LOGIN_SUCCESS_HTML = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
{refresh}    <title>Login successful</title>
  </head>
  <body>
    <div style="max-width: 640px; margin: 80px auto;
                font-family: system-ui, -apple-system, sans-serif;">
      <h1>Login successful</h1>
      <p>You can now close this window and return to the terminal.</p>
    </div>
  </body>
</html>
"""

# HTML page shown for every failed redirect; never echoes request values
_LOGIN_FAILED_HTML = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>Login failed</title>
  </head>
  <body>
    <div style="max-width: 640px; margin: 80px auto;
                font-family: system-ui, -apple-system, sans-serif;">
      <h1>Login failed</h1>
      <p>Some failures occurred during the authentication.
         Return to the terminal for details.</p>
    </div>
  </body>
</html>
"""


def render_success_page(landing_url: str | None = None) -> str:
    """Render the success page, optionally refreshing to ``landing_url``."""
    refresh = ""
    if landing_url:
        target = html.escape(landing_url, quote=True)
        refresh = (
            f'    <meta http-equiv="refresh" '
            f'content="{ListenerDefaults.LANDING_REFRESH_DELAY};url={target}">\n'
        )
    return _LOGIN_SUCCESS_HTML.format(refresh=refresh)


def render_failure_page() -> str:
    return _LOGIN_FAILED_HTML


class RedirectHTTPServer(http.server.ThreadingHTTPServer):
    """Threaded HTTP server holding one redirect capture session.

    Every connection is handled on its own non-daemon thread so that
    ``server_close`` joins in-flight handlers before the socket is
    released. The first evaluated redirect becomes the terminal result
    and fires the completion event; later ones are answered but ignored.
    """

    daemon_threads = False
    block_on_close = True
    # No other socket may share the port and receive the redirect
    allow_reuse_port = False

    def __init__(
        self,
        server_address: tuple[str, int],
        expected_state: str,
        *,
        session_id: str,
        request_timeout: float = ListenerDefaults.REQUEST_TIMEOUT,
        landing_url: str | None = None,
        address_family: socket.AddressFamily = socket.AF_INET,
    ):
        self.address_family = address_family
        super().__init__(server_address, RedirectHandler, bind_and_activate=True)
        self.expected_state = expected_state
        self.session_id = session_id
        self.request_timeout = request_timeout
        self.landing_url = landing_url

        # Session state, written once under the lock
        self._result = PENDING
        self._completed = threading.Event()
        self._lock = threading.Lock()

    @property
    def port(self) -> int:
        return self.server_address[1]

    @property
    def completed(self) -> bool:
        return self._completed.is_set()

    @property
    def result(self) -> AuthorizationResult:
        """Get the session result with thread safety."""
        with self._lock:
            return self._result

    def complete(self, result: AuthorizationResult) -> bool:
        """Record the terminal result and signal completion.

        Returns:
            True if this call made the session terminal, False if a
            previous redirect already did
        """
        with self._lock:
            if self._completed.is_set():
                return False
            self._result = result
            self._completed.set()
        return True

    def wait_for_completion(self, timeout: float | None = None) -> bool:
        """Wait for the terminal redirect.

        Args:
            timeout: Maximum seconds to wait, None to wait forever

        Returns:
            True if the session completed, False on timeout
        """
        return self._completed.wait(timeout=timeout)


class RedirectHandler(http.server.BaseHTTPRequestHandler):
    """Handle authorization redirect requests on any path."""

    server: RedirectHTTPServer

    def setup(self) -> None:
        # Bound reads and writes so an idle pre-connect cannot stall shutdown
        self.timeout = self.server.request_timeout
        super().setup()

    def do_GET(self) -> None:
        """Handle GET request."""
        query = urllib.parse.urlsplit(self.path).query
        result = evaluate_redirect(query, self.server.expected_state)

        if self.server.complete(result):
            extra = {"correlation_id": self.server.session_id}
            if result.ok:
                logger.info("Authorization code received", extra=extra)
            else:
                assert result.error is not None
                logger.warning(
                    "Authorization redirect failed: %s", result.error.reason, extra=extra
                )
        else:
            logger.debug(
                "Ignoring redirect after session completed",
                extra={"correlation_id": self.server.session_id},
            )

        if result.ok:
            self._send_html(render_success_page(self.server.landing_url))
        else:
            self._send_html(render_failure_page())

    def do_POST(self) -> None:
        """Handle POST request (not supported)."""
        self._method_not_allowed()

    def do_PUT(self) -> None:
        self._method_not_allowed()

    def do_DELETE(self) -> None:
        self._method_not_allowed()

    def log_message(self, fmt: str, *args: object) -> None:
        """Route access logs to DEBUG without the query string."""
        logger.debug(
            "%s - %s",
            self.address_string(),
            fmt % args if args else fmt,
            extra={"correlation_id": self.server.session_id},
        )

    def log_request(self, code: int | str = "-", size: int | str = "-") -> None:
        # The request line carries the code and state; log the path only.
        # Malformed request lines are rejected before path is parsed.
        path = urllib.parse.urlsplit(getattr(self, "path", "")).path
        self.log_message('"%s %s" %s', self.command, path, getattr(code, "value", code))

    def _send_html(self, body: str) -> None:
        """Send HTML response."""
        encoded = body.encode()
        self.send_response(RedirectProtocol.HTTP_OK)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(encoded)))
        self.send_header("Cache-Control", "no-store")
        self.end_headers()
        self.wfile.write(encoded)

    def _method_not_allowed(self) -> None:
        self.send_error(RedirectProtocol.HTTP_METHOD_NOT_ALLOWED, "Method Not Allowed")


__all__ = [
    "RedirectHTTPServer",
    "RedirectHandler",
    "render_success_page",
    "render_failure_page",
]
