"""Transport capability and the default httpx-backed transport."""

import os
import sys
import threading
from typing import Protocol, runtime_checkable

import httpx

from requestkit._internal.redaction import redact_headers
from requestkit._version import __version__

DEFAULT_TIMEOUT = 30.0
DEFAULT_TIMEOUT_MS = int(DEFAULT_TIMEOUT * 1000)


@runtime_checkable
class Transport(Protocol):
    """Anything that can send an assembled request and return its response."""

    def send(self, request: httpx.Request) -> httpx.Response: ...


def create_http_client(
    *,
    timeout: float = DEFAULT_TIMEOUT,
    base_url: str | None = None,
) -> httpx.Client:
    """Create configured HTTP client.

    Redirects are never followed; 3xx responses are handed back as-is.

    Args:
        timeout: Request timeout in seconds.
        base_url: Optional base URL for all requests.

    Returns:
        Configured httpx.Client instance.
    """
    return httpx.Client(
        timeout=timeout,
        base_url=base_url or "",
        headers={"User-Agent": f"requestkit/{__version__}"},
        follow_redirects=False,
    )


class HttpxTransport:
    """Default transport: sends requests through an httpx.Client.

    Responses are returned with their body still open (``stream=True``), so
    whoever ends up owning the response is responsible for closing it.

    Use `HttpxTransport.from_env()` to pick up timeout and debug settings
    from environment variables.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        debug: bool = False,
    ) -> None:
        """Initialize the transport.

        Args:
            client: Pre-configured client. Created with `create_http_client`
                when omitted.
            timeout_ms: Request timeout in milliseconds, used only when the
                client is created here.
            debug: Enable debug logging to stderr.
        """
        self._client = client or create_http_client(timeout=timeout_ms / 1000)
        self._timeout_ms = timeout_ms
        self._debug = debug

    @classmethod
    def from_env(cls) -> "HttpxTransport":
        """Create a transport from environment variables.

        Optional environment variables:
            REQUESTKIT_TIMEOUT_MS: Request timeout in milliseconds.
            REQUESTKIT_DEBUG: Set to "1" to enable debug logging.

        Returns:
            A configured HttpxTransport.

        Raises:
            ValueError: If REQUESTKIT_TIMEOUT_MS is not a valid integer.
        """
        debug = os.environ.get("REQUESTKIT_DEBUG", "") == "1"
        timeout_ms = int(os.environ.get("REQUESTKIT_TIMEOUT_MS", str(DEFAULT_TIMEOUT_MS)))
        return cls(timeout_ms=timeout_ms, debug=debug)

    @property
    def client(self) -> httpx.Client:
        return self._client

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            print(f"[requestkit] {message}", file=sys.stderr)

    def send(self, request: httpx.Request) -> httpx.Response:
        """Send a request and return the response with its body unread.

        Transport failures (connect errors, timeouts) propagate as httpx
        exceptions.
        """
        # Client defaults (User-Agent etc.) only apply via build_request
        for name, value in self._client.headers.items():
            if name not in request.headers:
                request.headers[name] = value

        self._log_debug(f"Sending {request.method} {request.url}")
        self._log_debug(f"Headers: {redact_headers(request.headers.multi_items())}")
        try:
            response = self._client.send(request, stream=True)
        except httpx.TimeoutException:
            self._log_debug("Request timed out")
            raise
        except httpx.HTTPError as e:
            self._log_debug(f"Request error: {e}")
            raise
        self._log_debug(f"Received status {response.status_code}")
        return response

    def close(self) -> None:
        self._client.close()


_default_transport: HttpxTransport | None = None
_default_lock = threading.Lock()


def get_default_transport() -> HttpxTransport:
    """Get the shared default transport, creating it from the environment once.

    Every requester built without its own transport sends through this one
    instance, so there is a single connection pool to release.
    """
    global _default_transport
    with _default_lock:
        if _default_transport is None:
            _default_transport = HttpxTransport.from_env()
        return _default_transport


def close_default_transport() -> None:
    """Close the shared default transport.

    The next `get_default_transport()` call creates a fresh one.
    """
    global _default_transport
    with _default_lock:
        if _default_transport is not None:
            _default_transport.close()
            _default_transport = None
