"""Request options.

An option is a callable that mutates a `RequestState`. Options are applied in
the order given; a later option for the same field replaces the earlier value
entirely. This holds for headers and query args too: passing `with_headers`
twice keeps only the second mapping.

Example:
    from requestkit import (
        Method, Scheme, build, with_host, with_method, with_path, with_scheme,
    )

    requester = build(
        with_scheme(Scheme.HTTPS),
        with_method(Method.POST),
        with_host("api.example.com"),
        with_path("v1", "items"),
    )
"""

import posixpath
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

from requestkit._internal.handlers import ResponseHandler
from requestkit._internal.http import Transport

MultiValueMap = Mapping[str, Sequence[str]]


class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class Scheme(str, Enum):
    HTTP = "http"
    HTTPS = "https"


@dataclass
class RequestState:
    """In-progress request configuration.

    Every field starts unset. Defaults for scheme, method, transport and
    response handler are filled in by `build()`, not here.
    """

    scheme: Scheme | str | None = None
    method: Method | str | None = None
    host: str = ""
    path: str = ""
    headers: MultiValueMap | None = None
    query_args: MultiValueMap | None = None
    body: bytes | None = None
    client: Transport | None = None
    response_handler: ResponseHandler | None = None


Option = Callable[[RequestState], None]


def apply_options(*options: Option) -> RequestState:
    """Apply options, in order, to a fresh state. No validation happens here."""
    state = RequestState()
    for option in options:
        option(state)
    return state


def join_path(*segments: str) -> str:
    """Join path segments with "/" and collapse redundant separators.

    Empty segments are skipped and "." or ".." elements are resolved, so
    ``join_path("a", "b")`` and ``join_path("a/", "/b")`` both give ``"a/b"``.
    No segments gives an empty path.
    """
    joined = "/".join(segment for segment in segments if segment)
    if not joined:
        return ""
    path = posixpath.normpath(joined)
    # normpath keeps a leading "//"
    if path.startswith("//"):
        path = "/" + path.lstrip("/")
    return path


def with_method(method: Method | str) -> Option:
    def option(state: RequestState) -> None:
        state.method = method

    return option


def with_scheme(scheme: Scheme | str) -> Option:
    def option(state: RequestState) -> None:
        state.scheme = scheme

    return option


def with_host(host: str) -> Option:
    """Set the host, optionally with a port (``"localhost:8080"``). Required."""

    def option(state: RequestState) -> None:
        state.host = host

    return option


def with_path(*segments: str) -> Option:
    """Set the path from one or more segments, e.g. ``with_path("v1", "items")``."""

    def option(state: RequestState) -> None:
        state.path = join_path(*segments)

    return option


def with_headers(headers: MultiValueMap) -> Option:
    """Set headers. Each name maps to a list of values, all of which are sent."""

    def option(state: RequestState) -> None:
        state.headers = headers

    return option


def with_query_args(query_args: MultiValueMap) -> Option:
    """Set query args. Each key maps to a list of values, sent as repeated params."""

    def option(state: RequestState) -> None:
        state.query_args = query_args

    return option


def with_body(body: bytes) -> Option:
    def option(state: RequestState) -> None:
        state.body = body

    return option


def with_client(client: Transport) -> Option:
    """Send through the given transport instead of the default httpx one."""

    def option(state: RequestState) -> None:
        state.client = client

    return option


def with_response_handler(handler: ResponseHandler) -> Option:
    """Classify responses with the given handler instead of the default one."""

    def option(state: RequestState) -> None:
        state.response_handler = handler

    return option
