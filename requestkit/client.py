"""Request assembly and execution.

Example:
    from requestkit import build, with_host, with_path

    requester = build(with_host("api.example.com"), with_path("v1", "items"))

    items: list = []
    response = requester.execute(items)  # body decoded into items, then closed

    response = requester.execute()  # body left open
    try:
        print(response.read())
    finally:
        response.close()
"""

from typing import Any
from urllib.parse import quote

import httpx

from requestkit._internal.decode import decode_into
from requestkit._internal.handlers import ResponseHandler, default_response_handler
from requestkit._internal.http import Transport, get_default_transport
from requestkit.exceptions import RequestBuildError
from requestkit.options import Method, MultiValueMap, Option, RequestState, Scheme, apply_options

DEFAULT_SCHEME = Scheme.HTTP
DEFAULT_METHOD = Method.GET

# Path characters left unescaped: separators plus RFC 3986 sub-delims, ":" and "@".
PATH_SAFE = "/:@!$&'()*+,;="


def _multi_items(values: MultiValueMap | None) -> list[tuple[str, str]]:
    """Flatten a name -> values mapping into repeated (name, value) pairs."""
    if not values:
        return []
    return [(name, value) for name, items in values.items() for value in items]


def format_url(scheme: Scheme, host: str, path: str) -> str:
    """Build the URL string, percent-encoding the path.

    Characters such as "?" and "#" inside the path stay part of the path.
    """
    if path and not path.startswith("/"):
        path = "/" + path
    return f"{scheme.value}://{host}{quote(path, safe=PATH_SAFE)}"


class Requester:
    """An assembled request bound to its transport and response handler.

    Created by `build()`. The same requester can be executed more than once.
    """

    def __init__(
        self,
        request: httpx.Request,
        *,
        client: Transport,
        response_handler: ResponseHandler,
    ) -> None:
        self._request = request
        self._client = client
        self._response_handler = response_handler

    def __repr__(self) -> str:
        return f"<Requester [{self._request.method} {self._request.url}]>"

    @property
    def request(self) -> httpx.Request:
        return self._request

    @property
    def client(self) -> Transport:
        return self._client

    @property
    def response_handler(self) -> ResponseHandler:
        return self._response_handler

    def execute(
        self,
        target: Any = None,
        *,
        timeout: float | httpx.Timeout | None = None,
    ) -> httpx.Response:
        """Send the request and handle the response.

        Body ownership:
            - The response handler rejects the response: the handler has
              already dealt with the body; its error propagates.
            - No target: the response is returned with its body open and
              the caller must close it.
            - Target given: the body is decoded into the target and always
              closed before returning or raising.

        Args:
            target: Optional object to decode the JSON body into, in place.
                See `decode_into` for the supported shapes.
            timeout: Optional deadline for this call, in seconds or as an
                httpx.Timeout. Enforced by the transport; when omitted the
                transport's own default applies.

        Returns:
            The response.

        Raises:
            httpx.HTTPError: If the transport failed to complete the round trip.
            ResponseError: If the default handler rejected the status code.
            DecodeError: If the body could not be decoded into the target.
        """
        request = self._request
        extensions = {k: v for k, v in request.extensions.items() if k != "timeout"}
        if timeout is not None:
            extensions["timeout"] = httpx.Timeout(timeout).as_dict()
        request.extensions = extensions

        response = self._client.send(request)

        self._response_handler(response)

        if target is None:
            return response

        try:
            decode_into(target, response.read(), response=response)
        finally:
            response.close()

        return response


def build(*options: Option) -> Requester:
    """Assemble a requester from options.

    Unset fields fall back to defaults: scheme "http", method GET, the
    shared environment-configured httpx transport (see
    `get_default_transport`), and the default response
    handler. Nothing is sent over the network here.

    Args:
        *options: Options to apply, in order.

    Returns:
        A Requester ready to execute.

    Raises:
        RequestBuildError: If no host was set, the scheme or method is not
            recognised, or the resulting URL is invalid.
    """
    state = apply_options(*options)
    return assemble(state)


def assemble(state: RequestState) -> Requester:
    """Turn an already populated state into a Requester. See `build()`."""
    if not state.host:
        raise RequestBuildError(f"missing host from request builder: {state!r}")

    try:
        scheme = Scheme((state.scheme or DEFAULT_SCHEME).lower())
        method = Method((state.method or DEFAULT_METHOD).upper())
    except ValueError as e:
        raise RequestBuildError(str(e)) from e

    url = format_url(scheme, state.host, state.path)
    try:
        request = httpx.Request(
            method.value,
            url,
            params=_multi_items(state.query_args),
            headers=_multi_items(state.headers),
            content=state.body,
        )
    except httpx.InvalidURL as e:
        raise RequestBuildError(f"invalid request URL {url!r}: {e}") from e

    # Shared bare-bones default. Pass your own transport for anything beyond
    # the environment timeout and debug settings.
    client = state.client if state.client is not None else get_default_transport()
    response_handler = state.response_handler or default_response_handler

    return Requester(request, client=client, response_handler=response_handler)
