"""requestkit: declarative HTTP request building for Python.

Assemble a request from options, send it through a pluggable transport,
classify the response status, and optionally decode the JSON body into an
object you own.

Public API:
    build - Assemble a Requester from options
    Requester - Assembled request; call `execute()` to send it
    with_* - Options
    Method, Scheme - Enums for the method and scheme options
    Transport, HttpxTransport - Transport capability and its default
    default_response_handler - Default status classifier
    RequestKitError and subclasses, is_response_error - Errors
"""

from requestkit._internal.handlers import (
    REDIRECT_CODES,
    SUCCESS_CODES,
    ResponseHandler,
    default_response_handler,
)
from requestkit._internal.http import (
    HttpxTransport,
    Transport,
    close_default_transport,
    create_http_client,
    get_default_transport,
)
from requestkit._version import __version__
from requestkit.client import Requester, build
from requestkit.exceptions import (
    DecodeError,
    RequestBuildError,
    RequestKitError,
    ResponseError,
    is_response_error,
)
from requestkit.options import (
    Method,
    Option,
    RequestState,
    Scheme,
    with_body,
    with_client,
    with_headers,
    with_host,
    with_method,
    with_path,
    with_query_args,
    with_response_handler,
    with_scheme,
)

__all__ = [
    "__version__",
    "build",
    "Requester",
    "Option",
    "RequestState",
    "Method",
    "Scheme",
    "with_body",
    "with_client",
    "with_headers",
    "with_host",
    "with_method",
    "with_path",
    "with_query_args",
    "with_response_handler",
    "with_scheme",
    "Transport",
    "HttpxTransport",
    "create_http_client",
    "get_default_transport",
    "close_default_transport",
    "ResponseHandler",
    "default_response_handler",
    "SUCCESS_CODES",
    "REDIRECT_CODES",
    "RequestKitError",
    "RequestBuildError",
    "ResponseError",
    "DecodeError",
    "is_response_error",
]
