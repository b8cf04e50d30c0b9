"""Public exceptions for requestkit."""

import httpx


class RequestKitError(Exception):
    """Base exception for all requestkit errors."""


class RequestBuildError(RequestKitError):
    """Request could not be assembled from the given options."""


class ResponseError(RequestKitError):
    """Response status was neither a success nor an accepted redirect.

    Status code, body and response are fixed at construction.
    """

    def __init__(
        self,
        status_code: int,
        body: bytes,
        response: httpx.Response | None = None,
    ) -> None:
        text = body.decode("utf-8", errors="replace")
        super().__init__(f"request failed: response not OK, status: {status_code}, body: {text}")
        self._status_code = status_code
        self._body = body
        self._response = response

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def body(self) -> bytes:
        return self._body

    @property
    def response(self) -> httpx.Response | None:
        return self._response


class DecodeError(RequestKitError):
    """Response body could not be decoded into the target."""

    def __init__(self, message: str, response: httpx.Response | None = None) -> None:
        super().__init__(message)
        self._response = response

    @property
    def response(self) -> httpx.Response | None:
        return self._response


def is_response_error(err: BaseException | None) -> bool:
    """Check whether an error is a classified response failure.

    Matches ResponseError and its subclasses, which is exactly what the
    default response handler raises.
    """
    return isinstance(err, ResponseError)
