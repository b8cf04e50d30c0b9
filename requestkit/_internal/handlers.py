"""Response classification."""

from collections.abc import Callable

import httpx

from requestkit.exceptions import ResponseError

# A handler inspects a completed response and raises when it is not acceptable.
ResponseHandler = Callable[[httpx.Response], None]

SUCCESS_CODES: frozenset[int] = frozenset({
    httpx.codes.OK,
    httpx.codes.CREATED,
    httpx.codes.ACCEPTED,
    httpx.codes.NON_AUTHORITATIVE_INFORMATION,
    httpx.codes.NO_CONTENT,
    httpx.codes.RESET_CONTENT,
    httpx.codes.PARTIAL_CONTENT,
    httpx.codes.MULTI_STATUS,
    httpx.codes.ALREADY_REPORTED,
    httpx.codes.IM_USED,
})

# Accepted as-is; nothing here follows them.
REDIRECT_CODES: frozenset[int] = frozenset({
    httpx.codes.MULTIPLE_CHOICES,
    httpx.codes.MOVED_PERMANENTLY,
    httpx.codes.FOUND,
    httpx.codes.SEE_OTHER,
    httpx.codes.NOT_MODIFIED,
    httpx.codes.USE_PROXY,
    httpx.codes.TEMPORARY_REDIRECT,
    httpx.codes.PERMANENT_REDIRECT,
})


def default_response_handler(response: httpx.Response) -> None:
    """Accept success and redirect statuses, reject everything else.

    On rejection the body is read in full, the response is closed, and the
    body is attached to the raised error.

    Args:
        response: The response to classify.

    Raises:
        ResponseError: If the status is in neither the success nor the
            redirect set.
    """
    if response.status_code in SUCCESS_CODES or response.status_code in REDIRECT_CODES:
        return

    try:
        body = response.read()
    finally:
        response.close()
    raise ResponseError(response.status_code, body, response=response)
