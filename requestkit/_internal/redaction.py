"""Redaction of sensitive header values in debug output."""

from collections.abc import Iterable

REDACT_HEADERS: frozenset[str] = frozenset({
    "authorization",
    "proxy-authorization",
    "cookie",
    "set-cookie",
    "x-api-key",
    "api-key",
    "x-auth-token",
    "x-access-token",
})

REDACTED_VALUE = "[REDACTED]"


def redact_headers(headers: Iterable[tuple[str, str]]) -> list[tuple[str, str]]:
    """Replace sensitive header values with a placeholder.

    Header names are matched case-insensitively. Multi-valued headers keep
    one entry per value, in order. The input is never mutated.

    Args:
        headers: (name, value) pairs, e.g. ``httpx.Headers.multi_items()``.

    Returns:
        A new list of (name, value) pairs.
    """
    return [
        (name, REDACTED_VALUE if name.lower() in REDACT_HEADERS else value)
        for name, value in headers
    ]
