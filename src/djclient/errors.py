# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl
from collections.abc import Iterator
from enum import Enum

import httpx

TRANSPORT_ERROR_PREFIX = "Failed to query. CURL error: "


class DjclientError(Exception):
    """Base class for errors raised by djclient."""


class TransportInitError(DjclientError):
    """The transport handle could not be created."""


class TreeCoercionError(DjclientError, ValueError):
    """A property tree value could not be converted to the requested type."""


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    DNS_ERROR = "DNS_ERROR"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    UNSUPPORTED_PROTOCOL = "UNSUPPORTED_PROTOCOL"
    MALFORMED_URL = "MALFORMED_URL"
    TOO_MANY_REDIRECTS = "TOO_MANY_REDIRECTS"
    SEND_ERROR = "SEND_ERROR"
    RECEIVE_ERROR = "RECEIVE_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


_REASONS: dict[ErrorCategory, str] = {
    ErrorCategory.TIMEOUT: "Timeout was reached",
    ErrorCategory.DNS_ERROR: "Couldn't resolve host name",
    ErrorCategory.SSL_ERROR: "SSL connect error",
    ErrorCategory.CONNECTION_ERROR: "Couldn't connect to server",
    ErrorCategory.UNSUPPORTED_PROTOCOL: "Unsupported protocol",
    ErrorCategory.MALFORMED_URL: "URL using bad/illegal format or missing URL",
    ErrorCategory.TOO_MANY_REDIRECTS: "Number of redirects hit maximum amount",
    ErrorCategory.SEND_ERROR: "Failed sending data to the peer",
    ErrorCategory.RECEIVE_ERROR: "Failure when receiving data from the peer",
    ErrorCategory.UNKNOWN_ERROR: "Unknown error",
    ErrorCategory.NONE: "No error",
}


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map httpx/socket/ssl exceptions to ErrorCategory.

    httpx wraps low-level failures (`ssl.SSLError`, `socket.gaierror`) in its own
    ConnectError, so the cause chain is inspected before the httpx class itself.
    """
    chain = list(_exception_chain(exc))

    for item in chain:
        if isinstance(item, (ssl.SSLError, ssl.CertificateError)):
            return ErrorCategory.SSL_ERROR
        if isinstance(item, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT
    if isinstance(exc, httpx.UnsupportedProtocol):
        return ErrorCategory.UNSUPPORTED_PROTOCOL
    if isinstance(exc, httpx.InvalidURL):
        return ErrorCategory.MALFORMED_URL
    if isinstance(exc, httpx.TooManyRedirects):
        return ErrorCategory.TOO_MANY_REDIRECTS
    if isinstance(exc, (httpx.ConnectError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR
    if isinstance(exc, (httpx.WriteError, httpx.LocalProtocolError)):
        return ErrorCategory.SEND_ERROR
    if isinstance(exc, (httpx.ReadError, httpx.RemoteProtocolError)):
        return ErrorCategory.RECEIVE_ERROR

    for item in chain:
        if isinstance(item, socket.timeout):
            return ErrorCategory.TIMEOUT
        if isinstance(item, ConnectionError):
            return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """Stock description for a transport error category."""
    if category is None:
        return _REASONS[ErrorCategory.NONE]
    return _REASONS.get(category, _REASONS[ErrorCategory.UNKNOWN_ERROR])


def describe_transport_failure(exc: BaseException) -> str:
    """Build the diagnostic body stored in a failed (code -1) response."""
    reason = error_category_to_reason(categorize_exception(exc))
    detail = str(exc) or type(exc).__name__
    return f"{TRANSPORT_ERROR_PREFIX}{reason}: DETAIL: {detail}"


__all__ = [
    "TRANSPORT_ERROR_PREFIX",
    "DjclientError",
    "ErrorCategory",
    "TransportInitError",
    "TreeCoercionError",
    "categorize_exception",
    "describe_transport_failure",
    "error_category_to_reason",
]
