# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .http.models import HttpRequest, HttpResponse


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class TransportErrorCode(str, Enum):
    """Reason a transport round-trip failed before an HTTP response was available."""

    SECURE_CONNECTION_REQUIRED = "SECURE_CONNECTION_REQUIRED"
    TIMEOUT = "TIMEOUT"
    CONNECTION = "CONNECTION"
    TLS = "TLS"
    DNS = "DNS"
    PROTOCOL = "PROTOCOL"
    UNKNOWN = "UNKNOWN"


class NetextError(Exception):
    """Base class for every error raised or returned by netext."""


class IPDecodeError(NetextError, ValueError):
    """Binary address payload is neither 4 nor 16 bytes long."""

    def __init__(self, data: bytes):
        self.data = bytes(data)
        super().__init__(f"Can't parse IP address from {len(self.data)} bytes: {self.data!r}")


class RequestBuildError(NetextError):
    """The outgoing request could not be assembled; nothing was sent."""


class InvalidComponentsError(RequestBuildError):
    """Client defaults and endpoint overrides do not form a valid request target."""

    def __init__(self, component: str, detail: str = ""):
        self.component = component
        self.detail = detail
        message = f"Invalid request component '{component}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class TransportError(NetextError):
    """Network level failure reported by a Transport."""

    def __init__(
        self,
        message: str,
        *,
        code: TransportErrorCode = TransportErrorCode.UNKNOWN,
        request: Optional[HttpRequest] = None,
    ):
        self.code = code
        self.request = request
        super().__init__(message)

    @property
    def requires_secure_connection(self) -> bool:
        return self.code is TransportErrorCode.SECURE_CONNECTION_REQUIRED


class StatusCodeError(NetextError):
    """
    HTTP round-trip succeeded but the status code was rejected.

    Two errors compare equal when their numeric status codes match; the raw
    response and body are carried for diagnostics only.
    """

    def __init__(self, status_code: int, response: Optional[HttpResponse] = None, data: Optional[bytes] = None):
        self.status_code = status_code
        self.response = response
        self.data = data
        super().__init__(f"Unexpected HTTP status code {status_code}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StatusCodeError):
            return NotImplemented
        return self.status_code == other.status_code

    def __hash__(self) -> int:
        return hash(self.status_code)


class InvalidJsonError(NetextError):
    """Response body did not decode into the expected shape."""

    def __init__(self, error: BaseException, data: str):
        self.error = error
        self.data = data
        super().__init__(f"{error}:\n{data}")


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    import socket
    import ssl as ssl_module

    import httpx

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    # httpx wraps the socket/ssl error of a failed connect; look at the cause first.
    cause = exc.__cause__ or exc.__context__
    if isinstance(exc, httpx.ConnectError) and cause is not None:
        nested = categorize_exception(cause)
        if nested in (ErrorCategory.SSL_ERROR, ErrorCategory.DNS_ERROR):
            return nested

    if isinstance(exc, (httpx.RemoteProtocolError, httpx.LocalProtocolError, httpx.DecodingError)):
        return ErrorCategory.PROTOCOL_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


_CATEGORY_TO_CODE = {
    ErrorCategory.TIMEOUT: TransportErrorCode.TIMEOUT,
    ErrorCategory.SSL_ERROR: TransportErrorCode.TLS,
    ErrorCategory.CONNECTION_ERROR: TransportErrorCode.CONNECTION,
    ErrorCategory.DNS_ERROR: TransportErrorCode.DNS,
    ErrorCategory.PROTOCOL_ERROR: TransportErrorCode.PROTOCOL,
}


def transport_error_from_exception(exc: BaseException, request: Any = None) -> TransportError:
    """Wrap a client library exception into a TransportError with a categorized code."""
    code = _CATEGORY_TO_CODE.get(categorize_exception(exc), TransportErrorCode.UNKNOWN)
    error = TransportError(str(exc) or type(exc).__name__, code=code, request=request)
    error.__cause__ = exc
    return error


__all__ = [
    "ErrorCategory",
    "IPDecodeError",
    "InvalidComponentsError",
    "InvalidJsonError",
    "NetextError",
    "RequestBuildError",
    "StatusCodeError",
    "TransportError",
    "TransportErrorCode",
    "categorize_exception",
    "transport_error_from_exception",
]
