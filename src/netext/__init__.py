# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
netext package entrypoint.

A convenience layer over httpx: typed REST endpoint descriptions, request and
response body coders, status-code validation, and an IP address value type.
HTTP is abstracted behind an injectable asynchronous Transport, and every
pipeline stage returns an `Ok`/`Err` result instead of raising.
"""

from .config import HttpSettings, load_http_settings
from .errors import (
    InvalidComponentsError,
    InvalidJsonError,
    IPDecodeError,
    NetextError,
    RequestBuildError,
    StatusCodeError,
    TransportError,
    TransportErrorCode,
)
from .http import (
    HttpRequest,
    HttpResponse,
    HttpxTransport,
    SecureUpgradeTransport,
    StubTransport,
    Transport,
    create_default_transport,
)
from .interfaces import NetworkInterface, get_ip_addresses
from .ip import IP, IPv4, IPv6, preferred_address
from .log import setup_logging
from .rest import (
    Endpoint,
    EndpointPort,
    HTTPMethod,
    QueryParameter,
    RequestParser,
    ResponseParser,
    RestClient,
    StatusCodeHandler,
)
from .result import Err, Ok, Result
from .version import __version__

__all__ = [
    "Endpoint",
    "EndpointPort",
    "Err",
    "HTTPMethod",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxTransport",
    "IP",
    "IPDecodeError",
    "IPv4",
    "IPv6",
    "InvalidComponentsError",
    "InvalidJsonError",
    "NetextError",
    "NetworkInterface",
    "Ok",
    "QueryParameter",
    "RequestBuildError",
    "RequestParser",
    "ResponseParser",
    "RestClient",
    "Result",
    "SecureUpgradeTransport",
    "StatusCodeError",
    "StatusCodeHandler",
    "StubTransport",
    "Transport",
    "TransportError",
    "TransportErrorCode",
    "create_default_transport",
    "get_ip_addresses",
    "load_http_settings",
    "preferred_address",
    "setup_logging",
    "__version__",
]
