# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Typed REST request pipeline."""

from .builder import RequestCreator, create_request
from .client import RestClient
from .endpoint import USE_DEFAULT_PORT, Endpoint, EndpointPort, HTTPMethod
from .parsers import NIL_PLACEHOLDER, RequestParser, ResponseParser, to_jsonable
from .query import QueryParameter, render_query
from .status import DEFAULT_STATUS_CODE_HANDLER, StatusCodeHandler, resolve_status_code_handler

__all__ = [
    "DEFAULT_STATUS_CODE_HANDLER",
    "Endpoint",
    "EndpointPort",
    "HTTPMethod",
    "NIL_PLACEHOLDER",
    "QueryParameter",
    "RequestCreator",
    "RequestParser",
    "ResponseParser",
    "RestClient",
    "StatusCodeHandler",
    "USE_DEFAULT_PORT",
    "create_request",
    "render_query",
    "resolve_status_code_handler",
    "to_jsonable",
]
