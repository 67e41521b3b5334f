# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Composition of client defaults and endpoint overrides into an HttpRequest."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import httpx

from ..errors import InvalidComponentsError
from ..http.headers import merge_headers
from ..http.models import HTTPMethod, HttpRequest
from ..ip import IP
from ..result import Err, Ok, Result
from .endpoint import Endpoint
from .parsers import RequestParser
from .query import QueryParameter, render_query

SCHEMES = ("http", "https")


class ClientDefaults(Protocol):
    """What the builder reads from a REST client."""

    default_port: int
    default_use_ssl: bool
    hostname: str
    required_headers: Mapping[str, str]
    required_query_parameters: list[QueryParameter]

    def scheme(self, ssl: bool) -> str: ...


@dataclass(frozen=True)
class RequestCreator:
    """Resolved request components; built per call and dropped afterwards."""

    port: int
    scheme: str
    hostname: str
    headers: Mapping[str, str]
    query_parameters: tuple[QueryParameter, ...]
    path: str
    method: HTTPMethod
    body: Optional[Any] = None

    @classmethod
    def resolve(cls, endpoint: Endpoint[Any], client: ClientDefaults) -> RequestCreator:
        port = endpoint.port.possible_value
        use_ssl = endpoint.use_ssl if endpoint.use_ssl is not None else client.default_use_ssl
        return cls(
            port=port if port is not None else client.default_port,
            scheme=client.scheme(use_ssl),
            hostname=client.hostname,
            headers=merge_headers(client.required_headers, endpoint.headers),
            query_parameters=tuple(client.required_query_parameters) + tuple(endpoint.query_parameters),
            path=endpoint.path,
            method=endpoint.method,
            body=endpoint.body,
        )

    def _host(self) -> str:
        host = self.hostname or ""
        if not host or any(char.isspace() for char in host) or "/" in host:
            raise InvalidComponentsError("hostname", repr(self.hostname))
        address = IP.parse(host)
        if address is not None and address.is_ipv6:
            # RFC 6874: the zone delimiter is itself percent-encoded inside a URI.
            return address.url_string.replace("%", "%25")
        return host

    def create_url(self) -> str:
        """Assemble and validate the target URL, raising InvalidComponentsError."""
        if self.scheme not in SCHEMES:
            raise InvalidComponentsError("scheme", repr(self.scheme))
        if not isinstance(self.port, int) or not 0 <= self.port <= 0xFFFF:
            raise InvalidComponentsError("port", repr(self.port))
        url = f"{self.scheme}://{self._host()}:{self.port}{self.path}"
        query = render_query(self.query_parameters)
        if query:
            url = f"{url}?{query}"
        try:
            httpx.URL(url)
        except httpx.InvalidURL as exc:
            raise InvalidComponentsError("url", str(exc)) from exc
        return url

    def create_request(self, request_parser: Optional[RequestParser[Any]] = None) -> Result[HttpRequest, Exception]:
        try:
            url = self.create_url()
        except InvalidComponentsError as exc:
            return Err(exc)

        body: Optional[bytes] = None
        if self.body is not None:
            encoded = (request_parser or RequestParser.ignore()).parse(self.body)
            if encoded.is_err:
                return encoded
            body = encoded.value

        return Ok(
            HttpRequest(
                url=url,
                method=self.method.value,
                headers=dict(self.headers),
                body=body,
            )
        )


def create_request(
    endpoint: Endpoint[Any],
    client: ClientDefaults,
    request_parser: Optional[RequestParser[Any]] = None,
) -> Result[HttpRequest, Exception]:
    """Build the outgoing request for `endpoint` against `client`'s defaults."""
    return RequestCreator.resolve(endpoint, client).create_request(request_parser)


__all__ = ["ClientDefaults", "RequestCreator", "SCHEMES", "create_request"]
