# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""REST client orchestration.

A request runs once through four stages: build the HttpRequest from client
defaults and the endpoint, hand it to the transport, validate the status code,
decode the body. The first failing stage ends the call with its error; there is
no retry apart from the optional secure upgrade. Typed API families are
usually written as `RestClient` subclasses with one method per endpoint:

    class ThermostatClient(RestClient):
        async def temperature(self) -> Result[Reading, Exception]:
            return await self.request(Endpoint("/temperature"), ResponseParser.json(Reading))
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterable, Mapping
from typing import Any, Optional, TypeVar

from ..config import HttpSettings, load_http_settings
from ..errors import TransportError
from ..http.models import HttpRequest
from ..http.retry import SecureUpgradeTransport
from ..http.transport import Transport, create_default_transport, supports_streaming
from ..result import Err, Result
from .builder import create_request
from .endpoint import Endpoint
from .parsers import RequestParser, ResponseParser
from .query import QueryParameter
from .status import StatusCodeHandler, resolve_status_code_handler

logger = logging.getLogger(__name__)

Value = TypeVar("Value")


class RestClient:
    """
    Client for one REST host.

    Configuration attributes may be reassigned between requests; they are read
    when each request is built. Concurrent reassignment while requests are in
    flight is the owner's responsibility.
    """

    def __init__(
        self,
        hostname: str,
        transport: Transport,
        *,
        default_port: int = 443,
        default_use_ssl: bool = True,
        required_headers: Optional[Mapping[str, str]] = None,
        required_query_parameters: Optional[Iterable[QueryParameter]] = None,
        status_code_handler: Optional[StatusCodeHandler] = None,
        secure_upgrade: bool = False,
    ):
        self.hostname = hostname
        self.transport = transport
        self.default_port = default_port
        self.default_use_ssl = default_use_ssl
        self.required_headers: dict[str, str] = dict(required_headers or {})
        self.required_query_parameters: list[QueryParameter] = list(required_query_parameters or [])
        self.status_code_handler = status_code_handler
        self.secure_upgrade = secure_upgrade

    @classmethod
    def from_settings(
        cls,
        hostname: str,
        transport: Optional[Transport] = None,
        settings: Optional[HttpSettings] = None,
        *,
        allow_any_certificate: bool = False,
        **kwargs: Any,
    ) -> RestClient:
        """Build a client whose defaults (and default transport) come from HttpSettings."""
        settings = settings or load_http_settings()
        kwargs.setdefault("default_port", settings.default_port)
        kwargs.setdefault("default_use_ssl", settings.default_use_ssl)
        if transport is None:
            transport = create_default_transport(settings, allow_any_certificate=allow_any_certificate)
        return cls(hostname, transport, **kwargs)

    def scheme(self, ssl: bool) -> str:
        return "https" if ssl else "http"

    @property
    def _effective_transport(self) -> Transport:
        if self.secure_upgrade:
            return SecureUpgradeTransport(self.transport)
        return self.transport

    def create_request(
        self,
        endpoint: Endpoint[Any],
        request_parser: Optional[RequestParser[Any]] = None,
    ) -> Result[HttpRequest, Exception]:
        return create_request(endpoint, self, request_parser or RequestParser.ignore())

    async def request(
        self,
        endpoint: Endpoint[Any],
        response_parser: ResponseParser[Value],
        request_parser: Optional[RequestParser[Any]] = None,
    ) -> Result[Value, Exception]:
        """Run `endpoint` once and return the decoded value or the first error."""
        status_code_handler = resolve_status_code_handler(endpoint, self)
        built = self.create_request(endpoint, request_parser)
        if built.is_err:
            return built
        request = built.value

        logger.debug("%s %s", request.method, request.url)
        try:
            data, response = await self._effective_transport.send(request)
        except TransportError as exc:
            logger.debug("Transport failed for %s %s: %s", request.method, request.url, exc)
            return Err(exc)

        validated = status_code_handler.eval(response, data)
        if validated.is_err:
            logger.debug("Rejected status for %s %s: %s", request.method, request.url, validated.error)
            return validated
        return response_parser.parse(data, validated.value)

    async def long_polling(
        self,
        endpoint: Endpoint[Any],
        response_parser: ResponseParser[Value],
        request_parser: Optional[RequestParser[Any]] = None,
    ) -> AsyncIterator[Result[Value, Exception]]:
        """
        Yield one result per response the transport delivers on a held-open connection.

        Each element is validated and decoded on its own; a rejected element is
        yielded as an `Err` and polling continues. A build or transport failure
        is yielded last. Closing the iterator closes the transport stream.
        """
        transport = self._effective_transport
        if not supports_streaming(transport):
            raise NotImplementedError(f"{type(transport).__name__} does not support long polling")

        status_code_handler = resolve_status_code_handler(endpoint, self)
        built = self.create_request(endpoint, request_parser)
        if built.is_err:
            yield built
            return
        request = built.value

        logger.debug("%s %s (long polling)", request.method, request.url)
        stream = transport.stream(request)  # type: ignore[attr-defined]
        try:
            async for data, response in stream:
                validated = status_code_handler.eval(response, data)
                if validated.is_err:
                    yield validated
                    continue
                yield response_parser.parse(data, validated.value)
        except TransportError as exc:
            logger.debug("Long polling ended for %s %s: %s", request.method, request.url, exc)
            yield Err(exc)
        finally:
            close = getattr(stream, "aclose", None)
            if close is not None:
                await close()

    async def aclose(self) -> None:
        close = getattr(self.transport, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> RestClient:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()


__all__ = ["RestClient"]
