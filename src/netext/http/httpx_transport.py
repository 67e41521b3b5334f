# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed Transport implementation."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import TransportError, TransportErrorCode, transport_error_from_exception
from .models import HttpRequest, HttpResponse
from .transport import Transport

logger = logging.getLogger(__name__)


class HttpxTransport(Transport):
    """Asynchronous httpx client wrapper."""

    def __init__(
        self,
        settings: HttpSettings | None = None,
        client: httpx.AsyncClient | None = None,
        *,
        allow_any_certificate: bool = False,
    ):
        self.settings = settings or load_http_settings()
        self.timeout_for_request = self.settings.timeout_for_request
        self.timeout_for_resource = self.settings.timeout_for_resource
        self._client = client or httpx.AsyncClient(
            follow_redirects=self.settings.follow_redirects,
            timeout=self.settings.timeout_for_request,
            verify=self.settings.verify_ssl and not allow_any_certificate,
        )

    def _prepare_headers(self, request: HttpRequest) -> dict[str, str]:
        if self.settings.require_secure and request.scheme != "https":
            raise TransportError(
                f"A secure connection is required for {request.url}",
                code=TransportErrorCode.SECURE_CONNECTION_REQUIRED,
                request=request,
            )
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        return headers

    async def send(self, request: HttpRequest) -> tuple[bytes, HttpResponse]:
        headers = self._prepare_headers(request)
        timeout = request.timeout if request.timeout is not None else self.timeout_for_request
        try:
            response = await asyncio.wait_for(
                self._client.request(
                    request.method,
                    request.url,
                    headers=headers,
                    content=request.body,
                    timeout=timeout,
                ),
                timeout=self.timeout_for_resource,
            )
        except asyncio.TimeoutError as exc:
            raise TransportError(
                f"Resource timeout of {self.timeout_for_resource}s exceeded",
                code=TransportErrorCode.TIMEOUT,
                request=request,
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise transport_error_from_exception(exc, request) from exc

        logger.debug("%s %s -> %s", request.method, request.url, response.status_code)
        return response.content, HttpResponse.from_httpx(response)

    async def stream(self, request: HttpRequest) -> AsyncIterator[tuple[bytes, HttpResponse]]:
        """
        Hold the connection open and yield one element per non-empty body line.

        A response that closes without any line still yields one empty element
        so its status code reaches the caller.
        """
        headers = self._prepare_headers(request)
        connect_timeout = request.timeout if request.timeout is not None else self.timeout_for_request
        timeout = httpx.Timeout(connect_timeout, read=None)
        delivered = False
        try:
            async with self._client.stream(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
                timeout=timeout,
            ) as response:
                metadata = HttpResponse.from_httpx(response)
                async for line in response.aiter_lines():
                    if not line.strip():
                        continue
                    delivered = True
                    yield line.encode("utf-8"), metadata
                if not delivered:
                    yield b"", metadata
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise transport_error_from_exception(exc, request) from exc

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpxTransport:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()
