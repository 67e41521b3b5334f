# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory Transport for tests and offline consumers."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Iterable
from typing import Union

from ..errors import TransportError, TransportErrorCode
from .models import HttpRequest, HttpResponse
from .transport import Transport

StubReply = Union[tuple[bytes, HttpResponse], TransportError]


class StubTransport(Transport):
    """Deterministic, programmable Transport keyed by request URL."""

    def __init__(
        self,
        responses: dict[str, StubReply] | None = None,
        *,
        timeout_for_request: float = 60.0,
        timeout_for_resource: float = 604800.0,
    ):
        self._responses: dict[str, StubReply] = dict(responses or {})
        self._streams: dict[str, list[StubReply]] = {}
        self.requests: list[HttpRequest] = []
        self.timeout_for_request = timeout_for_request
        self.timeout_for_resource = timeout_for_resource
        self.closed = False

    def add(self, url: str, body: bytes = b"", status_code: int = 200, headers: dict[str, str] | None = None) -> None:
        self._responses[url] = (body, HttpResponse(status_code=status_code, headers=dict(headers or {}), url=url))

    def fail(self, url: str, error: TransportError) -> None:
        self._responses[url] = error

    def add_stream(self, url: str, replies: Iterable[StubReply]) -> None:
        self._streams[url] = list(replies)

    async def send(self, request: HttpRequest) -> tuple[bytes, HttpResponse]:
        self.requests.append(request)
        await asyncio.sleep(0)
        reply = self._responses.get(request.url)
        if reply is None:
            raise TransportError(
                f"No stubbed response configured for {request.url}",
                code=TransportErrorCode.CONNECTION,
                request=request,
            )
        if isinstance(reply, TransportError):
            raise reply
        return reply

    async def stream(self, request: HttpRequest) -> AsyncIterator[tuple[bytes, HttpResponse]]:
        self.requests.append(request)
        replies = self._streams.get(request.url)
        if replies is None:
            raise TransportError(
                f"No stubbed stream configured for {request.url}",
                code=TransportErrorCode.CONNECTION,
                request=request,
            )
        for reply in replies:
            await asyncio.sleep(0)
            if isinstance(reply, TransportError):
                raise reply
            yield reply

    async def aclose(self) -> None:
        self.closed = True
