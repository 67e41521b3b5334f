# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Secure-upgrade retry for Transport implementations.

The only retry netext performs: a plain `http://` request rejected with
`SECURE_CONNECTION_REQUIRED` is sent once more as `https://`, everything else
unchanged. Any other failure, or a failure of the upgraded attempt, propagates
as is.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from ..errors import TransportError
from .models import HttpRequest, HttpResponse
from .transport import Transport, supports_streaming

logger = logging.getLogger(__name__)


async def _aclose(stream: AsyncIterator[object]) -> None:
    close = getattr(stream, "aclose", None)
    if close is not None:
        await close()


def _should_upgrade(error: TransportError, request: HttpRequest) -> bool:
    return error.requires_secure_connection and request.scheme == "http"


async def send_with_secure_upgrade(transport: Transport, request: HttpRequest) -> tuple[bytes, HttpResponse]:
    """Send `request`, retrying exactly once over https when the transport demands it."""
    try:
        return await transport.send(request)
    except TransportError as exc:
        if not _should_upgrade(exc, request):
            raise
        upgraded = request.with_scheme("https")
        logger.warning("Secure connection required for %s; retrying as %s", request.url, upgraded.url)

    return await transport.send(upgraded)


async def stream_with_secure_upgrade(
    transport: Transport, request: HttpRequest
) -> AsyncIterator[tuple[bytes, HttpResponse]]:
    """Streaming counterpart; the upgrade only applies before the first element arrives."""
    if not supports_streaming(transport):
        raise NotImplementedError(f"{type(transport).__name__} does not support long polling")

    upgraded: HttpRequest | None = None
    stream = transport.stream(request)  # type: ignore[attr-defined]
    try:
        first = await stream.__anext__()
    except StopAsyncIteration:
        return
    except TransportError as exc:
        if not _should_upgrade(exc, request):
            raise
        upgraded = request.with_scheme("https")
        logger.warning("Secure connection required for %s; retrying as %s", request.url, upgraded.url)
    finally:
        if upgraded is not None:
            await _aclose(stream)

    if upgraded is not None:
        stream = transport.stream(upgraded)  # type: ignore[attr-defined]
        try:
            async for element in stream:
                yield element
        finally:
            await _aclose(stream)
        return

    try:
        yield first
        async for element in stream:
            yield element
    finally:
        await _aclose(stream)


class SecureUpgradeTransport(Transport):
    """Transport adapter applying the secure-upgrade retry around another transport."""

    def __init__(self, inner: Transport):
        self.inner = inner

    @property
    def timeout_for_request(self) -> float:  # type: ignore[override]
        return self.inner.timeout_for_request

    @property
    def timeout_for_resource(self) -> float:  # type: ignore[override]
        return self.inner.timeout_for_resource

    async def send(self, request: HttpRequest) -> tuple[bytes, HttpResponse]:
        return await send_with_secure_upgrade(self.inner, request)

    def stream(self, request: HttpRequest) -> AsyncIterator[tuple[bytes, HttpResponse]]:
        return stream_with_secure_upgrade(self.inner, request)

    async def aclose(self) -> None:
        close = getattr(self.inner, "aclose", None)
        if close is not None:
            await close()
