# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport abstraction and factory."""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Protocol

from ..config import HttpSettings, load_http_settings
from .models import HttpRequest, HttpResponse


class Transport(Protocol):
    """
    Minimal asynchronous capability for issuing HTTP requests.

    `send` resolves to the raw body plus response metadata, or raises
    `TransportError` for network level failures. Timeouts are informational:
    they are exposed for callers and enforced by the implementation, never by
    the REST layer.
    """

    timeout_for_request: float
    timeout_for_resource: float

    async def send(self, request: HttpRequest) -> tuple[bytes, HttpResponse]: ...

    async def aclose(self) -> None:  # pragma: no cover - optional for adapters
        ...


class StreamingTransport(Transport, Protocol):
    """Transport that can hold a connection open and deliver several responses."""

    def stream(self, request: HttpRequest) -> AsyncIterator[tuple[bytes, HttpResponse]]: ...


def supports_streaming(transport: Transport) -> bool:
    return callable(getattr(transport, "stream", None))


def create_default_transport(
    settings: HttpSettings | None = None,
    *,
    allow_any_certificate: bool = False,
) -> Transport:
    """
    Factory for the default httpx-backed transport.

    With `allow_any_certificate` certificate validation is skipped, so
    self-signed device certificates are accepted.
    """
    from .httpx_transport import HttpxTransport

    return HttpxTransport(settings or load_http_settings(), allow_any_certificate=allow_any_certificate)
