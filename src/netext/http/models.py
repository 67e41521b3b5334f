# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models exchanged with Transport implementations."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

import httpx

Headers = dict[str, str]

DEFAULT_PORTS = {"http": 80, "https": 443}


class HTTPMethod(str, Enum):
    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    CONNECT = "CONNECT"


@dataclass(frozen=True)
class HttpRequest:
    """Fully resolved outgoing request handed to a Transport."""

    url: str
    method: str = "GET"
    headers: Headers = field(default_factory=dict)
    body: bytes | None = None
    timeout: float | None = None

    @property
    def scheme(self) -> str:
        return httpx.URL(self.url).scheme

    def with_scheme(self, scheme: str) -> HttpRequest:
        """Return a copy targeting the same host/port/path/query under another scheme."""
        url = httpx.URL(self.url)
        # httpx drops default ports; pin the old one so only the scheme changes.
        port = url.port if url.port is not None else DEFAULT_PORTS.get(url.scheme)
        url = url.copy_with(scheme=scheme, port=port)
        return replace(self, url=str(url))


@dataclass(frozen=True)
class HttpResponse:
    """Response metadata; the body travels next to it as raw bytes."""

    status_code: int
    headers: Headers = field(default_factory=dict)
    url: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> HttpResponse:
        return cls(
            status_code=response.status_code,
            headers=dict(response.headers),
            url=str(response.url),
            meta={"http_version": response.http_version},
        )
