# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""REST endpoint descriptors."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Generic, Optional, TypeVar

from ..http.models import HTTPMethod
from .query import QueryParameter

if TYPE_CHECKING:
    from .status import StatusCodeHandler

Body = TypeVar("Body")


@dataclass(frozen=True)
class EndpointPort:
    """Either follow the REST client's default port or override it."""

    possible_value: Optional[int] = None

    def __post_init__(self) -> None:
        if self.possible_value is not None and not 0 <= self.possible_value <= 0xFFFF:
            raise ValueError(f"port must be within 0..65535, got {self.possible_value}")

    @classmethod
    def use_default(cls) -> EndpointPort:
        return cls(None)

    @classmethod
    def override(cls, port: int) -> EndpointPort:
        return cls(int(port))

    @property
    def is_default(self) -> bool:
        return self.possible_value is None


USE_DEFAULT_PORT = EndpointPort.use_default()


def _empty_headers() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class Endpoint(Generic[Body]):
    """
    Declaration of one REST operation.

    Attributes:
        path: Path starting with a slash, such as "/users". Not validated.
        method: HTTP method.
        body: Optional value encoded by the request parser.
        port: Client default port or an override.
        query_parameters: Parameters appended after the client's required ones.
        headers: Headers merged over the client's required headers.
        use_ssl: None to follow the client, True/False to force the scheme.
        status_code_handler: Replaces the client's (or default) status policy.
    """

    path: str
    method: HTTPMethod = HTTPMethod.GET
    body: Optional[Body] = None
    port: EndpointPort = USE_DEFAULT_PORT
    query_parameters: tuple[QueryParameter, ...] = ()
    headers: Mapping[str, str] = field(default_factory=_empty_headers)
    use_ssl: Optional[bool] = None
    status_code_handler: Optional[StatusCodeHandler] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", HTTPMethod(self.method.upper()))
        object.__setattr__(self, "query_parameters", tuple(self.query_parameters))
        # Freeze copied headers to avoid post-init mutation side effects.
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def with_body(self, body: Any) -> Endpoint[Any]:
        return replace(self, body=body)


__all__ = ["Endpoint", "EndpointPort", "HTTPMethod", "USE_DEFAULT_PORT"]
