# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Request and response body coders.

A `RequestParser` turns a body value into bytes, a `ResponseParser` turns the
response bytes (plus metadata) into a value. Both wrap a plain function that
returns an `Ok`/`Err` result, so custom coders are just another function.
Coders hold no state and can be shared between concurrent requests.
"""

from __future__ import annotations

import base64
import dataclasses
import json
import logging
from collections.abc import Mapping
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from ..errors import InvalidJsonError
from ..http.models import HttpResponse
from ..ip import IP
from ..result import Err, Ok, Result

T = TypeVar("T")
V = TypeVar("V")

NIL_PLACEHOLDER = "<nil>"

_JSON_SCALARS = (dict, list, str, int, float, bool)


def to_jsonable(value: Any) -> Any:
    """
    `default` hook for `json.dumps` so any supported value can go through one coder.

    Dataclasses become objects (fields encoded recursively), enums their value,
    bytes and IP addresses base64 of their raw bytes, dates ISO-8601 strings, and
    objects exposing `to_dict()` whatever it returns.
    """
    if isinstance(value, IP):
        value = value.encode()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, (set, frozenset)):
        return list(value)
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _text_or_nil(data: bytes) -> str:
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError:
        return NIL_PLACEHOLDER


def _dumps(value: Any) -> bytes:
    return json.dumps(value, default=to_jsonable, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


class RequestParser(Generic[T]):
    """Container for a `T -> Result[bytes, Exception]` body encoder."""

    def __init__(self, transformation: Callable[[T], Result[bytes, Exception]]):
        self._transformation = transformation

    def parse(self, value: T) -> Result[bytes, Exception]:
        return self._transformation(value)

    @classmethod
    def json(cls, encoder: Optional[Callable[[Any], Union[bytes, str]]] = None) -> RequestParser[Any]:
        """
        Encode any JSON-able value (see `to_jsonable`).

        `encoder` replaces the default compact UTF-8 serializer; its exceptions
        are returned unmodified.
        """
        dumps = encoder or _dumps

        def transformation(value: Any) -> Result[bytes, Exception]:
            try:
                encoded = dumps(value)
                return Ok(encoded.encode("utf-8") if isinstance(encoded, str) else bytes(encoded))
            except Exception as exc:  # noqa: BLE001 - encoder and to_dict hooks are caller code
                return Err(exc)

        return cls(transformation)

    @classmethod
    def plain_text(cls, stringify: Optional[Callable[[Any], str]] = None) -> RequestParser[Any]:
        """
        Encode strings as UTF-8, other values through `stringify`.

        Without `stringify` a non-string body encodes to empty bytes rather than
        an error; callers relying on this should pass strings only.
        """

        def transformation(value: Any) -> Result[bytes, Exception]:
            if not isinstance(value, str) and stringify is None:
                return Ok(b"")
            try:
                text = value if isinstance(value, str) else stringify(value)
                return Ok(text.encode("utf-8"))
            except Exception as exc:  # noqa: BLE001 - caller supplied hook
                return Err(exc)

        return cls(transformation)

    @classmethod
    def ignore(cls) -> RequestParser[Any]:
        """Drop the input and produce an empty body."""
        return cls(lambda _value: Ok(b""))


class ResponseParser(Generic[V]):
    """Container for a `(bytes, HttpResponse) -> Result[V, Exception]` body decoder."""

    def __init__(self, transformation: Callable[[bytes, HttpResponse], Result[V, Exception]]):
        self._transformation = transformation

    def parse(self, data: bytes, response: HttpResponse) -> Result[V, Exception]:
        return self._transformation(data, response)

    @classmethod
    def json(
        cls,
        target: Optional[Callable[..., Any]] = None,
        *,
        loads: Optional[Callable[[bytes], Any]] = None,
    ) -> ResponseParser[Any]:
        """
        Decode JSON, optionally building `target` from it.

        `target` may be a JSON container/scalar type (checked), a dataclass
        (built from the object's matching keys), a class with `from_dict`, or
        any callable taking the decoded value. Failures are wrapped in
        `InvalidJsonError` together with the body text.
        """
        decode = loads or json.loads

        def transformation(data: bytes, _response: HttpResponse) -> Result[Any, Exception]:
            try:
                decoded = decode(data)
                value = decoded if target is None else _build(target, decoded)
            except Exception as exc:  # noqa: BLE001 - target builders are caller code
                return Err(InvalidJsonError(exc, _text_or_nil(data)))
            return Ok(value)

        return cls(transformation)

    @classmethod
    def plain_text(cls) -> ResponseParser[str]:
        """UTF-8 text, or an empty string when the body isn't valid UTF-8."""

        def transformation(data: bytes, _response: HttpResponse) -> Result[str, Exception]:
            try:
                return Ok(bytes(data).decode("utf-8"))
            except UnicodeDecodeError:
                return Ok("")

        return cls(transformation)

    @classmethod
    def identity(cls) -> ResponseParser[bytes]:
        return cls(lambda data, _response: Ok(bytes(data)))

    @classmethod
    def ignore(cls) -> ResponseParser[None]:
        """For APIs that respond with no meaningful body."""
        return cls(lambda _data, _response: Ok(None))

    @classmethod
    def dump(cls, logger: Optional[logging.Logger] = None, encoding: str = "utf-8") -> ResponseParser[None]:
        """Debug helper: log headers and body, produce no value."""
        log = logger or logging.getLogger(__name__)

        def transformation(data: bytes, response: HttpResponse) -> Result[None, Exception]:
            log.debug("Headers: %s", dict(response.headers))
            log.debug("Body: %s", bytes(data).decode(encoding, errors="replace"))
            return Ok(None)

        return cls(transformation)


def _build(target: Callable[..., Any], decoded: Any) -> Any:
    if isinstance(target, type) and target in _JSON_SCALARS:
        if target is float and isinstance(decoded, int) and not isinstance(decoded, bool):
            return float(decoded)
        if not isinstance(decoded, target) or (target is int and isinstance(decoded, bool)):
            raise TypeError(f"Expected {target.__name__}, got {type(decoded).__name__}")
        return decoded
    if dataclasses.is_dataclass(target):
        if not isinstance(decoded, Mapping):
            raise TypeError(f"Expected an object for {target.__name__}, got {type(decoded).__name__}")
        kwargs = {f.name: decoded[f.name] for f in dataclasses.fields(target) if f.init and f.name in decoded}
        return target(**kwargs)
    from_dict = getattr(target, "from_dict", None)
    if callable(from_dict):
        return from_dict(decoded)
    return target(decoded)


__all__ = ["NIL_PLACEHOLDER", "RequestParser", "ResponseParser", "to_jsonable"]
