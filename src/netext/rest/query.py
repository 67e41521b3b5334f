# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Query parameters appended to request URLs."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import InitVar, dataclass, field
from typing import Any, Callable, Optional
from urllib.parse import quote

# Within a single key or value the pair/assignment delimiters must be escaped.
QUERY_COMPONENT_ALLOWED = "!$'()*,;:@/?"


@dataclass(frozen=True)
class QueryParameter:
    """
    A `key` with an optional `value`; a None value renders as a bare key.

    With `url_encode=True` the value is percent-encoded once at construction and
    marked `encoded`, so the request builder emits it verbatim.
    """

    key: str
    value: Optional[str] = None
    url_encode: InitVar[bool] = False
    encoded: bool = field(default=False, compare=False)

    def __post_init__(self, url_encode: bool) -> None:
        if url_encode and self.value is not None:
            object.__setattr__(self, "value", quote(self.value, safe=QUERY_COMPONENT_ALLOWED))
            object.__setattr__(self, "encoded", True)

    @classmethod
    def from_json(
        cls,
        key: str,
        value: Any,
        *,
        dumps: Callable[[Any], str] = json.dumps,
        url_encode: bool = True,
    ) -> Optional[QueryParameter]:
        """JSON-serialize `value` into a parameter, or return None when it can't be serialized."""
        try:
            text = dumps(value)
        except (TypeError, ValueError):
            return None
        return cls(key, text, url_encode=url_encode)

    def render(self) -> str:
        key = quote(self.key, safe=QUERY_COMPONENT_ALLOWED)
        if self.value is None:
            return key
        value = self.value if self.encoded else quote(self.value, safe=QUERY_COMPONENT_ALLOWED)
        return f"{key}={value}"


def render_query(parameters: Iterable[QueryParameter]) -> str:
    """Join parameters in order; duplicates are kept."""
    return "&".join(parameter.render() for parameter in parameters)


__all__ = ["QueryParameter", "render_query"]
