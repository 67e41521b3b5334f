# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Status-code validation of HTTP responses."""

from __future__ import annotations

from collections.abc import Container
from typing import Any, Callable, Optional

from ..errors import StatusCodeError
from ..http.models import HttpResponse
from ..result import Err, Ok, Result

StatusEvaluation = Callable[[Optional[HttpResponse], Optional[bytes]], Result[HttpResponse, Exception]]


class StatusCodeHandler:
    """
    Decides whether a response is accepted.

    `eval(response, data)` returns `Ok(response)` on acceptance or an `Err`
    (usually carrying a `StatusCodeError`). Handlers replace each other
    wholesale; there is no rule merging.
    """

    def __init__(self, evaluate: StatusEvaluation):
        self._evaluate = evaluate

    def eval(self, response: Optional[HttpResponse], data: Optional[bytes] = None) -> Result[HttpResponse, Exception]:
        return self._evaluate(response, data)

    @classmethod
    def accepting(cls, statuses: Container[int]) -> StatusCodeHandler:
        """Accept any status contained in `statuses`, e.g. `range(200, 400)`."""

        def evaluate(response: Optional[HttpResponse], data: Optional[bytes]) -> Result[HttpResponse, Exception]:
            if response is None or response.status_code not in statuses:
                status_code = response.status_code if response is not None else 0
                return Err(StatusCodeError(status_code, response, data))
            return Ok(response)

        return cls(evaluate)

    @classmethod
    def default(cls) -> StatusCodeHandler:
        """Accept 200..299, reject everything else (status 0 when metadata is missing)."""
        return DEFAULT_STATUS_CODE_HANDLER


DEFAULT_STATUS_CODE_HANDLER = StatusCodeHandler.accepting(range(200, 300))


def resolve_status_code_handler(endpoint: Any, client: Any) -> StatusCodeHandler:
    """Endpoint override, then client override, then the default policy."""
    return (
        getattr(endpoint, "status_code_handler", None)
        or getattr(client, "status_code_handler", None)
        or StatusCodeHandler.default()
    )


__all__ = ["DEFAULT_STATUS_CODE_HANDLER", "StatusCodeHandler", "resolve_status_code_handler"]
