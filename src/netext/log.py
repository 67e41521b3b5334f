# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for netext."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("NETEXT_LOG_LEVEL", "WARNING").upper()
DEFAULT_TRANSPORT_LOG_LEVEL = os.getenv("NETEXT_TRANSPORT_LOG_LEVEL", "WARNING").upper()

# httpx logs every request at INFO; netext already logs them under "netext.rest".
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.WARNING)


def setup_logging(level: str | None = None, *, transport_level: str | None = None) -> None:
    """
    Configure logging for applications embedding netext.

    `level` applies to the root handler and the `netext` loggers;
    `transport_level` to the httpx/httpcore loggers underneath the transport.
    """
    effective_level = _level(level or DEFAULT_LOG_LEVEL)
    logging.basicConfig(
        level=effective_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("netext").setLevel(effective_level)
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(_level(transport_level or DEFAULT_TRANSPORT_LOG_LEVEL))


__all__ = ["TRANSPORT_LOGGERS", "setup_logging"]
