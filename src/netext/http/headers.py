# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header merging.

HTTP header field names are case-insensitive (RFC 9110), but request headers are
merged as plain dicts: a client default and an endpoint header only collide when
their keys are spelled identically, and the endpoint value then wins.
"""

from __future__ import annotations

from collections.abc import Mapping


def merge_headers(required: Mapping[str, str] | None, overrides: Mapping[str, str] | None) -> dict[str, str]:
    """Merge two header mappings; keys in `overrides` replace those in `required`."""
    merged = dict(required or {})
    merged.update(overrides or {})
    return merged


__all__ = ["merge_headers"]
