# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for netext."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"netext/{__version__}"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _port_env(name: str, default: int) -> int:
    port = _int_env(name, default)
    return port if 0 <= port <= 0xFFFF else default


@dataclass
class HttpSettings:
    """Transport and REST client defaults."""

    timeout_for_request: float = 60.0
    timeout_for_resource: float = 7 * 24 * 60 * 60.0
    default_port: int = 443
    default_use_ssl: bool = True
    verify_ssl: bool = True
    require_secure: bool = False
    user_agent: str = DEFAULT_USER_AGENT
    follow_redirects: bool = True

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout_for_request = _float_env("NETEXT_HTTP_TIMEOUT", cls.timeout_for_request)
        if timeout_for_request <= 0:
            timeout_for_request = cls.timeout_for_request
        timeout_for_resource = _float_env("NETEXT_HTTP_RESOURCE_TIMEOUT", cls.timeout_for_resource)
        if timeout_for_resource <= 0:
            timeout_for_resource = cls.timeout_for_resource
        return cls(
            timeout_for_request=timeout_for_request,
            timeout_for_resource=timeout_for_resource,
            default_port=_port_env("NETEXT_DEFAULT_PORT", cls.default_port),
            default_use_ssl=_bool_env("NETEXT_USE_SSL", cls.default_use_ssl),
            verify_ssl=_bool_env("NETEXT_VERIFY_SSL", cls.verify_ssl),
            require_secure=_bool_env("NETEXT_REQUIRE_SECURE", cls.require_secure),
            user_agent=os.getenv("NETEXT_USER_AGENT", cls.user_agent),
            follow_redirects=_bool_env("NETEXT_HTTP_REDIRECTS", cls.follow_redirects),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()
