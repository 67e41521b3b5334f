# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport exports."""

from .adapters import StubTransport
from .headers import merge_headers
from .httpx_transport import HttpxTransport
from .models import DEFAULT_PORTS, Headers, HTTPMethod, HttpRequest, HttpResponse
from .retry import SecureUpgradeTransport, send_with_secure_upgrade, stream_with_secure_upgrade
from .transport import StreamingTransport, Transport, create_default_transport, supports_streaming

__all__ = [
    "DEFAULT_PORTS",
    "HTTPMethod",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "HttpxTransport",
    "SecureUpgradeTransport",
    "StreamingTransport",
    "StubTransport",
    "Transport",
    "create_default_transport",
    "merge_headers",
    "send_with_secure_upgrade",
    "stream_with_secure_upgrade",
    "supports_streaming",
]
