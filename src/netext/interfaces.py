# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Snapshot of the addresses bound to local network interfaces."""

from __future__ import annotations

import logging
import socket
from dataclasses import dataclass
from typing import Optional

import psutil

from .ip import IP

logger = logging.getLogger(__name__)

_ADDRESS_FAMILIES = (socket.AF_INET, socket.AF_INET6)


@dataclass(frozen=True)
class NetworkInterface:
    interface_name: str
    ip_address: str

    @property
    def ip(self) -> Optional[IP]:
        return IP.parse(self.ip_address)


def get_ip_addresses() -> set[NetworkInterface]:
    """
    List the IPv4/IPv6 addresses of every local interface.

    IPv6 link-local addresses are reported with their zone (`fe80::1%en0`).
    Enumeration failures yield an empty snapshot.
    """
    try:
        table = psutil.net_if_addrs()
    except (OSError, RuntimeError) as exc:
        logger.debug("Interface enumeration failed: %s", exc)
        return set()

    interfaces: set[NetworkInterface] = set()
    for name, addresses in table.items():
        for entry in addresses:
            if entry.family not in _ADDRESS_FAMILIES or not entry.address:
                continue
            interfaces.add(NetworkInterface(interface_name=name, ip_address=entry.address))
    return interfaces


__all__ = ["NetworkInterface", "get_ip_addresses"]
