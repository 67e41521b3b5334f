# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket
from types import SimpleNamespace

import psutil

from netext.interfaces import NetworkInterface, get_ip_addresses
from netext.ip import IPv4, IPv6


def _addr(family, address):
    return SimpleNamespace(family=family, address=address, netmask=None, broadcast=None, ptp=None)


def test_get_ip_addresses_lists_ipv4_and_ipv6(monkeypatch):
    table = {
        "lo": [_addr(socket.AF_INET, "127.0.0.1"), _addr(socket.AF_INET6, "::1")],
        "en0": [
            _addr(psutil.AF_LINK, "aa:bb:cc:dd:ee:ff"),
            _addr(socket.AF_INET, "192.168.1.20"),
            _addr(socket.AF_INET6, "fe80::1%en0"),
        ],
        "down0": [],
    }
    monkeypatch.setattr(psutil, "net_if_addrs", lambda: table)

    assert get_ip_addresses() == {
        NetworkInterface("lo", "127.0.0.1"),
        NetworkInterface("lo", "::1"),
        NetworkInterface("en0", "192.168.1.20"),
        NetworkInterface("en0", "fe80::1%en0"),
    }


def test_get_ip_addresses_failure_is_empty(monkeypatch):
    def broken():
        raise OSError("permission denied")

    monkeypatch.setattr(psutil, "net_if_addrs", broken)
    assert get_ip_addresses() == set()


def test_network_interface_parses_its_address():
    assert NetworkInterface("en0", "192.168.1.20").ip == IPv4.parse("192.168.1.20")

    link_local = NetworkInterface("en0", "fe80::1%en0").ip
    assert isinstance(link_local, IPv6)
    assert link_local.interface == "en0"

    assert NetworkInterface("en0", "not an address").ip is None
