# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
IPv4/IPv6 address values.

`IP` is a closed variant over `IPv4` and `IPv6`. Values are immutable, compare
structurally over their raw address bytes (plus the zone for IPv6), and are
built either from text (`IP.parse`) or from raw bytes (`IP.from_bytes`,
`IP.decode`). The binary form carries the address only; an IPv6 zone such as
`%en0` does not survive an `encode()`/`decode()` round-trip.
"""

from __future__ import annotations

import abc
import ipaddress
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional, Union

from .errors import IPDecodeError

_DOTTED_QUAD = re.compile(r"([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})")


class IP(abc.ABC):
    """Common interface of IPv4 and IPv6 values."""

    __slots__ = ()

    packed: bytes

    @classmethod
    def parse(cls, text: str) -> Optional[IP]:
        """
        Parse a textual address, trying IPv6 first so zone-qualified link-local
        forms like `fe80::1%eth0` are recognized. Returns None when neither
        grammar matches.
        """
        if not isinstance(text, str):
            return None
        return IPv6.parse(text) or IPv4.parse(text)

    @classmethod
    def from_bytes(cls, data: bytes) -> Optional[IP]:
        """Build an address from 16 (IPv6) or 4 (IPv4) raw bytes, None otherwise."""
        try:
            return cls.decode(data)
        except IPDecodeError:
            return None

    @classmethod
    def decode(cls, data: bytes) -> IP:
        """Decode the binary form produced by `encode()`."""
        raw = bytes(data)
        if len(raw) == 16:
            return IPv6(raw)
        if len(raw) == 4:
            return IPv4(raw)
        raise IPDecodeError(raw)

    def encode(self) -> bytes:
        return self.packed

    @property
    @abc.abstractmethod
    def canonical_string(self) -> str: ...

    @property
    @abc.abstractmethod
    def url_string(self) -> str: ...

    @property
    @abc.abstractmethod
    def address(self) -> Union[ipaddress.IPv4Address, ipaddress.IPv6Address]: ...

    @property
    def is_ipv4(self) -> bool:
        return isinstance(self, IPv4)

    @property
    def is_ipv6(self) -> bool:
        return isinstance(self, IPv6)

    @property
    def ipv4(self) -> Optional[IPv4]:
        return self if isinstance(self, IPv4) else None

    @property
    def ipv6(self) -> Optional[IPv6]:
        return self if isinstance(self, IPv6) else None

    def __str__(self) -> str:
        return self.canonical_string


@dataclass(frozen=True)
class IPv4(IP):
    packed: bytes

    def __post_init__(self) -> None:
        if len(self.packed) != 4:
            raise IPDecodeError(self.packed)
        object.__setattr__(self, "packed", bytes(self.packed))

    @classmethod
    def parse(cls, text: str) -> Optional[IPv4]:
        match = _DOTTED_QUAD.fullmatch(text)
        if match is None:
            return None
        octets = [int(group) for group in match.groups()]
        if any(octet > 255 for octet in octets):
            return None
        return cls(bytes(octets))

    @property
    def canonical_string(self) -> str:
        return ".".join(str(octet) for octet in self.packed)

    @property
    def url_string(self) -> str:
        return self.canonical_string

    @property
    def address(self) -> ipaddress.IPv4Address:
        return ipaddress.IPv4Address(self.packed)


@dataclass(frozen=True)
class IPv6(IP):
    packed: bytes
    interface: Optional[str] = None

    def __post_init__(self) -> None:
        if len(self.packed) != 16:
            raise IPDecodeError(self.packed)
        object.__setattr__(self, "packed", bytes(self.packed))

    @classmethod
    def parse(cls, text: str) -> Optional[IPv6]:
        try:
            parsed = ipaddress.IPv6Address(text)
        except ValueError:
            return None
        return cls(parsed.packed, parsed.scope_id)

    @property
    def canonical_string(self) -> str:
        compressed = ipaddress.IPv6Address(self.packed).compressed
        if self.interface:
            return f"{compressed}%{self.interface}"
        return compressed

    @property
    def url_string(self) -> str:
        return f"[{self.canonical_string}]"

    @property
    def address(self) -> ipaddress.IPv6Address:
        if self.interface:
            return ipaddress.IPv6Address(f"{ipaddress.IPv6Address(self.packed).compressed}%{self.interface}")
        return ipaddress.IPv6Address(self.packed)


def preferred_address(addresses: Iterable[IP]) -> Optional[IP]:
    """Pick the first IPv6 address, falling back to the first IPv4 one."""
    first_v4: Optional[IP] = None
    for candidate in addresses:
        if candidate.is_ipv6:
            return candidate
        if first_v4 is None and candidate.is_ipv4:
            first_v4 = candidate
    return first_v4


__all__ = ["IP", "IPv4", "IPv6", "preferred_address"]
