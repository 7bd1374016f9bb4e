"""Ethernet hardware (MAC) addresses."""

from __future__ import annotations

import random as _random
import re
from dataclasses import dataclass
from typing import ClassVar

_NOT_HEX = re.compile(r"[^0-9a-fA-F]")
_HEX_OCTET = re.compile(r"[0-9a-fA-F]{1,2}")


@dataclass(frozen=True, order=True)
class Mac:
    """A six-byte MAC address, ordered by its bytes."""

    value: bytes = bytes(6)

    SIZE: ClassVar[int] = 6

    def __post_init__(self) -> None:
        value = bytes(self.value)
        if len(value) != self.SIZE:
            raise ValueError(f"MAC address needs {self.SIZE} bytes, got {len(value)}")
        object.__setattr__(self, "value", value)

    @classmethod
    def parse(cls, text: str) -> Mac:
        """Parse a MAC address, ignoring any separators between hex digits."""
        digits = _NOT_HEX.sub("", text)
        octets = _HEX_OCTET.findall(digits)[: cls.SIZE]
        if len(octets) < cls.SIZE:
            raise ValueError(f"invalid MAC address: {text!r}")
        return cls(bytes(int(octet, 16) for octet in octets))

    @classmethod
    def random(cls) -> Mac:
        """Return a random address with the top bit of the first byte cleared."""
        value = bytearray(_random.randbytes(cls.SIZE))
        value[0] &= 0x7F
        return cls(bytes(value))

    @classmethod
    def null(cls) -> Mac:
        """Return 00:00:00:00:00:00."""
        return cls(bytes(cls.SIZE))

    @classmethod
    def broadcast(cls) -> Mac:
        """Return FF:FF:FF:FF:FF:FF."""
        return cls(b"\xff" * cls.SIZE)

    def is_null(self) -> bool:
        return self.value == bytes(self.SIZE)

    def is_broadcast(self) -> bool:
        return self.value == b"\xff" * self.SIZE

    def is_multicast(self) -> bool:
        """True for IPv4 multicast addresses, 01:00:5E:0x:xx:xx."""
        return self.value[:3] == b"\x01\x00\x5e" and self.value[3] & 0x80 == 0

    def __str__(self) -> str:
        return ":".join(f"{octet:02X}" for octet in self.value)

    def __bytes__(self) -> bytes:
        return self.value