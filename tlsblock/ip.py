"""IPv4 addresses."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar

_DOTTED = re.compile(r"\s*(\d+)\.\s*(\d+)\.\s*(\d+)\.\s*(\d+)")


@dataclass(frozen=True, order=True)
class Ip:
    """An IPv4 address held as a host-order 32-bit integer."""

    value: int = 0

    SIZE: ClassVar[int] = 4

    def __post_init__(self) -> None:
        value = int(self.value)
        if not 0 <= value <= 0xFFFFFFFF:
            raise ValueError(f"IPv4 address out of range: {value}")
        object.__setattr__(self, "value", value)

    @classmethod
    def parse(cls, text: str) -> Ip:
        """Parse dotted-quad notation."""
        match = _DOTTED.match(text)
        if match is None:
            raise ValueError(f"invalid IPv4 address: {text!r}")
        octets = [int(group) for group in match.groups()]
        if any(octet > 0xFF for octet in octets):
            raise ValueError(f"invalid IPv4 address: {text!r}")
        return cls(int.from_bytes(bytes(octets), "big"))

    def is_local_host(self) -> bool:
        """True for 127.*.*.*."""
        return self.value >> 24 == 0x7F

    def is_broadcast(self) -> bool:
        """True for 255.255.255.255."""
        return self.value == 0xFFFFFFFF

    def is_multicast(self) -> bool:
        """True for 224.0.0.0 through 239.255.255.255."""
        return 0xE0 <= self.value >> 24 < 0xF0

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return ".".join(str(octet) for octet in self.value.to_bytes(4, "big"))