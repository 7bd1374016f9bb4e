"""Ethernet, IPv4 and TCP header layouts."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

from .ip import Ip
from .mac import Mac


class EtherType(IntEnum):
    IP4 = 0x0800
    ARP = 0x0806
    IP6 = 0x86DD


def _require(data: bytes, size: int, what: str) -> None:
    if len(data) < size:
        raise ValueError(f"{what} needs {size} bytes, got {len(data)}")


@dataclass
class EthHdr:
    """An Ethernet II header."""

    dmac: Mac = Mac()
    smac: Mac = Mac()
    ether_type: int = EtherType.IP4

    SIZE: ClassVar[int] = 14
    _FORMAT: ClassVar[struct.Struct] = struct.Struct("!6s6sH")

    @classmethod
    def parse(cls, data: bytes) -> EthHdr:
        _require(data, cls.SIZE, "Ethernet header")
        dmac, smac, ether_type = cls._FORMAT.unpack_from(data)
        return cls(Mac(dmac), Mac(smac), ether_type)

    def pack(self) -> bytes:
        return self._FORMAT.pack(bytes(self.dmac), bytes(self.smac), self.ether_type)


@dataclass
class IpHdr:
    """The fixed 20-byte part of an IPv4 header."""

    version_ihl: int = 0x45
    tos: int = 0
    total_len: int = 0
    ident: int = 0
    frag_off: int = 0
    ttl: int = 0
    protocol: int = 0
    checksum: int = 0
    sip: Ip = Ip()
    dip: Ip = Ip()

    SIZE: ClassVar[int] = 20
    PROTO_TCP: ClassVar[int] = 6
    _FORMAT: ClassVar[struct.Struct] = struct.Struct("!BBHHHBBHII")

    @classmethod
    def parse(cls, data: bytes) -> IpHdr:
        _require(data, cls.SIZE, "IPv4 header")
        fields = cls._FORMAT.unpack_from(data)
        *head, sip, dip = fields
        return cls(*head, Ip(sip), Ip(dip))

    def pack(self) -> bytes:
        return self._FORMAT.pack(
            self.version_ihl,
            self.tos,
            self.total_len,
            self.ident,
            self.frag_off,
            self.ttl,
            self.protocol,
            self.checksum,
            int(self.sip),
            int(self.dip),
        )

    def header_length(self) -> int:
        """Header length in bytes, from the IHL field."""
        return (self.version_ihl & 0x0F) * 4


@dataclass
class TcpHdr:
    """The fixed 20-byte part of a TCP header."""

    sport: int = 0
    dport: int = 0
    seq: int = 0
    ack: int = 0
    data_offset_reserved: int = 0x50
    flags: int = 0
    window: int = 0
    checksum: int = 0
    urgent: int = 0

    SIZE: ClassVar[int] = 20
    _FORMAT: ClassVar[struct.Struct] = struct.Struct("!HHIIBBHHH")

    @classmethod
    def parse(cls, data: bytes) -> TcpHdr:
        _require(data, cls.SIZE, "TCP header")
        return cls(*cls._FORMAT.unpack_from(data))

    def pack(self) -> bytes:
        return self._FORMAT.pack(
            self.sport,
            self.dport,
            self.seq,
            self.ack,
            self.data_offset_reserved,
            self.flags,
            self.window,
            self.checksum,
            self.urgent,
        )

    def header_length(self) -> int:
        """Header length in bytes, from the data offset field."""
        return ((self.data_offset_reserved >> 4) & 0x0F) * 4