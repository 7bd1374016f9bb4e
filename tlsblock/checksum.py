"""Internet (ones' complement) checksums for IPv4 and TCP."""

from __future__ import annotations

import struct

from .ip import Ip

_PROTO_TCP = 6
_TCP_CHECKSUM_OFFSET = 16


def internet_checksum(data: bytes) -> int:
    """Return the 16-bit ones' complement checksum of ``data``.

    An odd trailing byte is treated as if padded with a zero byte.
    """
    if len(data) % 2:
        data = bytes(data) + b"\x00"
    total = sum(word for (word,) in struct.iter_unpack("!H", data))
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)
    return ~total & 0xFFFF


def tcp_checksum(src: Ip, dst: Ip, segment: bytes) -> int:
    """Return the TCP checksum of ``segment`` sent from ``src`` to ``dst``.

    The checksum field already in the segment is treated as zero.
    """
    segment = bytes(segment)
    if len(segment) >= _TCP_CHECKSUM_OFFSET + 2:
        segment = (
            segment[:_TCP_CHECKSUM_OFFSET]
            + b"\x00\x00"
            + segment[_TCP_CHECKSUM_OFFSET + 2 :]
        )
    pseudo = struct.pack("!IIBBH", int(src), int(dst), 0, _PROTO_TCP, len(segment))
    return internet_checksum(pseudo + segment)