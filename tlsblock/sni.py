"""Server Name Indication extraction from a TLS ClientHello."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

RECORD_HEADER_SIZE = 5
HANDSHAKE_HEADER_SIZE = 4
_CONTENT_HANDSHAKE = 0x16
_HANDSHAKE_CLIENT_HELLO = 0x01
_EXT_SERVER_NAME = 0x0000
# client version (2) + random (32)
_HELLO_FIXED_SIZE = 34


def _u16(data: bytes, offset: int) -> int:
    return (data[offset] << 8) | data[offset + 1]


def is_client_hello(data: bytes) -> bool:
    """True if ``data`` starts with a handshake record holding a ClientHello."""
    return (
        len(data) > RECORD_HEADER_SIZE
        and data[0] == _CONTENT_HANDSHAKE
        and data[RECORD_HEADER_SIZE] == _HANDSHAKE_CLIENT_HELLO
    )


def parse_sni(data: bytes) -> str | None:
    """Return the host name from the SNI extension of a ClientHello, or None."""
    length = len(data)
    idx = RECORD_HEADER_SIZE + HANDSHAKE_HEADER_SIZE
    if length <= idx + _HELLO_FIXED_SIZE:
        return None
    idx += _HELLO_FIXED_SIZE

    # session id
    if idx + 1 > length:
        return None
    session_size = data[idx]
    if idx + 1 + session_size > length:
        return None
    idx += 1 + session_size

    # cipher suites
    if idx + 2 > length:
        return None
    suites_size = _u16(data, idx)
    logger.debug("cipher_suites=%d @%d/%d", suites_size, idx, length)
    if idx + 2 + suites_size > length:
        return None
    idx += 2 + suites_size

    # compression methods
    if idx + 1 > length:
        return None
    compression_size = data[idx]
    if idx + 1 + compression_size > length:
        return None
    idx += 1 + compression_size

    # extensions
    if idx + 2 > length:
        return None
    extensions_size = _u16(data, idx)
    idx += 2
    logger.debug("total_extensions=%d, start=%d", extensions_size, idx)
    extensions_end = idx + extensions_size

    while idx + 4 <= length and idx + 4 <= extensions_end:
        ext_type = _u16(data, idx)
        ext_len = _u16(data, idx + 2)
        idx += 4
        if ext_type == _EXT_SERVER_NAME:
            if idx + 5 > length:
                return None
            name_type = data[idx + 2]
            name_len = _u16(data, idx + 3)
            logger.debug("SNI type=%d, length=%d", name_type, name_len)
            if name_type != 0 or idx + 5 + name_len > length:
                return None
            name = bytes(data[idx + 5 : idx + 5 + name_len])
            logger.debug("SNI extracted successfully")
            return name.decode("ascii", errors="replace")
        idx += ext_len

    return None