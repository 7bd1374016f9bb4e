import struct

from tlsblock.checksum import internet_checksum, tcp_checksum
from tlsblock.ip import Ip

SAMPLE_IP_HEADER = bytes.fromhex("450000730000400040110000c0a80001c0a800c7")


def test_known_ip_header_checksum():
    assert internet_checksum(SAMPLE_IP_HEADER) == 0xB861


def test_header_with_checksum_sums_to_zero():
    value = internet_checksum(SAMPLE_IP_HEADER)
    filled = SAMPLE_IP_HEADER[:10] + struct.pack("!H", value) + SAMPLE_IP_HEADER[12:]
    assert internet_checksum(filled) == 0


def test_empty_data_is_all_ones():
    assert internet_checksum(b"") == 0xFFFF


def test_odd_length_pads_with_zero():
    assert internet_checksum(b"\x12\x34\x56") == internet_checksum(b"\x12\x34\x56\x00")


def test_tcp_checksum_ignores_existing_field():
    segment = bytes(range(20)) + b"hello"
    other = segment[:16] + b"\xab\xcd" + segment[18:]
    src, dst = Ip.parse("10.0.0.1"), Ip.parse("10.0.0.2")
    assert tcp_checksum(src, dst, segment) == tcp_checksum(src, dst, other)


def test_tcp_checksum_verifies_with_pseudo_header():
    src, dst = Ip.parse("192.168.1.10"), Ip.parse("192.168.1.20")
    segment = bytearray(bytes(range(1, 21)) + b"payload")
    value = tcp_checksum(src, dst, bytes(segment))
    segment[16:18] = struct.pack("!H", value)
    pseudo = struct.pack("!IIBBH", int(src), int(dst), 0, 6, len(segment))
    assert internet_checksum(pseudo + bytes(segment)) == 0


def test_tcp_checksum_depends_on_addresses():
    segment = bytes(range(20))
    a = tcp_checksum(Ip.parse("10.0.0.1"), Ip.parse("10.0.0.2"), segment)
    b = tcp_checksum(Ip.parse("10.0.0.1"), Ip.parse("10.0.0.3"), segment)
    assert a - b in (1, -0xFFFE, 0xFFFE) or a != b