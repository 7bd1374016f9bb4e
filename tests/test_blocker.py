import struct

from tlsblock.blocker import FlowKey, TlsBlocker, main
from tlsblock.headers import EtherType, EthHdr, IpHdr, TcpHdr
from tlsblock.ip import Ip
from tlsblock.mac import Mac

CLIENT = Ip.parse("10.0.0.5")
SERVER = Ip.parse("10.0.0.80")
CLIENT_MAC = Mac.parse("02:00:00:00:00:01")
GATEWAY_MAC = Mac.parse("02:00:00:00:00:02")
OWN_MAC = Mac.parse("02:00:00:00:00:03")


def client_hello(name: bytes) -> bytes:
    sni_body = struct.pack("!HBH", len(name) + 3, 0, len(name)) + name
    extensions = struct.pack("!HH", 0, len(sni_body)) + sni_body
    body = (
        b"\x03\x03"
        + bytes(32)
        + b"\x00"
        + struct.pack("!H", 2)
        + b"\x13\x01"
        + b"\x01\x00"
        + struct.pack("!H", len(extensions))
        + extensions
    )
    handshake = b"\x01" + len(body).to_bytes(3, "big") + body
    return b"\x16\x03\x01" + struct.pack("!H", len(handshake)) + handshake


def frame(payload: bytes, dport: int = 443, seq: int = 1000, protocol: int = 6,
          ether_type: int = EtherType.IP4) -> bytes:
    eth = EthHdr(dmac=GATEWAY_MAC, smac=CLIENT_MAC, ether_type=ether_type)
    ip = IpHdr(total_len=40 + len(payload), ttl=64, protocol=protocol, sip=CLIENT, dip=SERVER)
    tcp = TcpHdr(sport=51000, dport=dport, seq=seq, ack=5000, flags=0x18, window=512)
    return eth.pack() + ip.pack() + tcp.pack() + payload


def test_matching_server_name_is_blocked():
    blocker = TlsBlocker("example.com")
    blocker.mac = OWN_MAC
    hello = client_hello(b"www.example.com")
    decision = blocker.handle_frame(frame(hello))
    assert decision is not None
    assert decision.server_name == "www.example.com"
    assert decision.flow == FlowKey(int(CLIENT), 51000, int(SERVER), 443)
    assert decision.stream_length == len(hello)
    assert decision.destination == CLIENT
    back_ip = IpHdr.parse(decision.backward_packet)
    back_tcp = TcpHdr.parse(decision.backward_packet[20:])
    assert (back_ip.sip, back_ip.dip) == (SERVER, CLIENT)
    assert back_tcp.ack == 1000 + len(hello)
    assert EthHdr.parse(decision.forward_frame).smac == OWN_MAC
    assert TcpHdr.parse(decision.forward_frame[34:]).seq == 1000 + len(hello)


def test_other_server_name_passes():
    blocker = TlsBlocker("blocked.example.com")
    assert blocker.handle_frame(frame(client_hello(b"www.example.org"))) is None


def test_hello_split_over_segments_is_reassembled():
    blocker = TlsBlocker("example.com")
    hello = client_hello(b"example.com")
    assert blocker.handle_frame(frame(hello[:20])) is None
    decision = blocker.handle_frame(frame(hello[20:], seq=1020))
    assert decision is not None
    assert decision.stream_length == len(hello)
    assert decision.server_name == "example.com"


def test_stream_is_forgotten_after_block():
    blocker = TlsBlocker("example.com")
    hello = client_hello(b"example.com")
    first = blocker.handle_frame(frame(hello))
    second = blocker.handle_frame(frame(hello))
    assert first is not None and second is not None
    assert second.stream_length == first.stream_length == len(hello)


def test_ignores_non_https_port():
    blocker = TlsBlocker("example.com")
    assert blocker.handle_frame(frame(client_hello(b"example.com"), dport=8443)) is None


def test_ignores_non_tcp_and_non_ipv4():
    blocker = TlsBlocker("example.com")
    hello = client_hello(b"example.com")
    assert blocker.handle_frame(frame(hello, protocol=17)) is None
    assert blocker.handle_frame(frame(hello, ether_type=EtherType.ARP)) is None


def test_ignores_short_payload_and_short_frame():
    blocker = TlsBlocker("example.com")
    assert blocker.handle_frame(frame(b"\x16\x03\x01\x00\x05")) is None
    assert blocker.handle_frame(b"\x00" * 10) is None


def test_non_handshake_record_is_not_blocked():
    blocker = TlsBlocker("example.com")
    data = b"\x17" + client_hello(b"example.com")[1:]
    assert blocker.handle_frame(frame(data)) is None


def test_main_without_arguments_prints_usage(capsys):
    assert main([]) == 1
    assert "syntax : tls-block <interface> <server name>" in capsys.readouterr().out