"""Construction of TCP RST+ACK packets that tear down a connection."""

from __future__ import annotations

from dataclasses import replace

from .checksum import internet_checksum, tcp_checksum
from .headers import EtherType, EthHdr, IpHdr, TcpHdr
from .mac import Mac

RST_ACK = 0x14
_HEADER_BYTES = IpHdr.SIZE + TcpHdr.SIZE


def _finish(ip: IpHdr, tcp: TcpHdr) -> bytes:
    ip.checksum = 0
    ip.checksum = internet_checksum(ip.pack())
    tcp.checksum = 0
    tcp.checksum = tcp_checksum(ip.sip, ip.dip, tcp.pack())
    return ip.pack() + tcp.pack()


def build_forward_rst(
    eth: EthHdr,
    ip: IpHdr,
    tcp: TcpHdr,
    payload_size: int,
    src_mac: Mac,
    ident: int,
) -> bytes:
    """Return an Ethernet frame resetting the connection toward the server."""
    eth_out = EthHdr(dmac=eth.dmac, smac=src_mac, ether_type=EtherType.IP4)
    ip_out = IpHdr(
        version_ihl=0x45,
        tos=0,
        total_len=_HEADER_BYTES,
        ident=ident & 0xFFFF,
        frag_off=0,
        ttl=ip.ttl,
        protocol=IpHdr.PROTO_TCP,
        sip=ip.sip,
        dip=ip.dip,
    )
    tcp_out = TcpHdr(
        sport=tcp.sport,
        dport=tcp.dport,
        seq=(tcp.seq + payload_size) & 0xFFFFFFFF,
        ack=tcp.ack,
        data_offset_reserved=0x50,
        flags=RST_ACK,
        window=0,
        urgent=0,
    )
    return eth_out.pack() + _finish(ip_out, tcp_out)


def build_backward_rst(ip: IpHdr, tcp: TcpHdr, payload_size: int, ident: int) -> bytes:
    """Return an IPv4 packet resetting the connection toward the client."""
    ip_out = replace(
        ip,
        version_ihl=0x45,
        tos=0,
        total_len=_HEADER_BYTES,
        ident=ident & 0xFFFF,
        sip=ip.dip,
        dip=ip.sip,
    )
    tcp_out = TcpHdr(
        sport=tcp.dport,
        dport=tcp.sport,
        seq=tcp.ack,
        ack=(tcp.seq + payload_size) & 0xFFFFFFFF,
        data_offset_reserved=0x50,
        flags=RST_ACK,
        window=0,
        urgent=0,
    )
    return _finish(ip_out, tcp_out)