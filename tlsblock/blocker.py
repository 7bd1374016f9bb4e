"""Watch TLS handshakes and reset connections to a blocked server name."""

from __future__ import annotations

import fcntl
import logging
import random
import socket
import struct
import sys
from dataclasses import dataclass

from .headers import EtherType, EthHdr, IpHdr, TcpHdr
from .ip import Ip
from .mac import Mac
from .rst import build_backward_rst, build_forward_rst
from .sni import HANDSHAKE_HEADER_SIZE, RECORD_HEADER_SIZE, is_client_hello, parse_sni

logger = logging.getLogger(__name__)

USAGE = "syntax : tls-block <interface> <server name>\nsample : tls-block wlan0 naver.com"
HTTPS_PORT = 443
_SIOCGIFHWADDR = 0x8927
_SIOCGIFADDR = 0x8915
_IFNAMSIZ = 16
_ETH_P_ALL = 0x0003


@dataclass(frozen=True, order=True)
class FlowKey:
    """One direction of a TCP connection, ordered by its fields."""

    src_ip: int
    src_port: int
    dst_ip: int
    dst_port: int


@dataclass(frozen=True)
class BlockDecision:
    """The packets that tear down a connection whose server name matched."""

    flow: FlowKey
    server_name: str
    stream_length: int
    backward_packet: bytes
    destination: Ip
    forward_frame: bytes


class TlsBlocker:
    """Reassembles TLS streams to port 443 and blocks those naming ``target``."""

    def __init__(self, target: str) -> None:
        self.target = target
        self.mac = Mac()
        self._streams: dict[FlowKey, bytearray] = {}

    def handle_frame(self, frame: bytes) -> BlockDecision | None:
        """Process one captured Ethernet frame; return what to send, if anything."""
        if len(frame) < EthHdr.SIZE + IpHdr.SIZE:
            return None
        eth = EthHdr.parse(frame)
        if eth.ether_type != EtherType.IP4:
            return None
        ip = IpHdr.parse(frame[EthHdr.SIZE :])
        if ip.protocol != IpHdr.PROTO_TCP:
            return None

        ip_len = ip.header_length()
        tcp_start = EthHdr.SIZE + ip_len
        if len(frame) < tcp_start + TcpHdr.SIZE:
            return None
        tcp = TcpHdr.parse(frame[tcp_start:])
        if tcp.dport != HTTPS_PORT:
            return None
        tcp_len = tcp.header_length()

        tls_start = tcp_start + tcp_len
        tls_len = ip.total_len - ip_len - tcp_len
        if tls_len <= RECORD_HEADER_SIZE + HANDSHAKE_HEADER_SIZE:
            return None
        payload = frame[tls_start : tls_start + tls_len]

        flow = FlowKey(int(ip.sip), tcp.sport, int(ip.dip), tcp.dport)
        stream = self._streams.setdefault(flow, bytearray())
        stream += payload
        logger.debug("[CAPTURE] +%d bytes", len(payload))

        if not is_client_hello(stream):
            return None
        logger.debug("buffer size=%d", len(stream))

        name = parse_sni(bytes(stream))
        if name is None:
            return None
        logger.info("SNI=%s", name)
        if self.target not in name:
            return None

        total = len(stream)
        logger.debug("tot=%d, seq=%d", total, tcp.seq)
        decision = BlockDecision(
            flow=flow,
            server_name=name,
            stream_length=total,
            backward_packet=build_backward_rst(ip, tcp, total, random.getrandbits(16)),
            destination=ip.sip,
            forward_frame=build_forward_rst(
                eth, ip, tcp, total, self.mac, random.getrandbits(16)
            ),
        )
        del self._streams[flow]
        return decision


def get_interface_info(dev: str) -> tuple[Mac, Ip]:
    """Return the hardware and IPv4 address of network interface ``dev``."""
    request = struct.pack("256s", dev.encode()[: _IFNAMSIZ - 1])
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        hw = fcntl.ioctl(sock.fileno(), _SIOCGIFHWADDR, request)
        addr = fcntl.ioctl(sock.fileno(), _SIOCGIFADDR, request)
    return Mac(hw[18:24]), Ip(int.from_bytes(addr[20:24], "big"))


def _send(decision: BlockDecision, capture: socket.socket, raw: socket.socket) -> None:
    try:
        raw.sendto(decision.backward_packet, (str(decision.destination), 0))
    except OSError as exc:
        print(f"[Error] fail: {exc}", file=sys.stderr)
    else:
        print("[Success]: RST packet sent")
    try:
        capture.send(decision.forward_frame)
    except OSError:
        logger.warning("Upstream RST fail")
    else:
        logger.info("Upstream RST success")


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print(USAGE)
        return 1
    dev, target = args
    print(f"Target: {target}")
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    try:
        mac, ip = get_interface_info(dev)
    except OSError:
        print(f"failed to get local MAC/IP on {dev}", file=sys.stderr)
        return 1
    print(f"My MAC: {mac}")
    print(f"My IP : {ip}")

    try:
        capture = socket.socket(socket.AF_PACKET, socket.SOCK_RAW, socket.ntohs(_ETH_P_ALL))
        capture.bind((dev, 0))
    except OSError as exc:
        print(f"couldn't open device {dev}({exc})", file=sys.stderr)
        return 1
    try:
        raw = socket.socket(socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_RAW)
        raw.setsockopt(socket.IPPROTO_IP, socket.IP_HDRINCL, 1)
    except OSError as exc:
        capture.close()
        print(f"couldn't open raw socket({exc})", file=sys.stderr)
        return 1

    blocker = TlsBlocker(target)
    blocker.mac = mac
    with capture, raw:
        try:
            while True:
                decision = blocker.handle_frame(capture.recv(65535))
                if decision is not None:
                    _send(decision, capture, raw)
        except KeyboardInterrupt:
            return 0