# tlsblock

`tlsblock` watches TLS traffic on a network interface. If a TLS ClientHello
carries a Server Name Indication (SNI) host name that contains a target string,
`tlsblock` tears the connection down by sending TCP RST+ACK segments in both
directions.

## Requirements

- Linux. Frames are captured with a raw `AF_PACKET` socket, and the interface
  address is read with `ioctl`.
- Root privileges, or the `CAP_NET_RAW` and `CAP_NET_ADMIN` capabilities.
- Python 3.10 or later. There are no third-party runtime dependencies.

## Installation

```
pip install .
```

## Usage

```
tls-block <interface> <server name>
```

For example:

```
tls-block wlan0 example.com
```

The command needs exactly two arguments. With any other number it prints the
usage text and exits with status 1. It also exits with status 1 when it cannot
read the interface's addresses or cannot open its sockets.

At start-up it prints the target, then the MAC address and IPv4 address of the
interface. After that it handles every captured Ethernet frame that carries an
IPv4 TCP segment for destination port 443:

1. The TCP payload is appended to a buffer for its flow. A flow is one
   direction of a connection: source address and port, destination address and
   port. Payloads of 9 bytes or fewer are ignored.
2. The buffer must start with a TLS handshake record that holds a ClientHello.
   When it does, the SNI host name is extracted.
3. If the target string occurs anywhere in the host name, two resets are sent:
   - one to the client, as an IPv4 packet written to a raw IP socket. It goes
     from the server's address and port, and its sequence number is the
     segment's acknowledgement number;
   - one to the server, as an Ethernet frame sent on the capture interface
     from the interface's own MAC address. Its sequence number is advanced
     past the buffered bytes.

   The flow's buffer is then dropped.

Progress is logged at INFO level to standard error. Press Ctrl-C to stop; the
command then exits with status 0.

## Library use

The building blocks can also be used on their own:

- `tlsblock.mac.Mac` is a six-byte MAC address. It has `parse`, `random`,
  `null` and `broadcast` constructors, and `is_null`, `is_broadcast` and
  `is_multicast` tests. `str()` gives `00:11:22:33:44:55` form.
- `tlsblock.ip.Ip` is an IPv4 address held as an integer. It has `parse`,
  `is_local_host`, `is_broadcast` and `is_multicast`.
- `tlsblock.headers` has `EthHdr`, `IpHdr` and `TcpHdr`, each with `parse` and
  `pack`, and `EtherType`. `IpHdr.header_length` and `TcpHdr.header_length`
  decode the length fields.
- `tlsblock.checksum` has `internet_checksum(data)` and
  `tcp_checksum(src, dst, segment)`.
- `tlsblock.sni` has `is_client_hello(data)` and `parse_sni(data)`.
  `parse_sni` returns the host name, or `None` if there is none.
- `tlsblock.rst` has `build_forward_rst(eth, ip, tcp, payload_size, src_mac,
  ident)`, which returns a whole Ethernet frame, and
  `build_backward_rst(ip, tcp, payload_size, ident)`, which returns an IPv4
  packet.
- `tlsblock.blocker.TlsBlocker(target)` reassembles flows. Its `mac` attribute
  sets the source MAC address of forward resets. `handle_frame(frame)` returns
  a `BlockDecision` or `None`. A `BlockDecision` holds `flow` (a `FlowKey`),
  `server_name`, `stream_length`, `backward_packet`, `destination` and
  `forward_frame`.
- `tlsblock.blocker.get_interface_info(dev)` returns the interface's `(Mac, Ip)`.

## Limitations

- Only IPv4 is handled, and only traffic to TCP port 443.
- Segments are appended in the order they arrive. The package does not reorder
  segments or remove retransmissions.
- A flow's buffer is dropped only when that flow is blocked. Buffers of flows
  that never match are kept for as long as the program runs.
- The program does not filter or drop packets itself. It relies entirely on
  the injected resets.

## Running the tests

```
pip install ".[test]"
pytest
```