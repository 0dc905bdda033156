"""
Packet reader: yields PacketRecord objects from a PCAP/PCAPNG byte stream.

Used when a saved capture is analyzed instead of TShark field text. The
records carry what can be read straight off the frames:
  time, src/dst IP, ports, frame length, TTL, TCP flags, TCP window,
  time delta to the previous frame, and a protocol label.

Implementation notes:
- Picks dpkt.pcap.Reader or dpkt.pcapng.Reader from the magic bytes.
- Handles Ethernet frames (dpkt unwraps 802.1Q tags) and raw-IP links.
- Supports IPv4 and IPv6; non-IP frames are skipped but still advance
  the time-delta clock, as they do in TShark.
- ACK RTT and retransmission need TCP stream analysis, which raw frames
  do not carry; those fields stay None/False.
"""

from __future__ import annotations

import io
import socket
from typing import IO, Iterator, Optional

import dpkt  # type: ignore

from ..dto import PacketRecord
from .validator import MIN_CAPTURE_BYTES, detect_capture_format

_DLT_RAW = (12, 14, 101)

# (transport, port) -> label, mirroring TShark's protocol column for common services
_PORT_LABELS = {
    ("tcp", 443): "TLS",
    ("tcp", 8443): "TLS",
    ("tcp", 80): "HTTP",
    ("tcp", 8080): "HTTP",
    ("tcp", 53): "DNS",
    ("udp", 53): "DNS",
    ("udp", 443): "QUIC",
    ("udp", 123): "NTP",
    ("udp", 67): "DHCP",
    ("udp", 68): "DHCP",
    ("udp", 5353): "MDNS",
}


def iter_packet_records(bytestream: IO[bytes]) -> Iterator[PacketRecord]:
    """
    Iterate PacketRecords from an open (decompressed) capture stream.

    Raises
    ------
    ValueError
        If the stream is not a PCAP or PCAPNG capture.
    """
    data = bytestream.read()
    if len(data) < MIN_CAPTURE_BYTES:
        raise ValueError("Capture is too short to contain a PCAP header")

    fmt = detect_capture_format(data[:4])
    if fmt == "pcap":
        reader = dpkt.pcap.Reader(io.BytesIO(data))
    elif fmt == "pcapng":
        reader = dpkt.pcapng.Reader(io.BytesIO(data))
    else:
        raise ValueError("Unrecognized capture format (expected PCAP or PCAPNG)")

    datalink = reader.datalink()
    prev_ts: Optional[float] = None
    frames = iter(reader)
    while True:
        try:
            ts, buf = next(frames)
        except StopIteration:
            return
        except dpkt.dpkt.NeedData:
            # Truncated final record (capture still being written when copied).
            return

        ts = float(ts)
        delta = 0.0 if prev_ts is None else ts - prev_ts
        prev_ts = ts

        rec = _parse_frame(ts, delta, buf, datalink)
        if rec is not None:
            yield rec


# === Helpers ===


def _parse_frame(ts: float, delta: float, buf: bytes, datalink: int) -> Optional[PacketRecord]:
    """Parse a single frame into a PacketRecord. Returns None if non-IP or undecodable."""
    try:
        if datalink in _DLT_RAW:
            version = buf[0] >> 4 if buf else 0
            ip = dpkt.ip6.IP6(buf) if version == 6 else dpkt.ip.IP(buf)
        else:
            eth = dpkt.ethernet.Ethernet(buf)
            ip = eth.data
    except (dpkt.dpkt.UnpackError, IndexError, ValueError):
        return None

    if isinstance(ip, dpkt.ip.IP):
        family, ttl, proto = socket.AF_INET, ip.ttl, ip.p
        network = "IPv4"
    elif isinstance(ip, dpkt.ip6.IP6):
        family, ttl, proto = socket.AF_INET6, ip.hlim, ip.nxt
        network = "IPv6"
    else:
        return None

    try:
        src_ip = socket.inet_ntop(family, ip.src)
        dst_ip = socket.inet_ntop(family, ip.dst)
    except (OSError, ValueError):
        return None

    fields = dict(
        time=ts,
        source_ip=src_ip,
        dest_ip=dst_ip,
        frame_length=len(buf),
        ttl=int(ttl),
        time_delta=delta,
    )

    segment = ip.data
    if proto == dpkt.ip.IP_PROTO_TCP and isinstance(segment, dpkt.tcp.TCP):
        return PacketRecord(
            protocol=_label("tcp", segment.sport, segment.dport),
            source_port=int(segment.sport),
            dest_port=int(segment.dport),
            tcp_flags=int(segment.flags),
            window_size=float(segment.win),
            **fields,
        )
    if proto == dpkt.ip.IP_PROTO_UDP and isinstance(segment, dpkt.udp.UDP):
        return PacketRecord(
            protocol=_label("udp", segment.sport, segment.dport),
            source_port=int(segment.sport),
            dest_port=int(segment.dport),
            **fields,
        )
    if proto == dpkt.ip.IP_PROTO_ICMP:
        return PacketRecord(protocol="ICMP", **fields)
    if proto == dpkt.ip.IP_PROTO_ICMP6:
        return PacketRecord(protocol="ICMPv6", **fields)

    return PacketRecord(protocol=network, **fields)


def _label(transport: str, sport: int, dport: int) -> str:
    for port in (sport, dport):
        label = _PORT_LABELS.get((transport, int(port)))
        if label is not None:
            return label
    return transport.upper()
