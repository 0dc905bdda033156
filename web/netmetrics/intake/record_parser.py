"""
Record parser: turns TShark field export text into PacketRecord objects.

Input is the output of `tshark -T fields -E header=y -E separator=,`: one
header row naming the exported fields, then one comma-separated row per
packet in the same order.

- The header row is metadata and never yields a record.
- Rows with fewer values than header fields are truncated and skipped.
- Known fields go through a fixed coercion table; anything else is kept
  verbatim in `PacketRecord.extra`.
- Empty, unparseable or non-finite ("nan", "inf") numerics become None, except `frame.len` which
  becomes 0 so byte totals never need null checks.
"""

from __future__ import annotations

import logging
import math
from types import MappingProxyType
from typing import Callable, Dict, List, Optional, Tuple

from ..dto import PacketRecord

logger = logging.getLogger(__name__)


def _to_float(value: str) -> Optional[float]:
    if not value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _to_int(value: str) -> Optional[int]:
    number = _to_float(value)
    if number is None:
        return None
    try:
        return int(number)
    except (OverflowError, ValueError):
        return None


def _to_frame_length(value: str) -> int:
    length = _to_int(value)
    return length if length is not None else 0


def _to_flags(value: str) -> Optional[int]:
    """TCP flags arrive as '0x0018' (hex) or '24' (decimal)."""
    if not value:
        return None
    if value.lower().startswith("0x"):
        try:
            return int(value[2:], 16)
        except ValueError:
            return None
    return _to_int(value)


def _to_bool(value: str) -> bool:
    flag = _to_int(value)
    return bool(flag)


def _to_label(value: str) -> str:
    return value or "Unknown"


# header field -> (PacketRecord attribute, coercion)
FIELD_TABLE: Dict[str, Tuple[str, Callable[[str], object]]] = {
    "frame.time_epoch": ("time", _to_float),
    "ip.src": ("source_ip", _to_label),
    "ip.dst": ("dest_ip", _to_label),
    "_ws.col.Protocol": ("protocol", _to_label),
    "frame.len": ("frame_length", _to_frame_length),
    "tcp.srcport": ("source_port", _to_int),
    "tcp.dstport": ("dest_port", _to_int),
    "udp.srcport": ("source_port", _to_int),
    "udp.dstport": ("dest_port", _to_int),
    "ip.ttl": ("ttl", _to_int),
    "tcp.flags": ("tcp_flags", _to_flags),
    "tcp.window_size_value": ("window_size", _to_float),
    "tcp.analysis.ack_rtt": ("ack_rtt", _to_float),
    "tcp.analysis.retransmission": ("is_retransmission", _to_bool),
    "frame.time_delta": ("time_delta", _to_float),
    "dns.time": ("dns_time", _to_float),
}

# Field order the capture collaborator is expected to request from TShark.
CAPTURE_FIELDS: Tuple[str, ...] = (
    "frame.time_epoch",
    "ip.src",
    "ip.dst",
    "_ws.col.Protocol",
    "frame.len",
    "tcp.srcport",
    "tcp.dstport",
    "ip.ttl",
    "tcp.flags",
    "tcp.window_size_value",
    "tcp.analysis.ack_rtt",
    "tcp.analysis.retransmission",
    "frame.time_delta",
    "dns.time",
)


def parse_raw_packets(text: str) -> List[PacketRecord]:
    """
    Parse a block of TShark field export text into PacketRecords.

    Parameters
    ----------
    text : str
        Header row followed by comma-separated data rows.

    Returns
    -------
    List[PacketRecord]
        One record per complete data row, in input order. Empty for blank
        input or header-only input.
    """
    if not text or not text.strip():
        return []

    rows = text.strip().split("\n")
    headers = [h.strip() for h in rows[0].split(",")]

    records: List[PacketRecord] = []
    skipped = 0
    for row in rows[1:]:
        values = [v.strip() for v in row.split(",")]
        if len(values) < len(headers):
            skipped += 1
            continue
        records.append(_build_record(headers, values))

    if skipped:
        logger.debug("Skipped %d truncated capture rows", skipped)
    return records


def _build_record(headers: List[str], values: List[str]) -> PacketRecord:
    fields: Dict[str, object] = {}
    extra: Dict[str, str] = {}

    for header, value in zip(headers, values):
        entry = FIELD_TABLE.get(header)
        if entry is None:
            extra[header] = value
            continue

        attr, coerce = entry
        # tcp.* and udp.* ports share an attribute; first non-empty column wins.
        if fields.get(attr) is not None:
            continue
        fields[attr] = coerce(value)

    return PacketRecord(extra=MappingProxyType(extra), **fields)
