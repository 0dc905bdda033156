"""
Data Transfer Objects (DTOs) used across the metrics pipeline.

These are intentionally small, immutable, and independent of any I/O or
parsing libraries. Two label vocabularies coexist on purpose: the packet
aggregation path produces `DetailedStability` / `CongestionLevel`, while
the synthetic path produces `SimpleStability` for both labels.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple


# === Labels ===
class DetailedStability(str, Enum):
    STABLE = "Stable"
    UNSTABLE = "Unstable"
    VERY_UNSTABLE = "Very Unstable"


class CongestionLevel(str, Enum):
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


class SimpleStability(str, Enum):
    STABLE = "stable"
    UNSTABLE = "unstable"
    CRITICAL = "critical"


def _empty_extra() -> Mapping[str, str]:
    return MappingProxyType({})


# === Parsed packet ===
@dataclass(frozen=True)
class PacketRecord:
    """One observed packet (or flow sample) as exported by the capture tool."""
    time: Optional[float] = None            # epoch seconds
    source_ip: str = "Unknown"
    dest_ip: str = "Unknown"
    protocol: Optional[str] = None          # "Unknown" when the column is present but empty
    frame_length: int = 0                   # bytes; never None so totals stay summable
    source_port: Optional[int] = None
    dest_port: Optional[int] = None
    ttl: Optional[int] = None
    tcp_flags: Optional[int] = None
    window_size: Optional[float] = None
    ack_rtt: Optional[float] = None         # seconds
    is_retransmission: bool = False
    time_delta: Optional[float] = None      # seconds since previous packet
    dns_time: Optional[float] = None        # seconds
    # Header fields outside the fixed table, kept verbatim.
    extra: Mapping[str, str] = field(default_factory=_empty_extra, compare=False)


# === Aggregated outputs ===
@dataclass(frozen=True)
class ApplicationUsage:
    application: str
    total_bytes: int


@dataclass(frozen=True)
class MetricsSnapshot:
    """Health summary for one batch of packets."""
    timestamp: float
    latency_ms: float
    jitter_ms: float
    bandwidth_mbps: float
    packet_loss_percent: float
    dns_delay_ms: float
    health_score: int
    stability: DetailedStability
    congestion_level: CongestionLevel
    packet_count: int
    protocol_counts: Dict[str, int]
    packet_sizes: Tuple[int, ...]
    top_applications: Tuple[ApplicationUsage, ...]


@dataclass(frozen=True)
class SyntheticMetrics:
    """Self-consistent demo metrics derived from a seeded health score."""
    timestamp: float
    latency_ms: float
    jitter_ms: float
    packet_loss_percent: float
    bandwidth_mbps: float
    dns_delay_ms: float
    health_score: int
    stability: SimpleStability
    congestion: SimpleStability


@dataclass(frozen=True)
class SeriesPoint:
    timestamp: float
    value: float
