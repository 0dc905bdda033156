"""
Batch aggregation: cleaned PacketRecords -> one MetricsSnapshot.

Formulas (per batch)
--------------------
- latency_ms          mean(ack_rtt * 1000) over records with an ack_rtt
- jitter_ms           population stddev(time_delta * 1000) over records with a time_delta
- bandwidth_mbps      sum(frame_length * 8) / (time span * 1e6); 0 if span <= 0
- packet_loss_percent retransmissions / records * 100
- dns_delay_ms        mean(time_delta * 1000) over DNS records, missing delta = 0
- congestion_level    from mean window size and bandwidth
- stability           from jitter and packet loss

An empty batch is an idle window, not an error: it yields the default
snapshot (score 50, Stable, Low).
"""

from __future__ import annotations

import time as _time
from collections import Counter
from typing import Dict, Iterable, Optional

from ..config import DEFAULT_CONFIG, PipelineConfig
from ..dto import CongestionLevel, DetailedStability, MetricsSnapshot, PacketRecord
from .applications import identify_top_applications
from .scoring import calculate_health_score
from .stats import mean, pstdev


def classify_congestion(avg_window_size: float, bandwidth_mbps: float) -> CongestionLevel:
    """Large receive windows with real throughput mean the path is not congested."""
    if avg_window_size > 8000 and bandwidth_mbps > 5:
        return CongestionLevel.LOW
    if avg_window_size > 4000 or bandwidth_mbps > 2:
        return CongestionLevel.MODERATE
    return CongestionLevel.HIGH


def classify_stability(jitter_ms: float, packet_loss_percent: float) -> DetailedStability:
    if jitter_ms < 10 and packet_loss_percent < 1:
        return DetailedStability.STABLE
    if jitter_ms < 30 and packet_loss_percent < 5:
        return DetailedStability.UNSTABLE
    return DetailedStability.VERY_UNSTABLE


def empty_snapshot(
    cfg: PipelineConfig = DEFAULT_CONFIG, now: Optional[float] = None
) -> MetricsSnapshot:
    """Snapshot for a window with no packets."""
    return MetricsSnapshot(
        timestamp=_time.time() if now is None else float(now),
        latency_ms=0.0,
        jitter_ms=0.0,
        bandwidth_mbps=0.0,
        packet_loss_percent=0.0,
        dns_delay_ms=0.0,
        health_score=cfg.default_health_score,
        stability=DetailedStability.STABLE,
        congestion_level=CongestionLevel.LOW,
        packet_count=0,
        protocol_counts={},
        packet_sizes=(),
        top_applications=(),
    )


def compute_metrics(
    records: Iterable[PacketRecord],
    cfg: Optional[PipelineConfig] = None,
    now: Optional[float] = None,
) -> MetricsSnapshot:
    """
    Aggregate a cleaned batch into a MetricsSnapshot.

    Parameters
    ----------
    records : Iterable[PacketRecord]
        Output of clean_packets(); may be empty.
    cfg : PipelineConfig, optional
        Thresholds and top-talker settings.
    now : float, optional
        Snapshot timestamp (epoch seconds); defaults to the current time.
    """
    cfg = cfg or DEFAULT_CONFIG
    batch = list(records)
    if not batch:
        return empty_snapshot(cfg, now)

    latency_ms = mean([r.ack_rtt * 1000 for r in batch if r.ack_rtt is not None])
    jitter_ms = pstdev([r.time_delta * 1000 for r in batch if r.time_delta is not None])

    total_bytes = sum(r.frame_length for r in batch)
    times = [r.time for r in batch if r.time is not None]
    time_span = (max(times) - min(times)) if times else 0.0
    bandwidth_mbps = (total_bytes * 8) / (time_span * 1_000_000) if time_span > 0 else 0.0

    retransmissions = sum(1 for r in batch if r.is_retransmission)
    packet_loss_percent = retransmissions / len(batch) * 100

    # A DNS record without a delta counts as zero delay
    dns_delay_ms = mean([(r.time_delta or 0.0) * 1000 for r in batch if r.protocol == "DNS"])

    avg_window_size = mean([r.window_size for r in batch if r.window_size is not None])

    protocol_counts: Dict[str, int] = dict(Counter(r.protocol or "Unknown" for r in batch))

    health_score = calculate_health_score(
        latency_ms=latency_ms,
        jitter_ms=jitter_ms,
        packet_loss_percent=packet_loss_percent,
        bandwidth_mbps=bandwidth_mbps,
        dns_delay_ms=dns_delay_ms,
    )

    return MetricsSnapshot(
        timestamp=_time.time() if now is None else float(now),
        latency_ms=latency_ms,
        jitter_ms=jitter_ms,
        bandwidth_mbps=bandwidth_mbps,
        packet_loss_percent=packet_loss_percent,
        dns_delay_ms=dns_delay_ms,
        health_score=health_score,
        stability=classify_stability(jitter_ms, packet_loss_percent),
        congestion_level=classify_congestion(avg_window_size, bandwidth_mbps),
        packet_count=len(batch),
        protocol_counts=protocol_counts,
        packet_sizes=tuple(r.frame_length for r in batch),
        top_applications=tuple(identify_top_applications(batch, cfg=cfg)),
    )
