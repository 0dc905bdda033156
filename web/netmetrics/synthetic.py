"""
Synthetic metrics for demo/offline use.

When no live capture is available the dashboard still needs numbers that
hang together: a seed health score is drawn first and every component
metric is derived from it, so a better score always means lower latency,
jitter, loss and DNS delay and higher bandwidth.

Public API:
- synthesize_from_score(health_score) -> SyntheticMetrics
- generate_synthetic_metrics(rng=None) -> SyntheticMetrics
- generate_series_points(count, base, volatility, rng=None) -> List[SeriesPoint]
"""

from __future__ import annotations

import random
import time
from typing import List, Optional

from .config import DEFAULT_CONFIG, PipelineConfig
from .dto import SeriesPoint, SimpleStability, SyntheticMetrics
from .pipeline.stats import round_half_up


def classify_simple_stability(health_score: int) -> SimpleStability:
    if health_score < 50:
        return SimpleStability.CRITICAL
    if health_score < 70:
        return SimpleStability.UNSTABLE
    return SimpleStability.STABLE


def classify_simple_congestion(jitter_ms: float, bandwidth_mbps: float) -> SimpleStability:
    if jitter_ms > 30 or bandwidth_mbps < 50:
        return SimpleStability.CRITICAL
    if jitter_ms > 15 or bandwidth_mbps < 70:
        return SimpleStability.UNSTABLE
    return SimpleStability.STABLE


def synthesize_from_score(health_score: int, now: Optional[float] = None) -> SyntheticMetrics:
    """Derive plausible component metrics from a seed health score."""
    quality = health_score / 100

    latency_ms = round_half_up((1 - quality) * 150 + 10)
    jitter_ms = round_half_up((1 - quality) * 50 + 1)
    packet_loss_percent = round_half_up((1 - quality) * 100) / 10
    bandwidth_mbps = round_half_up(quality * 900 + 50) / 10
    dns_delay_ms = round_half_up((1 - quality) * 100 + 5)

    return SyntheticMetrics(
        timestamp=time.time() if now is None else float(now),
        latency_ms=float(latency_ms),
        jitter_ms=float(jitter_ms),
        packet_loss_percent=packet_loss_percent,
        bandwidth_mbps=bandwidth_mbps,
        dns_delay_ms=float(dns_delay_ms),
        health_score=int(health_score),
        stability=classify_simple_stability(health_score),
        congestion=classify_simple_congestion(jitter_ms, bandwidth_mbps),
    )


def generate_synthetic_metrics(
    rng: Optional[random.Random] = None,
    cfg: Optional[PipelineConfig] = None,
) -> SyntheticMetrics:
    """Draw a seed score uniformly from cfg.synthetic_score_range and derive metrics."""
    rng = rng or random.Random()
    cfg = cfg or DEFAULT_CONFIG
    low, high = cfg.synthetic_score_range
    return synthesize_from_score(rng.randrange(low, high))


def generate_series_points(
    count: int,
    base: float,
    volatility: float,
    rng: Optional[random.Random] = None,
    now: Optional[float] = None,
) -> List[SeriesPoint]:
    """
    Produce `count` chart points one second apart, the last one second before `now`.

    Each value is base + (u - 0.5) * volatility with u uniform in [0, 1).
    """
    if count < 0:
        raise ValueError("count must be non-negative")
    rng = rng or random.Random()
    end = time.time() if now is None else float(now)

    return [
        SeriesPoint(
            timestamp=end - (count - index),
            value=base + (rng.random() - 0.5) * volatility,
        )
        for index in range(count)
    ]
