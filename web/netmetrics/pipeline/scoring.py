"""
Health scoring.

Blends the five component metrics into one 1–100 score:

    latency      max(0, 100 - latency_ms / 2)          x 0.30
    jitter       max(0, 100 - jitter_ms * 2)           x 0.20
    packet loss  max(0, 100 - packet_loss_percent*10)  x 0.25
    bandwidth    min(100, bandwidth_mbps * 10)         x 0.15
    dns delay    max(0, 100 - dns_delay_ms * 2)        x 0.10

The synthetic generator derives its component metrics from a seed score
with the inverse of this blend, so the two must change together.
"""

from __future__ import annotations

from typing import Protocol

from .stats import round_half_up

MIN_SCORE = 1
MAX_SCORE = 100


class HealthComponents(Protocol):
    latency_ms: float
    jitter_ms: float
    packet_loss_percent: float
    bandwidth_mbps: float
    dns_delay_ms: float


def calculate_health_score(
    *,
    latency_ms: float,
    jitter_ms: float,
    packet_loss_percent: float,
    bandwidth_mbps: float,
    dns_delay_ms: float,
) -> int:
    """Return the weighted health score, rounded and clamped to [1, 100]."""
    latency_score = max(0.0, 100 - latency_ms / 2) * 0.30
    jitter_score = max(0.0, 100 - jitter_ms * 2) * 0.20
    packet_loss_score = max(0.0, 100 - packet_loss_percent * 10) * 0.25
    bandwidth_score = min(100.0, bandwidth_mbps * 10) * 0.15
    dns_score = max(0.0, 100 - dns_delay_ms * 2) * 0.10

    score = round_half_up(
        latency_score + jitter_score + packet_loss_score + bandwidth_score + dns_score
    )
    return max(MIN_SCORE, min(MAX_SCORE, score))


def score_metrics(metrics: HealthComponents) -> int:
    """Score any object exposing the five component attributes."""
    return calculate_health_score(
        latency_ms=metrics.latency_ms,
        jitter_ms=metrics.jitter_ms,
        packet_loss_percent=metrics.packet_loss_percent,
        bandwidth_mbps=metrics.bandwidth_mbps,
        dns_delay_ms=metrics.dns_delay_ms,
    )
