"""
Hexagonal interfaces (Ports) for the metrics pipeline.

These define the boundary between the pure pipeline and whatever feeds it
(a capture process, a file, a socket) or consumes its output (a dashboard
push channel, a test collector). Keep them small so they're easy to mock.
"""

from __future__ import annotations

from typing import Dict, Iterable, Protocol

from .dto import MetricsSnapshot


class CaptureSourcePort(Protocol):
    """
    Supplies raw capture text in arbitrary chunks (header row first).
    Starting, stopping and time-limiting the capture tool is the
    implementation's concern, not the pipeline's.
    """

    def chunks(self) -> Iterable[str]:
        """Yield raw text chunks until the capture ends."""
        ...


class MetricsSinkPort(Protocol):
    """Receives snapshots and run counters from the pipeline."""

    def on_snapshot(self, snapshot: MetricsSnapshot) -> None:
        """Receive one MetricsSnapshot for a completed block of packets."""
        ...

    def on_metrics(self, metrics: Dict[str, int]) -> None:
        """
        Receive run counters at the end of the stream
        (chunks_seen, packets_parsed, packets_dropped, snapshots_emitted).
        """
        ...
