"""
Pipeline orchestration.

Wires parse -> clean -> aggregate for one block of capture text, and drives
the same chain over a chunked stream through the Source/Sink ports.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional

from ..config import DEFAULT_CONFIG, PipelineConfig
from ..dto import MetricsSnapshot, PacketRecord
from ..intake.cleaner import clean_packets
from ..intake.line_buffer import LineBuffer
from ..intake.record_parser import parse_raw_packets
from ..pipeline.aggregator import compute_metrics
from ..pipeline.batching import batch_packets
from ..ports import CaptureSourcePort, MetricsSinkPort

logger = logging.getLogger(__name__)


def analyze_records(
    records: Iterable[PacketRecord], cfg: Optional[PipelineConfig] = None
) -> MetricsSnapshot:
    """Clean and aggregate already-parsed records."""
    cfg = cfg or DEFAULT_CONFIG
    return compute_metrics(clean_packets(records, cfg), cfg)


def analyze_capture_text(text: str, cfg: Optional[PipelineConfig] = None) -> MetricsSnapshot:
    """Parse, clean and aggregate one block of TShark field export text."""
    return analyze_records(parse_raw_packets(text), cfg)


def run_stream(
    *,
    source: CaptureSourcePort,
    sink: MetricsSinkPort,
    cfg: Optional[PipelineConfig] = None,
) -> Dict[str, int]:
    """
    Drive the pipeline over a chunked capture stream.

    Each complete block of lines is cleaned and split into batches of at
    most `cfg.batch_size` records, one snapshot per batch; blocks that
    leave no packets after cleaning are not emitted. Returns the run counters
    that were also handed to `sink.on_metrics`.
    """
    cfg = cfg or DEFAULT_CONFIG
    buffer = LineBuffer()
    counters = {
        "chunks_seen": 0,
        "packets_parsed": 0,
        "packets_dropped": 0,
        "snapshots_emitted": 0,
    }

    def _process(block: Optional[str]) -> None:
        if block is None:
            return
        parsed = parse_raw_packets(block)
        cleaned = clean_packets(parsed, cfg)
        counters["packets_parsed"] += len(parsed)
        counters["packets_dropped"] += len(parsed) - len(cleaned)
        for batch in batch_packets(cleaned, cfg=cfg):
            sink.on_snapshot(compute_metrics(batch, cfg))
            counters["snapshots_emitted"] += 1

    for chunk in source.chunks():
        counters["chunks_seen"] += 1
        _process(buffer.feed(chunk))
    _process(buffer.flush())

    logger.info(
        "Stream finished: %d chunks, %d packets parsed, %d dropped, %d snapshots",
        counters["chunks_seen"],
        counters["packets_parsed"],
        counters["packets_dropped"],
        counters["snapshots_emitted"],
    )
    sink.on_metrics(dict(counters))
    return counters
