"""
netmetrics: network health metrics from packet captures.

Public API (stable):
- PipelineConfig                (configuration)
- parse_raw_packets             (TShark field text -> PacketRecord list)
- clean_packets                 (drop incomplete/anomalous records)
- compute_metrics               (records -> MetricsSnapshot)
- identify_top_applications     (records -> ranked ApplicationUsage)
- calculate_health_score, score_metrics
- generate_synthetic_metrics, synthesize_from_score, generate_series_points
- analyze_capture_text, analyze_records, run_stream (orchestration)
- CaptureSourcePort, MetricsSinkPort (ports)
- DTOs: PacketRecord, MetricsSnapshot, ApplicationUsage, SyntheticMetrics,
  SeriesPoint, DetailedStability, CongestionLevel, SimpleStability

Every stage is a pure function over its input, so batches can be
processed in parallel by the caller without coordination.
"""

from __future__ import annotations

# Configuration
from .config import PipelineConfig

# DTOs
from .dto import (
    ApplicationUsage,
    CongestionLevel,
    DetailedStability,
    MetricsSnapshot,
    PacketRecord,
    SeriesPoint,
    SimpleStability,
    SyntheticMetrics,
)

# Stages
from .intake.cleaner import clean_packets
from .intake.record_parser import parse_raw_packets
from .pipeline.aggregator import compute_metrics
from .pipeline.applications import identify_top_applications
from .pipeline.batching import batch_packets
from .pipeline.scoring import calculate_health_score, score_metrics
from .synthetic import generate_series_points, generate_synthetic_metrics, synthesize_from_score

# Orchestration
from .orchestration.runner import analyze_capture_text, analyze_records, run_stream

# Ports
from .ports import CaptureSourcePort, MetricsSinkPort

__all__ = [
    "PipelineConfig",
    "ApplicationUsage",
    "CongestionLevel",
    "DetailedStability",
    "MetricsSnapshot",
    "PacketRecord",
    "SeriesPoint",
    "SimpleStability",
    "SyntheticMetrics",
    "clean_packets",
    "parse_raw_packets",
    "compute_metrics",
    "identify_top_applications",
    "batch_packets",
    "calculate_health_score",
    "score_metrics",
    "generate_series_points",
    "generate_synthetic_metrics",
    "synthesize_from_score",
    "analyze_capture_text",
    "analyze_records",
    "run_stream",
    "CaptureSourcePort",
    "MetricsSinkPort",
]
