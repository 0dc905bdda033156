"""
JSON shaping for pipeline DTOs.

The dashboard reads snake_case keys and plain-string labels; enums are
emitted by value and tuples as lists.
"""

from __future__ import annotations

from dataclasses import asdict
from enum import Enum
from typing import Any, Dict, Iterable, List

from netmetrics import MetricsSnapshot, SeriesPoint, SyntheticMetrics


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def snapshot_payload(snapshot: MetricsSnapshot) -> Dict[str, Any]:
    return _plain(asdict(snapshot))


def synthetic_payload(metrics: SyntheticMetrics) -> Dict[str, Any]:
    return _plain(asdict(metrics))


def series_payload(points: Iterable[SeriesPoint]) -> List[Dict[str, float]]:
    return [{"timestamp": p.timestamp, "value": p.value} for p in points]
