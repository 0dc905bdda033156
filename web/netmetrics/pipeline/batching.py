"""
Batching utilities.

A long capture is split into fixed-size consecutive batches so each batch
yields its own MetricsSnapshot. Batches are independent; order inside a
batch follows input order.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..config import DEFAULT_CONFIG, PipelineConfig
from ..dto import PacketRecord


def batch_packets(
    records: Sequence[PacketRecord],
    batch_size: Optional[int] = None,
    cfg: Optional[PipelineConfig] = None,
) -> List[List[PacketRecord]]:
    """
    Split records into consecutive batches of at most `batch_size`.

    `batch_size` defaults to `cfg.batch_size`. The last batch may be
    shorter. An empty input yields no batches.
    """
    cfg = cfg or DEFAULT_CONFIG
    size = cfg.batch_size if batch_size is None else batch_size
    if size < 1:
        raise ValueError("batch_size must be a positive integer")
    return [list(records[i : i + size]) for i in range(0, len(records), size)]
