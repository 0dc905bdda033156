"""
Record cleaning.

Goal: fast, side-effect-free filtering of parsed records before they reach
the aggregator. Captures are noisy; a record that is incomplete or carries
implausible values is dropped, never repaired.

Drop rules:
- `time` is missing or zero, or `protocol` is missing/empty.
- `frame_length` above `cfg.max_frame_length` bytes.
- `ack_rtt` present and above `cfg.max_ack_rtt_seconds`.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..config import DEFAULT_CONFIG, PipelineConfig
from ..dto import PacketRecord

logger = logging.getLogger(__name__)


def is_clean(record: PacketRecord, cfg: PipelineConfig = DEFAULT_CONFIG) -> bool:
    """Return True if the record is complete and within plausible bounds."""
    if not record.time or not record.protocol:
        return False
    if record.frame_length > cfg.max_frame_length:
        return False
    if record.ack_rtt is not None and record.ack_rtt > cfg.max_ack_rtt_seconds:
        return False
    return True


def clean_packets(
    records: Iterable[PacketRecord], cfg: Optional[PipelineConfig] = None
) -> List[PacketRecord]:
    """
    Filter out incomplete and anomalous records, preserving input order.

    Records are immutable, so survivors are passed through as-is. Running
    the cleaner on its own output returns the same list.
    """
    cfg = cfg or DEFAULT_CONFIG
    records = list(records)
    kept = [r for r in records if is_clean(r, cfg)]

    dropped = len(records) - len(kept)
    if dropped:
        logger.debug("Dropped %d of %d records during cleaning", dropped, len(records))
    return kept
