"""
Top-talker identification.

Responsibilities (kept minimal, one thing each):
- Infer a coarse application label from the packet's ports (no deep parsing).
- Sum frame bytes per label and rank the heaviest applications.

Notes
-----
- The source port is checked before the destination port, so server
  responses (sport=443) land on the same label as the requests.
- Unmapped destination ports in the registered range become
  'App-Port-<port>' rather than collapsing into 'Unknown'.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from ..config import DEFAULT_CONFIG, PipelineConfig
from ..dto import ApplicationUsage, PacketRecord


def infer_application(
    source_port: Optional[int],
    dest_port: Optional[int],
    cfg: PipelineConfig = DEFAULT_CONFIG,
) -> str:
    """Map a port pair to an application label."""
    port_map = cfg.application_port_map
    if source_port is not None and source_port in port_map:
        return port_map[source_port]
    if dest_port is not None and dest_port in port_map:
        return port_map[dest_port]

    low, high = cfg.dynamic_port_range
    if dest_port is not None and low < dest_port < high:
        return f"App-Port-{dest_port}"
    return cfg.unknown_application_label


def identify_top_applications(
    records: Iterable[PacketRecord],
    top_n: Optional[int] = None,
    cfg: Optional[PipelineConfig] = None,
) -> List[ApplicationUsage]:
    """
    Rank applications by total bytes transferred.

    Parameters
    ----------
    records : Iterable[PacketRecord]
        Cleaned packet records.
    top_n : int, optional
        Maximum number of entries returned (defaults to cfg.top_n).

    Returns
    -------
    List[ApplicationUsage]
        Sorted by total_bytes descending; equal totals keep first-seen order.
    """
    cfg = cfg or DEFAULT_CONFIG
    limit = cfg.top_n if top_n is None else int(top_n)
    if limit <= 0:
        return []

    totals: Dict[str, int] = {}
    for rec in records:
        app = infer_application(rec.source_port, rec.dest_port, cfg)
        totals[app] = totals.get(app, 0) + int(rec.frame_length)

    # sorted() is stable and dicts keep insertion order, so ties stay first-seen.
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [ApplicationUsage(application=a, total_bytes=b) for a, b in ranked[:limit]]
