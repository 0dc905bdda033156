from __future__ import annotations

import gzip
from pathlib import Path
from typing import List

import zstandard  # type: ignore

from netmetrics import MetricsSnapshot, PacketRecord, PipelineConfig, analyze_records, parse_raw_packets
from netmetrics.intake.decompress import open_capture_stream
from netmetrics.intake.pcap_reader import iter_packet_records

# Suffixes (after stripping .gz/.zst) that hold TShark field text rather than frames
TEXT_SUFFIXES = (".csv", ".txt")


def _inner_suffix(path: Path) -> str:
    suffixes = [s.lower() for s in path.suffixes]
    if suffixes and suffixes[-1] in (".gz", ".zst"):
        suffixes = suffixes[:-1]
    return suffixes[-1] if suffixes else ""


# --- Public bridge ------------------------------------------------------------
def load_capture_records(path: Path) -> List[PacketRecord]:
    """
    Read a saved capture into PacketRecords.

    - *.csv / *.txt (optionally .gz/.zst): TShark field export, header row first
    - anything else: PCAP/PCAPNG frames (optionally .gz/.zst)

    Raises ValueError if a binary capture is not PCAP/PCAPNG or the
    compressed file cannot be decompressed.
    """
    try:
        with open_capture_stream(path) as stream:
            if _inner_suffix(path) in TEXT_SUFFIXES:
                text = stream.read().decode("utf-8", errors="replace")
                return parse_raw_packets(text)
            return list(iter_packet_records(stream))
    except (gzip.BadGzipFile, EOFError, zstandard.ZstdError) as e:
        raise ValueError(f"Could not decompress {path.name}: {e}") from e


def run_capture_analysis(path: Path, *, cfg: PipelineConfig | None = None) -> MetricsSnapshot:
    """Load a saved capture and reduce it to one MetricsSnapshot."""
    return analyze_records(load_capture_records(path), cfg)
