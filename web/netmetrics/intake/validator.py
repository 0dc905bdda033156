"""
Basic capture format detection.

Goal: fast, side-effect-free check that a (decompressed) byte stream
*looks* like PCAP or PCAPNG before we spend CPU parsing it. Only magic
bytes are inspected; the packet reader does the deeper checks.
"""

from __future__ import annotations

from typing import Final, Literal

CaptureFormat = Literal["pcap", "pcapng", "unknown"]

# --- Magic numbers (as they appear on disk) ---
MAGIC_PCAP_USEC_BE: Final[bytes] = bytes.fromhex("a1b2c3d4")
MAGIC_PCAP_USEC_LE: Final[bytes] = bytes.fromhex("d4c3b2a1")
MAGIC_PCAP_NSEC_BE: Final[bytes] = bytes.fromhex("a1b23c4d")
MAGIC_PCAP_NSEC_LE: Final[bytes] = bytes.fromhex("4d3cb2a1")
MAGIC_PCAPNG: Final[bytes] = bytes.fromhex("0a0d0d0a")

_PCAP_MAGICS = (MAGIC_PCAP_USEC_BE, MAGIC_PCAP_USEC_LE, MAGIC_PCAP_NSEC_BE, MAGIC_PCAP_NSEC_LE)

# pcap global header is 24 bytes; anything shorter cannot hold a packet.
MIN_CAPTURE_BYTES: Final[int] = 24


def detect_capture_format(head: bytes) -> CaptureFormat:
    """Classify the leading bytes of a capture stream."""
    if len(head) < 4:
        return "unknown"
    sig = head[:4]
    if sig in _PCAP_MAGICS:
        return "pcap"
    if sig == MAGIC_PCAPNG:
        return "pcapng"
    return "unknown"
