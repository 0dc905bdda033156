"""
Line buffer for streamed capture text.

A live capture delivers stdout in arbitrary chunks that rarely end on a
line boundary. LineBuffer holds the trailing partial line until the next
chunk completes it, and remembers the header row so every block it hands
out can be parsed on its own by parse_raw_packets().

Behavior
--------
- The first complete line ever seen is the header; it is never data.
- `feed(chunk)` returns header + all complete data lines, or None when
  the chunk did not complete any data line.
- `flush()` returns the leftover partial line (header prepended) once the
  stream has ended, or None.
"""

from __future__ import annotations

from typing import List, Optional


class LineBuffer:
    """Accumulate raw capture text and release complete, self-describing blocks."""

    def __init__(self) -> None:
        self._pending = ""
        self._header: Optional[str] = None

    @property
    def header(self) -> Optional[str]:
        return self._header

    def feed(self, chunk: str) -> Optional[str]:
        """Add a chunk; return a parseable block if any data line completed."""
        if not chunk:
            return None

        lines = (self._pending + chunk).split("\n")
        # Last element is either '' (chunk ended on a newline) or a partial line.
        self._pending = lines.pop()
        return self._block([ln for ln in lines if ln.strip()])

    def flush(self) -> Optional[str]:
        """Release whatever is left once the producer has closed."""
        rest, self._pending = self._pending, ""
        if not rest.strip():
            return None
        return self._block([rest])

    # --- helpers ---

    def _block(self, lines: List[str]) -> Optional[str]:
        if self._header is None and lines:
            self._header = lines.pop(0).rstrip("\r")
        if not lines or self._header is None:
            return None
        return "\n".join([self._header, *lines])
