"""
Analysis manager.

Runs the metrics pipeline on demand (uploaded captures, posted capture
text) and keeps the latest result in memory so the dashboard can poll it.
Nothing is written to disk; history retention is the dashboard's job.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional
import logging
import threading
import time

from netmetrics import PipelineConfig, analyze_capture_text

from ..serializers import snapshot_payload
from .pipeline_bridge import run_capture_analysis


@dataclass
class AnalysisManager:
    """
    On-demand analysis orchestrator.

    Attributes:
        logger: Application logger.
        cfg: Pipeline configuration shared by every run.

    State (protected by _lock):
        last_run_at: UNIX timestamp of the last successful run.
        last_payload: Latest snapshot payload.
        last_source: Name of the input the latest payload came from.
    """
    logger: logging.Logger
    cfg: PipelineConfig = field(default_factory=PipelineConfig)

    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    last_run_at: Optional[float] = None
    last_payload: Dict[str, object] = field(default_factory=dict)
    last_source: Optional[str] = None

    # ---------------------------- Public methods ---------------------------

    def analyze_text(self, text: str, source: str = "request") -> Dict[str, object]:
        """Run the pipeline on raw TShark field text."""
        payload = snapshot_payload(analyze_capture_text(text, self.cfg))
        self._record(payload, source)
        return payload

    def analyze_file(self, path: Path) -> Dict[str, object]:
        """
        Run the pipeline on a saved capture file.

        Raises:
            ValueError: If the file is not a recognized capture.
        """
        self.logger.info("Analyzing capture %s", path.name)
        payload = snapshot_payload(run_capture_analysis(path, cfg=self.cfg))
        self._record(payload, path.name)
        return payload

    def snapshot(self) -> Dict[str, object]:
        """Return a thread-safe snapshot of the latest analysis for the API."""
        with self._lock:
            return {
                "last_run_at": self.last_run_at,
                "source": self.last_source,
                "metrics": dict(self.last_payload),
            }

    # --------------------------- Private helpers ---------------------------

    def _record(self, payload: Dict[str, object], source: str) -> None:
        with self._lock:
            self.last_payload = payload
            self.last_source = source
            self.last_run_at = time.time()
        self.logger.info(
            "Analysis of %s: %s packets, health %s",
            source,
            payload.get("packet_count"),
            payload.get("health_score"),
        )
