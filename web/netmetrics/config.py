"""
Configuration schema for the network metrics pipeline.

Keep this lean: only the knobs the cleaner, aggregator, top-talker
identifier and synthetic generator actually consult. The defaults are the
thresholds the dashboard has always shown, so changing them changes the
meaning of the health labels.
"""

from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PipelineConfig(BaseModel):
    """
    Centralized, validated configuration for one pipeline run.
    All times are seconds unless otherwise noted.
    """

    model_config = ConfigDict(frozen=True)

    # === Cleaning ===
    max_frame_length: int = Field(
        default=100_000,
        ge=1,
        description="Frames larger than this many bytes are treated as capture noise.",
    )
    max_ack_rtt_seconds: float = Field(
        default=10.0,
        gt=0.0,
        description="ACK round-trip times above this are treated as capture noise.",
    )

    # === Aggregation ===
    default_health_score: int = Field(
        default=50,
        ge=1,
        le=100,
        description="Health score reported for an empty (idle) capture window.",
    )
    batch_size: int = Field(
        default=100,
        ge=1,
        description="Records per batch when splitting a long capture.",
    )

    # === Top talkers ===
    top_n: int = Field(
        default=5,
        ge=1,
        description="Number of applications kept in the top-talker ranking.",
    )
    application_port_map: dict[int, str] = Field(
        default_factory=lambda: {
            80: "HTTP",
            443: "HTTPS",
            53: "DNS",
            22: "SSH",
            21: "FTP",
            25: "SMTP",
            110: "POP3",
            143: "IMAP",
            3389: "RDP",
            1194: "OpenVPN",
            3306: "MySQL",
            5432: "PostgreSQL",
            27017: "MongoDB",
            6379: "Redis",
            8080: "HTTP-Alt",
            8443: "HTTPS-Alt",
        },
        description="Well-known port → application label used for top talkers.",
    )
    dynamic_port_range: Tuple[int, int] = Field(
        default=(1024, 49151),
        description="Exclusive bounds of destination ports labelled 'App-Port-<n>'.",
    )
    unknown_application_label: str = Field(
        default="Unknown",
        description="Label used when neither port maps to an application.",
    )

    # === Synthetic metrics ===
    synthetic_score_range: Tuple[int, int] = Field(
        default=(30, 95),
        description="Half-open [low, high) range the synthetic health score is drawn from.",
    )

    @model_validator(mode="after")
    def check_ranges(self) -> "PipelineConfig":
        for name in ("dynamic_port_range", "synthetic_score_range"):
            low, high = getattr(self, name)
            if low >= high:
                raise ValueError(f"{name} must be (low, high) with low < high, got {(low, high)}")
        return self


DEFAULT_CONFIG = PipelineConfig()
