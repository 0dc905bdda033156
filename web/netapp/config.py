"""
Configuration objects for the Flask application.

Every value can be overridden through an environment variable of the same
name (logging uses the APP_ prefix).
"""

from __future__ import annotations
import os


class Config:
    """Base configuration (safe defaults)."""

    # Storage
    UPLOAD_FOLDER = os.getenv("UPLOAD_FOLDER", "uploads")
    LOG_FOLDER = os.getenv("LOG_FOLDER", "logs")

    # Requests / uploads
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(16 * 1024 * 1024)))  # 16 MiB

    # File types (TShark field exports and saved captures)
    ALLOWED_EXTENSIONS = set(
        (os.getenv("ALLOWED_EXTENSIONS", "csv,txt,pcap,pcapng,gz,zst")).split(",")
    )

    # Logging
    LOG_FILE = os.getenv("APP_LOG_FILE", "logs/app.log")
    LOG_LEVEL = os.getenv("APP_LOG_LEVEL", "INFO")

    # Metrics
    TOP_APPLICATIONS = int(os.getenv("TOP_APPLICATIONS", "5"))
    SERIES_MAX_POINTS = int(os.getenv("SERIES_MAX_POINTS", "3600"))

    # Packet cleaning limits handed to the pipeline
    MAX_FRAME_LENGTH = int(os.getenv("MAX_FRAME_LENGTH", "100000"))
    MAX_ACK_RTT_SECONDS = float(os.getenv("MAX_ACK_RTT_SECONDS", "10"))


class ProductionConfig(Config):
    """Production overrides."""
    LOG_LEVEL = os.getenv("APP_LOG_LEVEL", "INFO")


class DevelopmentConfig(Config):
    """Development overrides."""
    LOG_LEVEL = os.getenv("APP_LOG_LEVEL", "DEBUG")
