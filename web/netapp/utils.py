"""
Utility helpers: directory setup, logging config and upload validation.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List

from flask import Flask

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers that share the app's handlers: the web layer and the metrics pipeline.
APP_LOGGERS = ("netapp", "netmetrics")


def ensure_dirs(*paths: Path) -> None:
    """Ensure each directory exists."""
    for p in paths:
        p.mkdir(parents=True, exist_ok=True)


def _build_handlers(log_file: Path, level: int) -> List[logging.Handler]:
    fmt = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    rotating = RotatingFileHandler(log_file, maxBytes=1_000_000, backupCount=5)
    for handler in (console, rotating):
        handler.setLevel(level)
        handler.setFormatter(fmt)
    return [console, rotating]


def init_logging(app: Flask) -> logging.Logger:
    """
    Route the web and pipeline loggers to the console and a rotating file.

    Returns the "netapp" logger, which the factory installs as app.logger.
    """
    level = getattr(logging, app.config["LOG_LEVEL"].upper(), logging.INFO)
    log_file = Path(app.config["LOG_FILE"])
    ensure_dirs(log_file.parent)
    handlers = _build_handlers(log_file, level)

    for name in APP_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = False
        # create_app may run more than once per process (tests)
        for old in list(logger.handlers):
            logger.removeHandler(old)
            old.close()
        for handler in handlers:
            logger.addHandler(handler)

    return logging.getLogger("netapp")


def allowed_file(filename: str, allowed: set[str]) -> bool:
    """Return True if the filename has an allowed extension."""
    return "." in filename and filename.rsplit(".", 1)[1].lower() in allowed
