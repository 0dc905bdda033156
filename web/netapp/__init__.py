"""
Flask app factory for the network-health metrics API.

Wires config, logging, the shared AnalysisManager, blueprints and JSON
error handlers.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Type

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from netmetrics import PipelineConfig
from netapp.config import Config, DevelopmentConfig, ProductionConfig
from netapp.utils import ensure_dirs, init_logging
from netapp.managers.analysis_manager import AnalysisManager
from netapp.routes import metrics as metrics_bp
from netapp.routes import upload as upload_bp


def _select_config(config_class: Type[Config] | None) -> Type[Config]:
    if config_class is not None:
        return config_class
    env = os.getenv("FLASK_ENV", "production").lower()
    return DevelopmentConfig if env.startswith("dev") else ProductionConfig


def _pipeline_config(app: Flask) -> PipelineConfig:
    """Build the pipeline settings from the Flask config."""
    return PipelineConfig(
        top_n=app.config["TOP_APPLICATIONS"],
        max_frame_length=app.config["MAX_FRAME_LENGTH"],
        max_ack_rtt_seconds=app.config["MAX_ACK_RTT_SECONDS"],
    )


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(RequestEntityTooLarge)
    def handle_file_too_large(_e):
        return jsonify({"success": False, "error": "File too large"}), 413

    @app.errorhandler(HTTPException)
    def handle_http_exception(e: HTTPException):
        return jsonify({"success": False, "error": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_exception(e: Exception):
        app.logger.exception("Unhandled error")
        return jsonify({"success": False, "error": "Internal server error"}), 500


def create_app(config_class: Type[Config] | None = None) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(_select_config(config_class))

    ensure_dirs(Path(app.config["UPLOAD_FOLDER"]), Path(app.config["LOG_FOLDER"]))

    app.logger = init_logging(app)

    # One manager per app; routes reach it through current_app.extensions
    app.extensions["analysis_mgr"] = AnalysisManager(
        logger=app.logger,
        cfg=_pipeline_config(app),
    )

    @app.after_request
    def set_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Cache-Control"] = "no-store"
        return resp

    _register_error_handlers(app)

    app.register_blueprint(metrics_bp.bp)
    app.register_blueprint(upload_bp.bp)

    @app.route("/healthz")
    def healthz():
        return jsonify({"status": "ok"}), 200

    app.logger.info("Metrics API ready (upload folder: %s)", app.config["UPLOAD_FOLDER"])
    return app
