"""
Metrics routes: synthetic demo data, chart series, live text analysis, scoring.
"""

from __future__ import annotations

import math

from flask import Blueprint, current_app, jsonify, request

from netmetrics import calculate_health_score, generate_series_points, generate_synthetic_metrics
from netapp.managers.analysis_manager import AnalysisManager
from netapp.serializers import series_payload, synthetic_payload

bp = Blueprint("metrics", __name__, url_prefix="/api/metrics")

_COMPONENTS = (
    "latency_ms",
    "jitter_ms",
    "packet_loss_percent",
    "bandwidth_mbps",
    "dns_delay_ms",
)


def _not_an_object():
    return jsonify({"success": False, "error": "JSON body must be an object"}), 400


@bp.route("/synthetic")
def synthetic():
    """Return one synthetic metrics sample (offline/demo mode)."""
    mgr: AnalysisManager = current_app.extensions["analysis_mgr"]
    metrics = generate_synthetic_metrics(cfg=mgr.cfg)
    return jsonify({"success": True, "metrics": synthetic_payload(metrics)})


@bp.route("/series")
def series():
    """
    Return simulated chart points.

    Query: ?count=60&base=50&volatility=10
    """
    try:
        count = int(request.args.get("count", 60))
        base = float(request.args.get("base", 50.0))
        volatility = float(request.args.get("volatility", 10.0))
    except ValueError:
        return jsonify({"success": False, "error": "count, base and volatility must be numeric"}), 400
    if not (math.isfinite(base) and math.isfinite(volatility)):
        return jsonify({"success": False, "error": "base and volatility must be finite"}), 400

    max_points = current_app.config["SERIES_MAX_POINTS"]
    if count < 0 or count > max_points:
        return jsonify({"success": False, "error": f"count must be between 0 and {max_points}"}), 400

    points = generate_series_points(count, base, volatility)
    return jsonify({"success": True, "points": series_payload(points)})


@bp.route("/analyze", methods=["POST"])
def analyze():
    """
    Analyze raw TShark field text.

    Body: text/plain capture text, or JSON {"raw": "<capture text>"}.
    An empty body yields the idle-window snapshot.
    """
    if request.is_json:
        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return _not_an_object()
        raw = data.get("raw", "")
        if not isinstance(raw, str):
            return jsonify({"success": False, "error": "'raw' must be a string"}), 400
    else:
        raw = request.get_data(as_text=True)

    mgr: AnalysisManager = current_app.extensions["analysis_mgr"]
    payload = mgr.analyze_text(raw)
    return jsonify({"success": True, "metrics": payload})


@bp.route("/latest")
def latest():
    """Return the most recent analysis result kept in memory."""
    mgr: AnalysisManager = current_app.extensions["analysis_mgr"]
    return jsonify({"success": True, **mgr.snapshot()})


@bp.route("/health-score", methods=["POST"])
def health_score():
    """
    Score a set of component metrics.

    Body (JSON):
      {"latency_ms": 40, "jitter_ms": 5, "packet_loss_percent": 0.5,
       "bandwidth_mbps": 20, "dns_delay_ms": 15}
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return _not_an_object()
    components = {}
    for name in _COMPONENTS:
        value = data.get(name)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            return jsonify({"success": False, "error": f"'{name}' must be a number"}), 400
        components[name] = float(value)

    return jsonify({"success": True, "health_score": calculate_health_score(**components)})
