"""
Upload routes: file validation + saving, then a one-shot metrics analysis.
"""

from __future__ import annotations
from datetime import datetime
from pathlib import Path
from flask import Blueprint, current_app, jsonify, request
from werkzeug.utils import secure_filename

from netapp.managers.analysis_manager import AnalysisManager
from netapp.utils import allowed_file

bp = Blueprint("upload", __name__, url_prefix="/")


@bp.route("/upload", methods=["POST"])
def upload_file():
    """
    Upload a capture (TShark CSV/TXT export or PCAP/PCAPNG, optionally
    .gz/.zst) into UPLOAD_FOLDER, return its metrics snapshot and delete
    the saved file.
    """
    if "file" not in request.files:
        return jsonify({"success": False, "error": "No file part"}), 400

    file = request.files["file"]
    if not file or file.filename == "":
        return jsonify({"success": False, "error": "No selected file"}), 400

    if not allowed_file(file.filename, current_app.config["ALLOWED_EXTENSIONS"]):
        return jsonify({"success": False, "error": "Invalid file type"}), 400

    upload_dir = Path(current_app.config["UPLOAD_FOLDER"])
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    filename = f"{ts}_{secure_filename(file.filename)}"
    dest = upload_dir / filename
    file.save(dest)

    mgr: AnalysisManager = current_app.extensions["analysis_mgr"]
    try:
        payload = mgr.analyze_file(dest)
    except ValueError as e:
        current_app.logger.warning("Rejected upload %s: %s", filename, e)
        return jsonify({"success": False, "error": str(e)}), 400
    finally:
        # Only the snapshot outlives the request
        dest.unlink(missing_ok=True)

    return jsonify({"success": True, "filename": filename, "metrics": payload})
