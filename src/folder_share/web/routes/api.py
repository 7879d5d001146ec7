"""API blueprint: folder listing JSON and status."""

import logging
import os
import time
from datetime import timedelta

from flask import Blueprint, jsonify, request

from folder_share.constants import LOGGER_NAME
from folder_share.logging_utils import error_buffer

logger = logging.getLogger(LOGGER_NAME)


def create_bp(storage, started_at: float):
    """Create API blueprint with routes closed over a StorageManager."""
    bp = Blueprint("api", __name__)

    @bp.route("/api/folder")
    def api_folder():
        """Folder contents for in-place expansion in the browser."""
        rel = request.args.get("path", "")
        folder_path = storage.resolve(rel)
        if folder_path is None or not os.path.isdir(folder_path):
            return jsonify({"error": "Folder not found"}), 404
        try:
            items = storage.list_directory(folder_path)
        except OSError as e:
            logger.error("Error reading folder %s: %s", rel or "/", e)
            return jsonify({"error": "Unable to read folder"}), 500
        return jsonify({"items": [i.to_dict() for i in items], "path": rel})

    @bp.route("/status")
    def status():
        uptime_seconds = time.time() - started_at
        return jsonify({
            "online": True,
            "uptime_seconds": uptime_seconds,
            "uptime": str(timedelta(seconds=int(uptime_seconds))),
            "started_at": time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(started_at)),
            "storage_path": storage.storage_path,
            "resolve_symlinks": storage.resolve_symlinks,
            "recent_errors": error_buffer.get_all()[:5],
        })

    return bp
