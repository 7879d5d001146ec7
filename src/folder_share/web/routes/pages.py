"""Pages blueprint: listings, folder creation, upload, downloads, delete."""

import logging
import os

from flask import Blueprint, redirect, render_template, request, send_file, send_from_directory, url_for

from folder_share.constants import ARCHIVE_MIMETYPE, LOGGER_NAME
from folder_share.path_helpers import archive_filename, upload_filename

logger = logging.getLogger(LOGGER_NAME)


def create_bp(storage):
    """Create pages blueprint with routes closed over a StorageManager."""
    bp = Blueprint("pages", __name__)

    def _render_listing(folder_path: str, current_path: str, error_message: str):
        try:
            items = storage.list_directory(folder_path)
        except OSError as e:
            logger.error("Error listing %s: %s", current_path or "/", e)
            return render_template("error.html", error=error_message), 500
        return render_template("index.html", items=items, current_path=current_path)

    def _listing_redirect(rel_folder: str):
        if rel_folder:
            return redirect(url_for("pages.folder_view", name=rel_folder))
        return redirect(url_for("pages.index"))

    @bp.route("/")
    def index():
        return _render_listing(storage.storage_path, "", "Unable to scan files")

    @bp.route("/folder/<path:name>")
    def folder_view(name):
        folder_path = storage.resolve(name)
        if folder_path is None or not os.path.isdir(folder_path):
            return render_template("error.html", error="Folder not found"), 404
        return _render_listing(folder_path, name, "Unable to scan folder")

    @bp.route("/folder", methods=["POST"])
    def create_folder():
        name = (request.form.get("name") or "").strip()
        if not name:
            return "Folder name required", 400
        folder_path = storage.resolve(name)
        if folder_path is None or storage.is_root(folder_path):
            return "Invalid folder name", 400
        try:
            storage.create_folder(folder_path)
        except OSError as e:
            logger.error("Error creating folder %s: %s", name, e)
            return "Unable to create folder", 500
        return redirect(url_for("pages.index"))

    @bp.route("/upload", methods=["POST"])
    def upload():
        file = request.files.get("file")
        if file is None or not file.filename:
            return "No file was uploaded.", 400
        folder = request.form.get("folder") or request.args.get("folder") or ""
        dest_dir = storage.resolve(folder) if folder else storage.storage_path
        if dest_dir is None or (folder and not os.path.isdir(dest_dir)):
            return "Target folder does not exist or invalid", 400

        filename = upload_filename(file.filename)
        if not filename:
            return "Invalid file name", 400
        dest_path = storage.resolve(f"{folder}/{filename}" if folder else filename)
        if dest_path is None or storage.is_root(dest_path):
            return "Invalid file name", 400

        try:
            storage.save_upload(file, dest_path)
        except OSError as e:
            logger.error("Error saving upload %s: %s", filename, e)
            return "Upload failed", 500
        return _listing_redirect(storage.relative(dest_dir))

    @bp.route("/download/<path:rel>")
    def download(rel):
        file_path = storage.resolve(rel)
        if file_path is None or not os.path.isfile(file_path):
            return "File not found", 404
        return send_from_directory(
            os.path.dirname(file_path), os.path.basename(file_path), as_attachment=True
        )

    @bp.route("/download-folder/<path:folder>")
    def download_folder(folder):
        folder_path = storage.resolve(folder)
        if folder_path is None or not os.path.isdir(folder_path):
            return "Folder not found", 404
        try:
            archive = storage.build_folder_archive(folder_path)
        except OSError as e:
            logger.error("Error archiving %s: %s", folder, e)
            return "Unable to create archive", 500
        return send_file(
            archive,
            mimetype=ARCHIVE_MIMETYPE,
            as_attachment=True,
            download_name=archive_filename(os.path.basename(folder_path)),
        )

    @bp.route("/delete", methods=["POST"])
    def delete():
        target = request.form.get("target")
        if not target:
            return "Target required", 400
        target_path = storage.resolve_entry(target)
        if target_path is None or not os.path.lexists(target_path):
            return "Not found", 404
        if storage.is_root(target_path):
            return "Invalid target", 400
        parent = storage.parent_relative(target_path)
        try:
            storage.delete_entry(target_path)
        except FileNotFoundError:
            # Removed by a concurrent request after the existence check
            return "Not found", 404
        except OSError as e:
            logger.error("Error deleting %s: %s", target, e)
            return "Delete failed", 500
        return _listing_redirect(parent)

    return bp
