from flask import Blueprint, current_app, jsonify, send_from_directory

from tasktrack.utils.db import get_store, get_uploads


downloads_bp = Blueprint("downloads", __name__)


@downloads_bp.get("/<file_key>")
def download(file_key):
    uploads = get_uploads()
    if not uploads.exists(file_key):
        current_app.logger.error("Error accessing file: %s", file_key)
        return jsonify(error="File not found"), 404

    owner = get_store().find_by_document_key(file_key)
    download_name = owner.document.name if owner else file_key
    return send_from_directory(
        uploads.folder, file_key, as_attachment=True, download_name=download_name
    )
