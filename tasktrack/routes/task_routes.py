from flask import Blueprint, current_app, jsonify, request

from tasktrack.errors import TaskPersistenceError, TaskValidationError
from tasktrack.models.task_model import build_task, parse_category
from tasktrack.utils.db import get_store, get_uploads


tasks_bp = Blueprint("tasks", __name__)


@tasks_bp.get("")
def list_tasks():
    store = get_store()
    category = request.args.get("category")
    if category:
        try:
            tasks = store.list_by_category(category)
        except TaskValidationError as exc:
            return jsonify(error=str(exc)), 400
    else:
        tasks = store.list()
    return jsonify([t.to_dict() for t in tasks]), 200


@tasks_bp.post("")
def create_task():
    # Browser forms post multipart data; JSON bodies are accepted too.
    if request.form:
        payload = request.form.to_dict()
    else:
        payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return jsonify(error="Task body must be an object"), 400

    raw_category = payload.get("category") or payload.get("taskId")
    if not raw_category:
        return jsonify(error="Task category is required"), 400

    try:
        category = parse_category(raw_category)
        # Validate before touching the upload folder.
        build_task(category, payload)
    except TaskValidationError as exc:
        return jsonify(error=str(exc)), 400

    uploads = get_uploads()
    document = uploads.save(request.files.get("taskDocumentation"))
    try:
        task = get_store().create(build_task(category, payload, document=document))
    except TaskPersistenceError:
        # No record will point at the upload.
        uploads.remove(document)
        raise
    current_app.logger.info(
        "Created %s (document=%s)", task.task_id, document.key if document else None
    )
    return jsonify(task.to_dict()), 201


@tasks_bp.delete("/<task_id>")
def delete_task(task_id):
    get_store().delete_by_id(task_id)
    return "", 204
