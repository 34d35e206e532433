from flask import current_app

from tasktrack.models.task_store import TaskStore
from tasktrack.utils.storage import JsonFilePersistence, UploadStorage


def init_app(app):
    """Create the task store and upload storage for ``app``."""
    store = TaskStore(JsonFilePersistence(app.config["TASKS_FILE"]))
    uploads = UploadStorage(app.config["UPLOAD_FOLDER"])
    app.extensions["task_store"] = store
    app.extensions["task_uploads"] = uploads
    app.logger.info(
        "Task data at %s, uploads in %s", app.config["TASKS_FILE"], app.config["UPLOAD_FOLDER"]
    )


def get_store() -> TaskStore:
    return current_app.extensions["task_store"]


def get_uploads() -> UploadStorage:
    return current_app.extensions["task_uploads"]
