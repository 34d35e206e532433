import json
import logging
import os
import random
import time
from typing import Any, Dict, List, Optional

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from tasktrack.errors import TaskPersistenceError
from tasktrack.models.task_model import TaskDocument

logger = logging.getLogger(__name__)


class JsonFilePersistence:
    """Keeps the whole task collection in one JSON document on disk."""

    def __init__(self, path: str):
        self.path = path

    def load(self) -> List[Dict[str, Any]]:
        if not os.path.exists(self.path):
            logger.info("No tasks file at %s, starting empty", self.path)
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            logger.error("Error reading tasks file %s: %s", self.path, exc)
            return []
        if not isinstance(data, list):
            logger.error("Tasks file %s does not hold a list, ignoring it", self.path)
            return []
        return data

    def save(self, records: List[Dict[str, Any]]) -> None:
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as fh:
                json.dump(records, fh, indent=2)
        except OSError as exc:
            raise TaskPersistenceError(f"Could not write {self.path}: {exc}") from exc
        logger.info("Tasks saved to %s", self.path)


class UploadStorage:
    """Stores uploaded task documents under a fixed directory.

    Each file is saved as ``<millis>-<random>_<original name>`` so two
    uploads with the same name never collide.
    """

    def __init__(self, folder: str):
        self.folder = os.path.abspath(folder)
        os.makedirs(self.folder, exist_ok=True)

    def save(self, upload: Optional[FileStorage]) -> Optional[TaskDocument]:
        if upload is None or not upload.filename:
            return None
        original_name = upload.filename
        safe_name = secure_filename(original_name) or "document"
        unique = f"{int(time.time() * 1000)}-{random.randint(0, 10 ** 9)}"
        key = f"{unique}_{safe_name}"
        try:
            upload.save(os.path.join(self.folder, key))
        except OSError as exc:
            raise TaskPersistenceError(f"Could not store upload {original_name!r}: {exc}") from exc
        logger.info("Stored upload %r as %s", original_name, key)
        return TaskDocument(key=key, name=original_name)

    def exists(self, key: str) -> bool:
        safe_key = secure_filename(key)
        return bool(safe_key) and safe_key == key and os.path.isfile(os.path.join(self.folder, key))

    def remove(self, document: Optional[TaskDocument]) -> None:
        if document is None:
            return
        try:
            os.remove(os.path.join(self.folder, document.key))
        except FileNotFoundError:
            return
        logger.info("Removed upload %s", document.key)
