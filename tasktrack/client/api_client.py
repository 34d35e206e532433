"""HTTP client for the task tracker API.

Mirrors what the browser page does: every failure is caught here, logged,
and turned into an empty result so callers keep their current state.
"""

import logging
import os
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)


class TaskClient:
    def __init__(self, base_url: str = "http://localhost:3000", session: Optional[requests.Session] = None,
                 timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def list_tasks(self) -> List[Dict[str, Any]]:
        tasks = self.load_tasks()
        return tasks if tasks is not None else []

    def load_tasks(self) -> Optional[List[Dict[str, Any]]]:
        """Like list_tasks, but returns None when the list could not be loaded."""
        try:
            resp = self.session.get(f"{self.base_url}/tasks", timeout=self.timeout)
            resp.raise_for_status()
            tasks = resp.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("Error loading tasks: %s", exc)
            return None
        return tasks

    def create_task(self, category: str, fields: Dict[str, Any], document: Optional[str] = None
                    ) -> Optional[Dict[str, Any]]:
        """Submit a task as multipart form data.

        ``document`` is an optional path to a file sent as
        ``taskDocumentation``. Returns the stored record, or ``None`` on
        failure.
        """
        data = {k: v for k, v in fields.items() if v is not None}
        data["category"] = category
        try:
            if document:
                with open(document, "rb") as fh:
                    files = {"taskDocumentation": (os.path.basename(document), fh)}
                    resp = self.session.post(
                        f"{self.base_url}/tasks", data=data, files=files, timeout=self.timeout
                    )
            else:
                resp = self.session.post(f"{self.base_url}/tasks", data=data, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except (OSError, ValueError) as exc:
            # requests.RequestException is an OSError subclass.
            logger.error("Error saving task: %s", exc)
            return None

    def delete_task(self, task_id: str) -> bool:
        try:
            resp = self.session.delete(f"{self.base_url}/tasks/{task_id}", timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("Error deleting task: %s", exc)
            return False
        if not resp.ok:
            logger.error("Failed to delete task %s: %s", task_id, resp.reason)
            return False
        logger.info("Task %s deleted successfully.", task_id)
        return True

    def download_url(self, file_key: str) -> str:
        return f"{self.base_url}/download/{file_key}"

    def download(self, file_key: str, dest: str) -> bool:
        """Save a stored document to ``dest``; returns False if it could not be fetched."""
        try:
            with self.session.get(self.download_url(file_key), stream=True, timeout=self.timeout) as resp:
                resp.raise_for_status()
                with open(dest, "wb") as fh:
                    for chunk in resp.iter_content(chunk_size=8192):
                        fh.write(chunk)
        except OSError as exc:
            logger.error("Error downloading file %s: %s", file_key, exc)
            return False
        return True
