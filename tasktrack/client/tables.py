"""Table views of the task list, as the tracker page renders them.

Tasks here are the JSON dicts the API returns. Functional and technical
tasks are told apart by their id prefix only.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from tasktrack.models.task_model import TaskCategory

logger = logging.getLogger(__name__)

Task = Dict[str, Any]


@dataclass(frozen=True)
class DocumentLink:
    name: str
    url: str


Cell = Union[str, DocumentLink, None]


def _has_prefix(task: Task, prefix: str) -> bool:
    return bool(task.get("taskId")) and task["taskId"].startswith(prefix)


def partition_tasks(tasks: List[Task]) -> Tuple[List[Task], List[Task]]:
    functional = [t for t in tasks if _has_prefix(t, TaskCategory.FUNCTIONAL.prefix)]
    technical = [t for t in tasks if _has_prefix(t, TaskCategory.TECHNICAL.prefix)]
    return functional, technical


def document_cell(task: Task, base_url: str) -> Cell:
    key = task.get("taskDocumentationKey")
    if not key:
        return ""
    name = task.get("taskDocumentationName") or key
    return DocumentLink(name=name, url=f"{base_url.rstrip('/')}/download/{key}")


def functional_rows(tasks: List[Task], base_url: str = "") -> List[List[Cell]]:
    functional, _ = partition_tasks(tasks)
    return [
        [
            t.get("taskId"),
            t.get("project"),
            t.get("taskName"),
            t.get("taskDescription"),
            document_cell(t, base_url),
            t.get("responsiblePerson"),
            t.get("internalDeadline"),
            t.get("userDeadline"),
            t.get("status"),
            t.get("changingStatusDate"),
        ]
        for t in functional
    ]


def technical_rows(tasks: List[Task]) -> List[List[Cell]]:
    _, technical = partition_tasks(tasks)
    return [
        [
            t.get("taskId"),
            t.get("functionalTaskId"),
            t.get("responsiblePerson"),
            t.get("estimateDeadline"),
            t.get("status"),
            t.get("changingStatusDate"),
        ]
        for t in technical
    ]


def functional_id_options(tasks: List[Task]) -> List[str]:
    """Ids offered in the technical form's parent-task dropdown."""
    functional, _ = partition_tasks(tasks)
    return [t["taskId"] for t in functional]


class TaskBoard:
    """Client-side copy of the task list and the views built from it.

    Every refresh reloads from the server; when loading fails the previous
    views stay in place.
    """

    def __init__(self, client):
        self.client = client
        self.tasks: List[Task] = []
        self.functional: List[List[Cell]] = []
        self.technical: List[List[Cell]] = []
        self.functional_ids: List[str] = []

    def refresh(self) -> None:
        tasks = self.client.load_tasks()
        if tasks is None:
            logger.warning("Could not refresh tasks, keeping %d cached tasks", len(self.tasks))
            return
        self.tasks = tasks
        self._rebuild()

    def add(self, category: str, fields: Dict[str, Any], document: Optional[str] = None) -> Optional[Task]:
        saved = self.client.create_task(category, fields, document=document)
        if saved is None:
            return None
        self.tasks.append(saved)
        self._rebuild()
        self.refresh()
        return saved

    def delete(self, task_id: str) -> bool:
        if not self.client.delete_task(task_id):
            return False
        self.tasks = [t for t in self.tasks if t.get("taskId") != task_id]
        self._rebuild()
        self.refresh()
        return True

    def _rebuild(self) -> None:
        self.functional = functional_rows(self.tasks, self.client.base_url)
        self.technical = technical_rows(self.tasks)
        self.functional_ids = functional_id_options(self.tasks)
