import logging
from dataclasses import replace
from typing import List, Optional

from tasktrack.errors import TaskValidationError
from tasktrack.models.id_allocator import next_task_id
from tasktrack.models.task_model import TaskRecord, parse_category, task_from_dict

logger = logging.getLogger(__name__)


class TaskStore:
    """In-memory task collection mirrored to a persistence backend.

    The backend needs ``load() -> list[dict]`` and ``save(list[dict])``.
    The whole collection is rewritten after every mutation. There is no
    locking: concurrent creates can be given the same id, and the last
    write wins.
    """

    def __init__(self, persistence):
        self._persistence = persistence
        self._tasks: List[TaskRecord] = []
        for raw in persistence.load():
            try:
                self._tasks.append(task_from_dict(raw))
            except (TaskValidationError, AttributeError, TypeError) as exc:
                # Unknown prefix or not an object; missing fields are kept.
                logger.warning("Skipping unreadable task entry %r: %s", raw, exc)
        logger.info("TaskStore ready total=%s", len(self._tasks))

    def list(self) -> List[TaskRecord]:
        return list(self._tasks)

    def list_by_category(self, category) -> List[TaskRecord]:
        prefix = parse_category(category).prefix
        return [t for t in self._tasks if t.task_id.startswith(prefix)]

    def get(self, task_id: str) -> Optional[TaskRecord]:
        for task in self._tasks:
            if task.task_id == task_id:
                return task
        return None

    def find_by_document_key(self, key: str) -> Optional[TaskRecord]:
        for task in self._tasks:
            if task.document is not None and task.document.key == key:
                return task
        return None

    def create(self, record: TaskRecord) -> TaskRecord:
        """Assign the next id for the record's category, append and persist.

        Any id already set on ``record`` is ignored. If the write fails the
        collection is left as it was and ``TaskPersistenceError`` propagates.
        """
        record.validate()
        task = replace(record, task_id=next_task_id(record.category, self._tasks))
        updated = self._tasks + [task]
        self._save(updated)
        self._tasks = updated
        logger.info("Task %s created", task.task_id)
        return task

    def delete_by_id(self, task_id: str) -> bool:
        """Remove the task with exactly this id; a missing id is not an error."""
        remaining = [t for t in self._tasks if t.task_id != task_id]
        removed = len(remaining) != len(self._tasks)
        self._save(remaining)
        self._tasks = remaining
        if removed:
            logger.info("Task %s deleted", task_id)
        else:
            logger.info("Delete requested for unknown task %s", task_id)
        return removed

    def _save(self, tasks: List[TaskRecord]) -> None:
        self._persistence.save([t.to_dict() for t in tasks])
