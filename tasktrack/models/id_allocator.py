from typing import Iterable

from tasktrack.models.task_model import TaskRecord, parse_category


def next_task_id(category, tasks: Iterable[TaskRecord]) -> str:
    """Return the next sequential id for ``category``.

    The suffix is one past the largest numeric suffix among ids with the
    category prefix, zero-padded to two digits. Ids freed below the highest
    surviving one stay unused; deleting the highest id frees it again, since
    only surviving ids are scanned. Two callers racing on the same
    collection can get the same id.
    """
    prefix = parse_category(category).prefix
    highest = 0
    for task in tasks:
        task_id = task.task_id or ""
        if not task_id.startswith(prefix):
            continue
        suffix = task_id[len(prefix):]
        if not suffix.isdigit():
            continue
        highest = max(highest, int(suffix))
    return f"{prefix}{highest + 1:02d}"
