from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional

from tasktrack.errors import TaskValidationError


class TaskCategory(str, Enum):
    FUNCTIONAL = "FT"
    TECHNICAL = "TT"

    @property
    def prefix(self) -> str:
        return self.value


_CATEGORY_ALIASES = {
    "ft": TaskCategory.FUNCTIONAL,
    "functional": TaskCategory.FUNCTIONAL,
    "tt": TaskCategory.TECHNICAL,
    "technical": TaskCategory.TECHNICAL,
}


def parse_category(value) -> TaskCategory:
    """Resolve a category from an enum, a name, a prefix or a task id."""
    if isinstance(value, TaskCategory):
        return value
    if not isinstance(value, str):
        raise TaskValidationError(f"Unknown task category: {value!r}")
    text = value.strip()
    category = _CATEGORY_ALIASES.get(text.lower())
    if category is None:
        # Fall back to the prefix of an id such as "FT03".
        category = _CATEGORY_ALIASES.get(text[:2].lower()) if len(text) > 2 else None
    if category is None:
        raise TaskValidationError(f"Unknown task category: {value!r}")
    return category


@dataclass(frozen=True)
class TaskDocument:
    key: str  # stored filename under the upload folder
    name: str  # original filename shown to the user


# Attribute name -> wire name used by the browser client and tasks.json.
WIRE_NAMES = {
    "task_id": "taskId",
    "project": "project",
    "task_name": "taskName",
    "task_description": "taskDescription",
    "responsible_person": "responsiblePerson",
    "internal_deadline": "internalDeadline",
    "user_deadline": "userDeadline",
    "status": "status",
    "changing_status_date": "changingStatusDate",
    "functional_task_id": "functionalTaskId",
    "estimate_deadline": "estimateDeadline",
}


@dataclass(frozen=True)
class TaskRecord:
    """Fields shared by both task categories.

    Records are immutable; the store assigns ``task_id`` with
    ``dataclasses.replace`` when the record is created. Construction does
    not check required fields, so records read back from disk load as
    saved; ``validate`` runs on new records only.
    """

    category = None  # set by subclasses
    required = ("responsible_person", "status")

    task_id: str = ""
    project: Optional[str] = None
    task_name: Optional[str] = None
    task_description: Optional[str] = None
    responsible_person: Optional[str] = None
    internal_deadline: Optional[str] = None
    user_deadline: Optional[str] = None
    status: Optional[str] = None
    changing_status_date: Optional[str] = None
    document: Optional[TaskDocument] = None

    def validate(self) -> None:
        missing = [
            name for name in self.required
            if not str(getattr(self, name) or "").strip()
        ]
        if missing:
            wire = ", ".join(WIRE_NAMES[name] for name in missing)
            raise TaskValidationError(f"Missing required field(s): {wire}")

    def to_dict(self) -> Dict[str, Any]:
        data = {}
        for f in fields(self):
            if f.name == "document":
                continue
            data[WIRE_NAMES[f.name]] = getattr(self, f.name)
        data["taskDocumentationName"] = self.document.name if self.document else None
        data["taskDocumentationKey"] = self.document.key if self.document else None
        return data


@dataclass(frozen=True)
class FunctionalTask(TaskRecord):
    category = TaskCategory.FUNCTIONAL
    required = ("task_name", "responsible_person", "status")


@dataclass(frozen=True)
class TechnicalTask(TaskRecord):
    category = TaskCategory.TECHNICAL

    functional_task_id: Optional[str] = None  # parent FT, optional
    estimate_deadline: Optional[str] = None


TASK_TYPES = {
    TaskCategory.FUNCTIONAL: FunctionalTask,
    TaskCategory.TECHNICAL: TechnicalTask,
}


def build_task(category, data: Dict[str, Any], document: Optional[TaskDocument] = None,
               validate: bool = True) -> TaskRecord:
    """Build a typed record from wire-named ``data``.

    Unknown keys are ignored. Empty strings are stored as ``None`` so an
    unset form field and a missing one look the same. Missing required
    fields raise ``TaskValidationError`` unless ``validate`` is off.
    """
    task_type = TASK_TYPES[parse_category(category)]
    kwargs = {}
    for f in fields(task_type):
        if f.name == "document":
            continue
        value = data.get(WIRE_NAMES[f.name])
        if isinstance(value, str):
            value = value.strip() or None
        kwargs[f.name] = value
    kwargs["task_id"] = kwargs["task_id"] or ""
    task = task_type(document=document, **kwargs)
    if validate:
        task.validate()
    return task


def task_from_dict(data: Dict[str, Any]) -> TaskRecord:
    """Rebuild a persisted record; the category comes from its id prefix.

    Required fields are not checked: records saved before validation
    existed must survive a reload.
    """
    task_id = data.get("taskId") or ""
    document = None
    if data.get("taskDocumentationKey"):
        document = TaskDocument(
            key=data["taskDocumentationKey"],
            name=data.get("taskDocumentationName") or data["taskDocumentationKey"],
        )
    return build_task(parse_category(task_id), data, document=document, validate=False)

