class TaskTrackerError(Exception):
    """Base class for task tracker failures."""


class TaskValidationError(TaskTrackerError):
    """A task record is missing a required field or has no known category."""


class TaskPersistenceError(TaskTrackerError):
    """The task collection could not be written to disk."""
