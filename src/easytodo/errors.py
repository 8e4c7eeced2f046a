"""Exception hierarchy for the task store and its collaborators."""


class TaskStoreError(Exception):
    """Base class for all easytodo errors."""


class PersistenceError(TaskStoreError):
    """The task collection could not be persisted or read back."""


class SerializationError(PersistenceError):
    """The task collection could not be encoded for persistence."""


class StorageReadError(PersistenceError):
    """The underlying settings store could not be read."""


class CorruptStorageError(StorageReadError):
    """The settings store was read but its contents are not valid."""


class StorageWriteError(PersistenceError):
    """The underlying settings store could not be written."""


class TaskNotFoundError(TaskStoreError):
    """No task with the given id exists in the store."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class DuplicateTaskError(TaskStoreError):
    """A task with the same id is already in the store."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task already exists: {task_id}")
        self.task_id = task_id


class InvalidTitleError(TaskStoreError, ValueError):
    """Task titles must contain at least one non-whitespace character."""

    def __init__(self, message: str = "Task title must not be empty") -> None:
        super().__init__(message)
