"""easytodo - a persisted to-do list core.

This package provides the non-visual half of a single-screen to-do app:

- Task model with JSON encoding
- TaskStore persisting the whole list into a key-value settings store
- TaskListProjector exposing pending/completed views to a presentation layer
- Settings (pydantic-settings) and structured logging (structlog)
"""

from easytodo.config import (
    Settings,
    SettingsContext,
    get_context_settings,
    get_settings,
    reload_settings,
    set_context_settings,
    set_settings,
)
from easytodo.errors import (
    DuplicateTaskError,
    InvalidTitleError,
    PersistenceError,
    SerializationError,
    CorruptStorageError,
    StorageReadError,
    StorageWriteError,
    TaskNotFoundError,
    TaskStoreError,
)
from easytodo.logging import configure_logging
from easytodo.persistence import JsonFileSettingsStore, MemorySettingsStore
from easytodo.tasks import (
    AsyncTaskListProjector,
    AsyncTaskStore,
    RefreshResult,
    Task,
    TaskListProjector,
    TaskStore,
    UpdateResult,
    create_task_store,
)

__version__ = "0.1.0"

__all__ = [
    # Tasks
    "Task",
    "TaskStore",
    "AsyncTaskStore",
    "TaskListProjector",
    "AsyncTaskListProjector",
    "RefreshResult",
    "UpdateResult",
    "create_task_store",
    # Persistence
    "JsonFileSettingsStore",
    "MemorySettingsStore",
    # Errors
    "TaskStoreError",
    "PersistenceError",
    "SerializationError",
    "StorageReadError",
    "CorruptStorageError",
    "StorageWriteError",
    "TaskNotFoundError",
    "DuplicateTaskError",
    "InvalidTitleError",
    # Settings
    "Settings",
    "SettingsContext",
    "get_settings",
    "set_settings",
    "set_context_settings",
    "get_context_settings",
    "reload_settings",
    # Logging
    "configure_logging",
]
