"""To-do task storage and the pending/completed projection.

Example:
    >>> store = create_task_store()
    >>> projector = TaskListProjector(store, observer=on_change)
    >>> projector.add_task("Buy milk")
    >>> projector.toggle_completion(projector.pending[0])
"""

from easytodo.tasks.models import Task, decode_tasks, encode_tasks
from easytodo.tasks.projector import (
    AsyncTaskListProjector,
    RefreshResult,
    TaskListProjector,
    TaskProjection,
    project_tasks,
)
from easytodo.tasks.repository import AsyncTaskRepository, TaskRepository, UpdateResult
from easytodo.tasks.store import AsyncTaskStore, TaskStore, create_task_store

__all__ = [
    "AsyncTaskListProjector",
    "AsyncTaskRepository",
    "AsyncTaskStore",
    "RefreshResult",
    "Task",
    "TaskListProjector",
    "TaskProjection",
    "TaskRepository",
    "TaskStore",
    "UpdateResult",
    "create_task_store",
    "decode_tasks",
    "encode_tasks",
    "project_tasks",
]
