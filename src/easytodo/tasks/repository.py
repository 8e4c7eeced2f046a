"""Repository interfaces the projector depends on."""

from enum import Enum
from typing import Protocol, runtime_checkable

from easytodo.tasks.models import Task


class UpdateResult(str, Enum):
    """Outcome of an update targeting a task id."""

    UPDATED = "updated"
    NOT_FOUND = "not_found"


@runtime_checkable
class TaskRepository(Protocol):
    """Blocking CRUD over the complete task collection."""

    def add_task(self, task: Task) -> None: ...

    def remove_task(self, task: Task) -> bool: ...

    def update_task(self, task: Task) -> UpdateResult: ...

    def get_all_tasks(self) -> list[Task]: ...

    def get_tasks_by_status(self, is_completed: bool) -> list[Task]: ...


@runtime_checkable
class AsyncTaskRepository(Protocol):
    """Awaitable counterpart of TaskRepository."""

    async def add_task(self, task: Task) -> None: ...

    async def remove_task(self, task: Task) -> bool: ...

    async def update_task(self, task: Task) -> UpdateResult: ...

    async def get_all_tasks(self) -> list[Task]: ...

    async def get_tasks_by_status(self, is_completed: bool) -> list[Task]: ...
