"""Pending/completed projection of the task store.

The projector is the view-model for a single to-do screen. It keeps three
views over the store's contents, each sorted newest first:

- all: every task
- pending: tasks with is_completed False
- completed: tasks with is_completed True

Every public operation ends with exactly one observer notification
carrying a RefreshResult. Views are recomputed from one fetch of the full
collection, so pending and completed always partition all. On failure the
views keep their last-known contents.

Example:
    >>> projector = TaskListProjector(store, observer=print)
    >>> projector.add_task("Buy milk")
    >>> [t.title for t in projector.pending]
    ['Buy milk']
"""

from dataclasses import dataclass
from typing import Any, Callable, Generator, Iterable

from easytodo.errors import TaskNotFoundError, TaskStoreError
from easytodo.logging import Loggers
from easytodo.tasks.models import Task
from easytodo.tasks.repository import (
    AsyncTaskRepository,
    TaskRepository,
    UpdateResult,
)

logger = Loggers.projector()

SECTION_TITLES = ("Pending Tasks", "Completed Tasks")


@dataclass(frozen=True)
class RefreshResult:
    """Outcome passed to the observer after each operation."""

    ok: bool
    error: Exception | None = None

    @classmethod
    def success(cls) -> "RefreshResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: Exception) -> "RefreshResult":
        return cls(ok=False, error=error)

    @property
    def message(self) -> str:
        """Human-readable description, empty on success."""
        if self.error is None:
            return ""
        return str(self.error) or type(self.error).__name__


Observer = Callable[[RefreshResult], None]

# A store call, yielded as (repository method name, *args)
StoreCall = tuple[Any, ...]
Steps = Generator[StoreCall, Any, RefreshResult]


@dataclass(frozen=True)
class TaskProjection:
    """Immutable snapshot of the three views."""

    all: tuple[Task, ...] = ()
    pending: tuple[Task, ...] = ()
    completed: tuple[Task, ...] = ()


def sort_newest_first(tasks: Iterable[Task]) -> tuple[Task, ...]:
    """Sort by created_at descending. Ties keep their stored order."""
    return tuple(sorted(tasks, key=lambda t: t.created_at, reverse=True))


def project_tasks(tasks: Iterable[Task]) -> TaskProjection:
    """Partition tasks into pending and completed, each newest first."""
    ordered = sort_newest_first(tasks)
    return TaskProjection(
        all=ordered,
        pending=tuple(t for t in ordered if not t.is_completed),
        completed=tuple(t for t in ordered if t.is_completed),
    )


class _ProjectorState:
    """View state and notification plumbing shared by both projectors."""

    def __init__(self, observer: Observer | None = None) -> None:
        self.observer = observer
        self._projection = TaskProjection()

    @property
    def projection(self) -> TaskProjection:
        return self._projection

    @property
    def all(self) -> tuple[Task, ...]:
        return self._projection.all

    @property
    def pending(self) -> tuple[Task, ...]:
        return self._projection.pending

    @property
    def completed(self) -> tuple[Task, ...]:
        return self._projection.completed

    @property
    def sections(self) -> list[tuple[str, tuple[Task, ...]]]:
        """The two table sections: pending first, then completed."""
        return [
            (SECTION_TITLES[0], self.pending),
            (SECTION_TITLES[1], self.completed),
        ]

    def task_at(self, section: int, index: int) -> Task:
        """Return the task shown at (section, index).

        Raises:
            IndexError: If the section or row does not exist.
        """
        if section not in (0, 1):
            raise IndexError(f"No such section: {section}")
        return self.sections[section][1][index]

    def set_observer(self, observer: Observer | None) -> None:
        self.observer = observer

    def _publish(self, tasks: Iterable[Task]) -> None:
        self._projection = project_tasks(tasks)
        logger.debug(
            "projection_refreshed",
            pending=len(self._projection.pending),
            completed=len(self._projection.completed),
        )

    def _finish(self, operation: str, result: RefreshResult) -> RefreshResult:
        if not result.ok:
            logger.warning("projection_failed", operation=operation, error=result.message)
        if self.observer is not None:
            self.observer(result)
        return result

    # Operations are generators yielding store calls as (method name, *args).
    # The projector subclasses drive them, blocking or awaiting each call and
    # throwing TaskStoreError back in at the yield that issued it.

    def _reload_steps(self) -> Steps:
        try:
            tasks = yield ("get_all_tasks",)
        except TaskStoreError as e:
            return RefreshResult.failure(e)
        self._publish(tasks)
        return RefreshResult.success()

    def _refresh_steps(self) -> Steps:
        result = yield from self._reload_steps()
        return self._finish("refresh", result)

    def _add_steps(self, title: str) -> Steps:
        try:
            task = Task.create(title)
            yield ("add_task", task)
        except TaskStoreError as e:
            return self._finish("add", RefreshResult.failure(e))
        result = yield from self._reload_steps()
        return self._finish("add", result)

    def _toggle_steps(self, task: Task) -> Steps:
        try:
            outcome = yield ("update_task", task.toggled())
        except TaskStoreError as e:
            return self._finish("toggle", RefreshResult.failure(e))
        result = yield from self._reload_steps()
        if result.ok and outcome is UpdateResult.NOT_FOUND:
            result = RefreshResult.failure(TaskNotFoundError(task.id))
        return self._finish("toggle", result)

    def _delete_steps(self, task: Task) -> Steps:
        try:
            yield ("remove_task", task)
        except TaskStoreError as e:
            return self._finish("delete", RefreshResult.failure(e))
        result = yield from self._reload_steps()
        return self._finish("delete", result)


class TaskListProjector(_ProjectorState):
    """Projector over a blocking TaskRepository."""

    def __init__(
        self,
        repository: TaskRepository,
        observer: Observer | None = None,
        auto_refresh: bool = True,
    ) -> None:
        """Initialize the projector.

        Args:
            repository: Store to read from and write to.
            observer: Called once per operation with its RefreshResult.
            auto_refresh: Load the views immediately (notifies the observer).
        """
        super().__init__(observer)
        self._repository = repository
        if auto_refresh:
            self.refresh()

    def _run(self, steps: Steps) -> RefreshResult:
        value: Any = None
        error: TaskStoreError | None = None
        while True:
            try:
                call = steps.throw(error) if error is not None else steps.send(value)
            except StopIteration as stop:
                return stop.value
            value, error = None, None
            try:
                value = getattr(self._repository, call[0])(*call[1:])
            except TaskStoreError as e:
                error = e

    def refresh(self) -> RefreshResult:
        """Re-fetch all tasks, rebuild the views, and notify."""
        return self._run(self._refresh_steps())

    def add_task(self, title: str) -> RefreshResult:
        """Create a pending task from title and refresh.

        Empty or whitespace-only titles are rejected without touching the
        store; the observer receives a failure carrying InvalidTitleError.
        """
        return self._run(self._add_steps(title))

    def toggle_completion(self, task: Task) -> RefreshResult:
        """Flip a task's completion flag, persist, and refresh.

        If the task no longer exists the views are still refreshed, but the
        observer receives a failure carrying TaskNotFoundError.
        """
        return self._run(self._toggle_steps(task))

    def delete_task(self, task: Task) -> RefreshResult:
        """Remove a task and refresh. Deleting a missing task succeeds."""
        return self._run(self._delete_steps(task))


class AsyncTaskListProjector(_ProjectorState):
    """Projector over an AsyncTaskRepository.

    Same contract as TaskListProjector with awaitable operations. There is
    no implicit initial load; use create() or await refresh().
    """

    def __init__(
        self,
        repository: AsyncTaskRepository,
        observer: Observer | None = None,
    ) -> None:
        super().__init__(observer)
        self._repository = repository

    @classmethod
    async def create(
        cls,
        repository: AsyncTaskRepository,
        observer: Observer | None = None,
    ) -> "AsyncTaskListProjector":
        """Build a projector and perform the initial refresh."""
        projector = cls(repository, observer)
        await projector.refresh()
        return projector

    async def _run(self, steps: Steps) -> RefreshResult:
        value: Any = None
        error: TaskStoreError | None = None
        while True:
            try:
                call = steps.throw(error) if error is not None else steps.send(value)
            except StopIteration as stop:
                return stop.value
            value, error = None, None
            try:
                value = await getattr(self._repository, call[0])(*call[1:])
            except TaskStoreError as e:
                error = e

    async def refresh(self) -> RefreshResult:
        return await self._run(self._refresh_steps())

    async def add_task(self, title: str) -> RefreshResult:
        return await self._run(self._add_steps(title))

    async def toggle_completion(self, task: Task) -> RefreshResult:
        return await self._run(self._toggle_steps(task))

    async def delete_task(self, task: Task) -> RefreshResult:
        return await self._run(self._delete_steps(task))
