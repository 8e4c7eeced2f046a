"""Task store backed by a flat key-value settings store.

The whole collection is serialized as one JSON value under a fixed key
and rewritten on every mutation. Mutations are atomic: the in-memory
collection is only replaced after the write succeeded.

Example:
    >>> store = TaskStore(MemorySettingsStore())
    >>> task = Task.create("Buy milk")
    >>> store.add_task(task)
    >>> store.update_task(task.toggled())
    <UpdateResult.UPDATED: 'updated'>
    >>> [t.title for t in store.get_tasks_by_status(is_completed=True)]
    ['Buy milk']
"""

import asyncio
import functools
import threading
from typing import Any, Callable, TypeVar

from easytodo.config import Settings, get_settings
from easytodo.errors import (
    DuplicateTaskError,
    PersistenceError,
    SerializationError,
    StorageWriteError,
)
from easytodo.logging import Loggers, ensure_logging
from easytodo.persistence.settings_store import SettingsStore, create_settings_store
from easytodo.tasks.models import Task, decode_tasks, encode_tasks
from easytodo.tasks.repository import UpdateResult

logger = Loggers.store()

T = TypeVar("T")

DEFAULT_TASKS_KEY = "TodoItems"


class TaskStore:
    """Durable CRUD over the complete task collection.

    All operations are serialized behind a re-entrant lock, so a single
    store may be shared between threads. Reads return copies; callers never
    see the store's internal list.
    """

    def __init__(
        self,
        settings_store: SettingsStore,
        key: str = DEFAULT_TASKS_KEY,
    ) -> None:
        """Initialize the store and load any persisted tasks.

        Args:
            settings_store: Key-value area holding the serialized list.
            key: Key the list is stored under.
        """
        self._settings_store = settings_store
        self._key = key
        self._lock = threading.RLock()
        self._items: list[Task] = self._load()
        logger.info("task_store_ready", key=key, total=len(self._items))

    @property
    def key(self) -> str:
        return self._key

    def _load(self) -> list[Task]:
        """Read the persisted collection, treating any failure as empty."""
        try:
            raw = self._settings_store.get(self._key)
        except (PersistenceError, OSError) as e:
            logger.warning("tasks_load_failed", key=self._key, error=str(e))
            return []
        if raw is None:
            return []
        try:
            tasks = decode_tasks(raw)
        except SerializationError as e:
            logger.warning("tasks_load_failed", key=self._key, error=str(e))
            return []

        seen: set[str] = set()
        unique: list[Task] = []
        for task in tasks:
            if task.id in seen:
                logger.warning("duplicate_task_dropped", task_id=task.id)
                continue
            seen.add(task.id)
            unique.append(task)
        return unique

    def _save(self, tasks: list[Task]) -> None:
        """Persist the given collection, then make it the current one."""
        raw = encode_tasks(tasks)
        try:
            self._settings_store.set(self._key, raw)
        except OSError as e:
            raise StorageWriteError(f"Cannot persist tasks: {e}") from e
        self._items = tasks

    def reload(self) -> None:
        """Discard the in-memory copy and re-read the persisted collection."""
        with self._lock:
            self._items = self._load()

    def add_task(self, task: Task) -> None:
        """Append a task and persist the collection.

        Raises:
            DuplicateTaskError: If a task with the same id is present.
            PersistenceError: If encoding or writing fails. The collection
                is left unchanged.
        """
        with self._lock:
            if any(t.id == task.id for t in self._items):
                raise DuplicateTaskError(task.id)
            self._save([*self._items, task])
        logger.debug("task_added", task_id=task.id)

    def remove_task(self, task: Task) -> bool:
        """Remove every task matching task.id and persist.

        Returns:
            True if anything was removed. A missing id is not an error.
        """
        with self._lock:
            remaining = [t for t in self._items if t.id != task.id]
            if len(remaining) == len(self._items):
                logger.debug("task_remove_missing", task_id=task.id)
                return False
            self._save(remaining)
        logger.debug("task_removed", task_id=task.id)
        return True

    def update_task(self, task: Task) -> UpdateResult:
        """Replace the task matching task.id and persist.

        Returns:
            UpdateResult.NOT_FOUND (nothing written) if no task has that id.
        """
        with self._lock:
            for index, existing in enumerate(self._items):
                if existing.id == task.id:
                    updated = list(self._items)
                    updated[index] = task
                    self._save(updated)
                    break
            else:
                logger.info("task_update_missing", task_id=task.id)
                return UpdateResult.NOT_FOUND
        logger.debug("task_updated", task_id=task.id, is_completed=task.is_completed)
        return UpdateResult.UPDATED

    def get_all_tasks(self) -> list[Task]:
        """Return all tasks in stored order."""
        with self._lock:
            return list(self._items)

    def get_tasks_by_status(self, is_completed: bool) -> list[Task]:
        """Return tasks whose completion flag matches, in stored order."""
        with self._lock:
            return [t for t in self._items if t.is_completed == is_completed]

    def get_task(self, task_id: str) -> Task | None:
        with self._lock:
            for task in self._items:
                if task.id == task_id:
                    return task
            return None

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def clear(self) -> None:
        """Remove every task and persist the empty collection."""
        with self._lock:
            self._save([])
        logger.info("tasks_cleared", key=self._key)


class AsyncTaskStore:
    """Awaitable front for a TaskStore.

    Acts as the single owner of the collection for asyncio code: calls are
    admitted one at a time in submission order, and each blocking body runs
    in the loop's default executor so the event loop is never blocked.
    """

    def __init__(self, store: TaskStore) -> None:
        self._store = store
        self._lock = asyncio.Lock()

    @property
    def sync_store(self) -> TaskStore:
        return self._store

    async def _call(self, func: Callable[..., T], *args: Any) -> T:
        async with self._lock:
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(None, functools.partial(func, *args))

    async def add_task(self, task: Task) -> None:
        await self._call(self._store.add_task, task)

    async def remove_task(self, task: Task) -> bool:
        return await self._call(self._store.remove_task, task)

    async def update_task(self, task: Task) -> UpdateResult:
        return await self._call(self._store.update_task, task)

    async def get_all_tasks(self) -> list[Task]:
        return await self._call(self._store.get_all_tasks)

    async def get_tasks_by_status(self, is_completed: bool) -> list[Task]:
        return await self._call(self._store.get_tasks_by_status, is_completed)

    async def get_task(self, task_id: str) -> Task | None:
        return await self._call(self._store.get_task, task_id)

    async def count(self) -> int:
        return await self._call(self._store.count)

    async def clear(self) -> None:
        await self._call(self._store.clear)

    async def reload(self) -> None:
        await self._call(self._store.reload)


def create_task_store(settings: Settings | None = None) -> TaskStore:
    """Create a file-backed TaskStore from settings.

    Configures logging from the same settings if nothing has yet.

    Args:
        settings: Settings to use. Defaults to get_settings().
    """
    if settings is None:
        settings = get_settings()
    ensure_logging(settings)
    return TaskStore(create_settings_store(settings), key=settings.tasks_key)
