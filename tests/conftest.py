"""Shared test fixtures and utilities for easytodo tests.

Provides:
- MockContext for isolating tests from global settings
- Temporary workspace fixtures
- Store fixtures (in-memory and file-backed)
- An observer that records projector notifications
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Generator

import pytest

from easytodo.config import Settings, reload_settings, set_context_settings, set_settings
from easytodo.persistence import MemorySettingsStore
from easytodo.tasks import RefreshResult, Task, TaskStore


class MockContext:
    """Context manager for isolating tests from global state.

    Handles:
    - Resetting global settings singleton
    - Providing a temporary workspace directory
    - Clearing EASYTODO_* environment variables

    Usage:
        with MockContext() as ctx:
            settings = ctx.settings
            workspace = ctx.workspace_dir
    """

    def __init__(self, **settings_kwargs):
        self._settings_kwargs = settings_kwargs
        self._temp_dir: tempfile.TemporaryDirectory | None = None
        self._settings: Settings | None = None
        self._original_env: dict[str, str] = {}

    def __enter__(self) -> "MockContext":
        self._temp_dir = tempfile.TemporaryDirectory()
        workspace_dir = Path(self._temp_dir.name)

        for var in list(os.environ):
            if var.startswith("EASYTODO_"):
                self._original_env[var] = os.environ.pop(var)

        self._settings = Settings(
            workspace_dir=workspace_dir,
            **self._settings_kwargs,
        )
        set_settings(self._settings)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        set_context_settings(None)
        os.environ.update(self._original_env)
        reload_settings()
        if self._temp_dir:
            self._temp_dir.cleanup()

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            raise RuntimeError("MockContext not entered")
        return self._settings

    @property
    def workspace_dir(self) -> Path:
        if self._temp_dir is None:
            raise RuntimeError("MockContext not entered")
        return Path(self._temp_dir.name)


class Recorder:
    """Observer collecting every RefreshResult it receives."""

    def __init__(self) -> None:
        self.results: list[RefreshResult] = []

    def __call__(self, result: RefreshResult) -> None:
        self.results.append(result)

    @property
    def last(self) -> RefreshResult:
        return self.results[-1]


def make_task(
    title: str,
    minutes_ago: int = 0,
    is_completed: bool = False,
    task_id: str | None = None,
) -> Task:
    """Build a task with a deterministic created_at."""
    created = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc) - timedelta(minutes=minutes_ago)
    kwargs = {"title": title, "is_completed": is_completed, "created_at": created}
    if task_id is not None:
        kwargs["id"] = task_id
    return Task(**kwargs)


@pytest.fixture
def mock_context() -> Generator[MockContext, None, None]:
    """Fixture providing an isolated test context."""
    with MockContext() as ctx:
        yield ctx


@pytest.fixture
def temp_workspace(tmp_path: Path) -> Path:
    workspace = tmp_path / "workspace"
    workspace.mkdir(parents=True)
    return workspace


@pytest.fixture
def memory_store() -> MemorySettingsStore:
    return MemorySettingsStore()


@pytest.fixture
def task_store(memory_store: MemorySettingsStore) -> TaskStore:
    return TaskStore(memory_store)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()
