"""Settings mixins for application identity and logging configuration.

AppSettingsMixin: Application identity and disk layout (app_name, workspace, store file).
LoggingSettingsMixin: Logging verbosity and output format.

These live outside config.py so the settings class is composed from small,
separately testable pieces.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator


class AppSettingsMixin:
    """Settings for application identity and disk layout.

    Mixin class that provides:
    - Application name and workspace directory
    - Path expansion for workspace_dir
    - Location of the key-value settings file and the key tasks live under

    Should be composed with BaseSettings via multiple inheritance.
    """

    app_name: str = Field(
        default="easytodo",
        title="App Name",
        description="Application name, also used for config directories",
    )

    workspace_dir: Path = Field(
        default_factory=lambda: Path.home() / ".easytodo",
        title="Workspace Directory",
        description="Directory holding the persisted settings store",
    )

    settings_file: str = Field(
        default="user_defaults.json",
        title="Settings File",
        description="File name of the key-value store inside the workspace",
    )

    tasks_key: str = Field(
        default="TodoItems",
        title="Tasks Key",
        description="Key under which the serialized task list is stored",
    )

    @field_validator("workspace_dir", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Expand ~ in paths."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @field_validator("tasks_key")
    @classmethod
    def check_tasks_key(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("tasks_key must not be empty")
        return v

    def ensure_workspace_exists(self) -> None:
        """Create workspace directory if it doesn't exist."""
        self.workspace_dir.mkdir(parents=True, exist_ok=True)

    @property
    def settings_store_path(self) -> Path:
        """Path of the JSON key-value store file."""
        return self.workspace_dir / self.settings_file


class LoggingSettingsMixin:
    """Settings for logging output.

    Note: This is a mixin, not a BaseSettings subclass, to avoid
    MRO issues when composed with other settings classes.
    """

    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="warning",
        title="Log Level",
        description="Logging verbosity level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        title="Log Format",
        description="Log output format (console for dev, json for production)",
    )
