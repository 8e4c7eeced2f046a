"""Tests for configuration module."""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from easytodo.config import (
    Settings,
    SettingsContext,
    get_context_settings,
    get_settings,
    reload_settings,
    set_context_settings,
    set_settings,
)


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self, temp_workspace: Path):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(workspace_dir=temp_workspace)

        assert settings.app_name == "easytodo"
        assert settings.settings_file == "user_defaults.json"
        assert settings.tasks_key == "TodoItems"
        assert settings.log_level == "warning"
        assert settings.log_format == "console"

    def test_workspace_path_expansion(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(workspace_dir="~/todo_workspace")

        assert settings.workspace_dir == Path.home() / "todo_workspace"

    def test_settings_store_path(self, temp_workspace: Path):
        settings = Settings(workspace_dir=temp_workspace, settings_file="defaults.json")
        assert settings.settings_store_path == temp_workspace / "defaults.json"

    def test_env_override(self, temp_workspace: Path):
        with patch.dict(
            os.environ,
            {"EASYTODO_TASKS_KEY": "Chores", "EASYTODO_LOG_LEVEL": "debug"},
            clear=True,
        ):
            settings = Settings(workspace_dir=temp_workspace)

        assert settings.tasks_key == "Chores"
        assert settings.log_level == "debug"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="verbose")

    def test_blank_tasks_key_rejected(self):
        with pytest.raises(ValidationError):
            Settings(tasks_key="  ")

    def test_project_json_config(self, tmp_path: Path, monkeypatch):
        config_dir = tmp_path / ".easytodo"
        config_dir.mkdir()
        (config_dir / "settings.json").write_text(json.dumps({"tasks_key": "FromJson"}))
        monkeypatch.chdir(tmp_path)

        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(workspace_dir=tmp_path)

        assert settings.tasks_key == "FromJson"

    def test_env_beats_project_json(self, tmp_path: Path, monkeypatch):
        config_dir = tmp_path / ".easytodo"
        config_dir.mkdir()
        (config_dir / "settings.json").write_text(json.dumps({"tasks_key": "FromJson"}))
        monkeypatch.chdir(tmp_path)

        with patch.dict(os.environ, {"EASYTODO_TASKS_KEY": "FromEnv"}, clear=True):
            settings = Settings(workspace_dir=tmp_path)

        assert settings.tasks_key == "FromEnv"

    def test_ensure_workspace_exists(self, tmp_path: Path):
        settings = Settings(workspace_dir=tmp_path / "a" / "b")
        settings.ensure_workspace_exists()
        assert settings.workspace_dir.is_dir()


class TestSettingsAccessors:
    """Tests for global and context settings."""

    def test_set_and_get_global(self, mock_context):
        assert get_settings() is mock_context.settings

    def test_context_takes_precedence(self, mock_context, temp_workspace):
        other = Settings(workspace_dir=temp_workspace)
        with SettingsContext(other) as s:
            assert s is other
            assert get_settings() is other
            assert get_context_settings() is other
        assert get_settings() is mock_context.settings

    def test_set_context_settings_token(self, mock_context, temp_workspace):
        other = Settings(workspace_dir=temp_workspace)
        token = set_context_settings(other)
        assert get_settings() is other
        set_context_settings(None)
        assert get_settings() is mock_context.settings
        assert token is not None

    def test_reload_settings(self, mock_context, temp_workspace):
        set_settings(Settings(workspace_dir=temp_workspace))
        fresh = reload_settings()
        assert fresh is get_settings()
        assert fresh.workspace_dir != temp_workspace
