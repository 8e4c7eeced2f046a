"""Tests for structured logging setup."""

import structlog

from easytodo.config import Settings
from easytodo.logging import Loggers, configure_logging, ensure_logging
from easytodo.tasks import create_task_store


class TestLogging:

    def setup_method(self):
        structlog.reset_defaults()

    def teardown_method(self):
        structlog.contextvars.clear_contextvars()
        structlog.reset_defaults()

    def test_configure_json(self, temp_workspace, capsys):
        configure_logging(Settings(workspace_dir=temp_workspace, log_level="info", log_format="json"))
        Loggers.store().info("task_added", task_id="abc")

        err = capsys.readouterr().err
        assert '"event": "task_added"' in err
        assert '"task_id": "abc"' in err

    def test_level_filters(self, temp_workspace, capsys):
        configure_logging(Settings(workspace_dir=temp_workspace, log_level="error", log_format="json"))
        Loggers.projector().warning("projection_failed")
        assert capsys.readouterr().err == ""

    def test_contextvars_are_merged(self, temp_workspace, capsys):
        configure_logging(Settings(workspace_dir=temp_workspace, log_level="info", log_format="json"))
        structlog.contextvars.bind_contextvars(tasks_key="TodoItems")
        Loggers.persistence().info("settings_store_written")

        assert '"tasks_key": "TodoItems"' in capsys.readouterr().err

    def test_configure_defaults(self):
        configure_logging()
        assert structlog.is_configured()

    def test_ensure_logging_keeps_existing_configuration(self, temp_workspace, capsys):
        configure_logging(Settings(workspace_dir=temp_workspace, log_level="info", log_format="json"))
        ensure_logging(Settings(workspace_dir=temp_workspace, log_level="error"))
        Loggers.store().info("task_added")

        assert '"event": "task_added"' in capsys.readouterr().err

    def test_create_task_store_configures_logging(self, mock_context):
        assert not structlog.is_configured()

        create_task_store(mock_context.settings)

        assert structlog.is_configured()
