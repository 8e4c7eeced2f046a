"""Persistence module for easytodo."""

from easytodo.persistence.settings_store import (
    JsonFileSettingsStore,
    MemorySettingsStore,
    SettingsStore,
    create_settings_store,
)

__all__ = [
    "JsonFileSettingsStore",
    "MemorySettingsStore",
    "SettingsStore",
    "create_settings_store",
]
