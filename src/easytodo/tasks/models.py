"""Task data model and its JSON encoding.

A task list is persisted as one JSON document:

    {"version": 1, "tasks": [{"id": ..., "title": ..., "isCompleted": ...,
                              "createdAt": ...}, ...]}

Older data written without the envelope (a bare array of records) is
still accepted by decode_tasks.
"""

import json
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from easytodo.errors import InvalidTitleError, SerializationError

SCHEMA_VERSION = 1

# Unversioned records carry no createdAt; they sort as oldest.
LEGACY_CREATED_AT = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_title(title: str) -> str:
    """Return the stripped title, rejecting empty or whitespace-only text.

    Raises:
        InvalidTitleError: If nothing but whitespace remains.
    """
    if not isinstance(title, str) or not title.strip():
        raise InvalidTitleError()
    return title.strip()


@dataclass(frozen=True)
class Task:
    """A single to-do entry.

    Tasks are values: toggling or renaming returns a new Task with the same
    id and created_at.
    """

    title: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    is_completed: bool = False
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if isinstance(self.created_at, datetime) and self.created_at.tzinfo is None:
            aware = self.created_at.replace(tzinfo=timezone.utc)
            object.__setattr__(self, "created_at", aware)

    @classmethod
    def create(cls, title: str) -> "Task":
        """Create a new pending task with a fresh id and timestamp.

        Args:
            title: Display text. Surrounding whitespace is stripped.

        Raises:
            InvalidTitleError: If the title is empty or whitespace-only.
        """
        return cls(title=validate_title(title))

    def toggled(self) -> "Task":
        """Return a copy with is_completed flipped."""
        return replace(self, is_completed=not self.is_completed)

    def with_title(self, title: str) -> "Task":
        """Return a copy with a new (validated) title."""
        return replace(self, title=validate_title(title))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "isCompleted": self.is_completed,
            "createdAt": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        default_created_at: datetime | None = None,
    ) -> "Task":
        """Build a Task from a persisted record.

        Args:
            data: Record with id, title, isCompleted and createdAt.
            default_created_at: Used when createdAt is absent. Without it a
                missing createdAt is an error.

        Raises:
            KeyError: If id or title is missing, or createdAt is missing and
                no default was given.
            ValueError: If a field has the wrong type or format.
        """
        task_id = data["id"]
        title = data["title"]
        if not isinstance(task_id, str) or not isinstance(title, str):
            raise ValueError("id and title must be strings")
        is_completed = data.get("isCompleted", False)
        if not isinstance(is_completed, bool):
            raise ValueError(f"isCompleted must be a boolean, got {is_completed!r}")
        if "createdAt" in data or default_created_at is None:
            created_at = datetime.fromisoformat(data["createdAt"])
        else:
            created_at = default_created_at
        return cls(
            id=task_id,
            title=title,
            is_completed=is_completed,
            created_at=created_at,
        )


def encode_tasks(tasks: list[Task]) -> str:
    """Serialize a task collection to its persisted JSON text.

    Raises:
        SerializationError: If any task cannot be encoded.
    """
    try:
        return json.dumps(
            {"version": SCHEMA_VERSION, "tasks": [t.to_dict() for t in tasks]},
            ensure_ascii=False,
        )
    except (TypeError, ValueError, AttributeError) as e:
        raise SerializationError(f"Cannot encode task list: {e}") from e


def decode_tasks(raw: str) -> list[Task]:
    """Parse persisted JSON text back into tasks.

    Accepts both the versioned envelope and the legacy bare array.

    Raises:
        SerializationError: If the text is not a valid task list.
    """
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as e:
        raise SerializationError(f"Invalid task list JSON: {e}") from e

    default_created_at = None
    if isinstance(data, dict):
        version = data.get("version")
        if version != SCHEMA_VERSION:
            raise SerializationError(f"Unsupported task list version: {version!r}")
        records = data.get("tasks")
    else:
        records = data
        default_created_at = LEGACY_CREATED_AT

    if not isinstance(records, list):
        raise SerializationError("Task list must be a JSON array")

    try:
        return [Task.from_dict(record, default_created_at) for record in records]
    except (KeyError, TypeError, ValueError) as e:
        raise SerializationError(f"Malformed task record: {e}") from e
