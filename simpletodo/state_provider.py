"""
Concrete storage backends and the persistence bridge for the task list.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from dataclasses import replace
from pathlib import Path

from jsonschema import Draft7Validator, ValidationError

from simpletodo.providers import KeyValueStorage, StorageError, Task

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "tasks"

TASKS_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "array",
    "items": {
        "type": "object",
        "required": ["id", "text", "completed"],
        "properties": {
            "id": {"type": "string", "minLength": 1},
            "text": {"type": "string", "minLength": 1},
            "completed": {"type": "boolean"},
        },
    },
}

_validator = Draft7Validator(TASKS_SCHEMA)


def dump_tasks(tasks: tuple[Task, ...] | list[Task]) -> str:
    """Serialize a task sequence to the stored JSON array."""
    return json.dumps([task.to_dict() for task in tasks])


def parse_tasks(blob: str) -> list[Task]:
    """Deserialize a stored JSON array.

    Raises json.JSONDecodeError or jsonschema.ValidationError on bad input.
    Records whose text is only whitespace, and later records reusing an
    earlier id, are dropped. Text is stored trimmed.
    """
    data = json.loads(blob)
    _validator.validate(data)

    tasks: list[Task] = []
    seen: set[str] = set()
    for item in data:
        task = Task.from_dict(item)
        text = task.text.strip()
        if not text:
            logger.warning("Dropping blank task id=%s from saved data", task.id)
            continue
        if text != task.text:
            task = replace(task, text=text)
        if task.id in seen:
            logger.warning("Dropping duplicate task id=%s from saved data", task.id)
            continue
        seen.add(task.id)
        tasks.append(task)
    return tasks


class MemoryKeyValueStorage:
    """KeyValueStorage kept in process memory (session-only)."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class FileKeyValueStorage:
    """KeyValueStorage backed by a JSON object file.

    Blocking file I/O runs in a worker thread. Writes go to a temp file
    that is renamed over the original, so a failed write leaves the
    previous contents intact.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read {self._path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Storage file {self._path} is not a JSON object")
        return data

    def _write(self, data: dict[str, str]) -> None:
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            raise StorageError(f"Cannot write {self._path}: {e}") from e

    def _get(self, key: str) -> str | None:
        value = self._read().get(key)
        if value is not None and not isinstance(value, str):
            raise StorageError(f"Value for {key!r} in {self._path} is not a string")
        return value

    def _read_for_update(self) -> dict[str, str]:
        try:
            return self._read()
        except StorageError as e:
            logger.warning("Replacing unreadable storage file: %s", e)
            return {}

    def _set(self, key: str, value: str) -> None:
        data = self._read_for_update()
        data[key] = value
        self._write(data)

    async def get_item(self, key: str) -> str | None:
        return await asyncio.to_thread(self._get, key)

    async def set_item(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set, key, value)


class PersistenceBridge:
    """TaskPersistence that stores the whole sequence under one key."""

    def __init__(
        self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY
    ) -> None:
        self._storage = storage
        self._key = key

    async def load_all(self) -> list[Task] | None:
        """Load saved tasks. Read or decode failures are logged and yield None."""
        try:
            blob = await self._storage.get_item(self._key)
        except StorageError as e:
            logger.error("Error loading tasks: %s", e)
            return None

        if blob is None:
            logger.debug("No saved tasks under key=%s", self._key)
            return None

        try:
            tasks = parse_tasks(blob)
        except json.JSONDecodeError as e:
            logger.error("Error loading tasks: invalid JSON: %s", e)
            return None
        except ValidationError as e:
            path = " -> ".join(str(p) for p in e.absolute_path) if e.absolute_path else "root"
            logger.error("Error loading tasks: invalid data at '%s': %s", path, e.message)
            return None

        logger.info("Loaded %d task(s) from key=%s", len(tasks), self._key)
        return tasks

    async def save_all(self, tasks: tuple[Task, ...] | list[Task]) -> bool:
        """Overwrite the saved sequence. Returns False if the write failed."""
        try:
            await self._storage.set_item(self._key, dump_tasks(tasks))
        except StorageError as e:
            logger.error("Error saving tasks: %s", e)
            return False
        logger.debug("Saved %d task(s) to key=%s", len(tasks), self._key)
        return True
