"""Shared fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make tests/fakes.py importable
sys.path.insert(0, str(Path(__file__).parent))

from simpletodo.state_provider import FileKeyValueStorage, MemoryKeyValueStorage  # noqa: E402


@pytest.fixture
def storage_file(tmp_path: Path) -> Path:
    return tmp_path / "data" / "storage.json"


@pytest.fixture
def file_storage(storage_file: Path) -> FileKeyValueStorage:
    return FileKeyValueStorage(storage_file)


@pytest.fixture
def memory_storage() -> MemoryKeyValueStorage:
    return MemoryKeyValueStorage()
