"""
Application settings.

One Settings object for the whole app. Defaults live in module-level
constants; the launcher may override them from its arguments.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from simpletodo.state_provider import DEFAULT_STORAGE_KEY

DEFAULT_DATA_DIR = Path.home() / ".local" / "share" / "simpletodo"
STORAGE_FILE_NAME = "storage.json"
LOG_FILE_NAME = "simpletodo.log"

# Fade-out before a deleted row is removed, in seconds
DEFAULT_FADE_DURATION = 0.3


def parse_log_level(name: str | int) -> int:
    """Map a level name like 'debug' to its logging constant (INFO if unknown)."""
    if isinstance(name, int):
        return name
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    storage_file: str = STORAGE_FILE_NAME
    storage_key: str = DEFAULT_STORAGE_KEY
    log_dir: Path | None = None
    log_level: int = logging.DEBUG
    fade_duration: float = DEFAULT_FADE_DURATION
    title: str = "Simple To-Do List"

    @property
    def storage_path(self) -> Path:
        return self.data_dir / self.storage_file

    @property
    def log_path(self) -> Path:
        return (self.log_dir or self.data_dir) / LOG_FILE_NAME


def load_settings(
    data_dir: str | Path | None = None,
    log_dir: str | Path | None = None,
    log_level: str | int | None = None,
) -> Settings:
    """Build Settings, applying any non-None overrides."""
    overrides: dict = {}
    if data_dir is not None:
        overrides["data_dir"] = Path(data_dir).expanduser()
    if log_dir is not None:
        overrides["log_dir"] = Path(log_dir).expanduser()
    if log_level is not None:
        overrides["log_level"] = parse_log_level(log_level)
    return Settings(**overrides)
