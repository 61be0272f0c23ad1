"""Logging configuration for the TUI."""

from __future__ import annotations

import logging
from pathlib import Path


class _NoiseFilter(logging.Filter):
    """
    Keep the log file readable:
    - allow all simpletodo logs
    - suppress third-party noise (textual, asyncio) unless WARNING+
    - suppress Python warnings (captured as 'py.warnings') unless ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == "simpletodo" or name.startswith("simpletodo."):
            return True

        if name == "py.warnings":
            return record.levelno >= logging.ERROR

        return record.levelno >= logging.WARNING


def setup_logging(log_file: str | Path, *, level: int = logging.DEBUG) -> bool:
    """
    Send logs to a file. The terminal belongs to the TUI, so there is
    no console handler. The file gets the full DEBUG log unless a
    higher level is asked for.

    If the log file cannot be opened, logs are discarded and False is
    returned; the app still starts.

    Call this ONCE, before the app starts.
    """
    log_file = Path(log_file)

    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
    except OSError:
        root.addHandler(logging.NullHandler())
        logging.captureWarnings(True)
        return False

    fh.setLevel(level)
    fh.setFormatter(fmt)
    fh.addFilter(_NoiseFilter())
    root.addHandler(fh)

    logging.captureWarnings(True)
    return True
