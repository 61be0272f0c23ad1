"""Launch the SimpleTodo TUI."""

from __future__ import annotations

import argparse
import logging
import sys

from simpletodo.app import run
from simpletodo.config import DEFAULT_DATA_DIR, load_settings
from simpletodo.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="simpletodo",
        description="Single-screen to-do list in the terminal",
    )
    parser.add_argument(
        "--data-dir",
        help=f"Directory holding saved tasks (default: {DEFAULT_DATA_DIR})",
    )
    parser.add_argument("--log-dir", help="Directory for the log file (default: data dir)")
    parser.add_argument(
        "--log-level",
        default="debug",
        help="debug, info, warning or error (default: debug)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(
        data_dir=args.data_dir, log_dir=args.log_dir, log_level=args.log_level
    )
    if not setup_logging(settings.log_path, level=settings.log_level):
        print(f"Cannot write log file {settings.log_path}; logging disabled", file=sys.stderr)
    logger.info("Starting with storage file %s", settings.storage_path)
    run(settings)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
