"""Command-line entry point for task tracker."""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Optional, Sequence

from task_tracker.config import DEFAULT_CONFIG_PATH, ConfigManager, Settings
from task_tracker.exceptions import ConfigError
from task_tracker.session import Session
from task_tracker.store import TaskStore
from task_tracker.utils.logger import setup_logger


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="task-tracker",
        description="Interactive task tracker backed by a flat text file.",
    )
    parser.add_argument(
        "-f", "--file", type=Path, help="Task file to use (default: from config, tasks.txt)"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help=f"YAML config path (default: {DEFAULT_CONFIG_PATH} if present)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser


def build_settings(args: argparse.Namespace) -> Settings:
    """Combine config file, environment and command-line flags."""
    if args.config is not None:
        manager = ConfigManager(args.config, required=True)
    else:
        manager = ConfigManager()
    settings = manager.load_settings()

    overrides = {}
    if args.file is not None:
        overrides["data_file"] = args.file
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    if overrides:
        settings = replace(settings, **overrides)
    return settings


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        settings = build_settings(args)
    except ConfigError as e:
        print(f"Configuration error: {e}")
        return 2

    logger = setup_logger(log_dir=settings.log_dir, level=settings.level)
    logger.info(f"Using task file {settings.data_file}")

    store = TaskStore(settings.data_file)
    session = Session.from_store(store, table_format=settings.table_format)
    try:
        return session.run()
    except KeyboardInterrupt:
        print("\nInterrupted. Unsaved changes were discarded.")
        logger.info("Session interrupted by user")
        return 1
