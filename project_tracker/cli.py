"""Command-line entry point: one invocation runs one command."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from . import __version__
from .config import LOG_LEVELS, TrackerConfig, parse_bar_width
from .errors import TrackerError
from .render import render_result
from .tracker import Tracker
from .tracker_logging import setup_logging


def _task_id(value: str) -> int:
    # digits only: no sign, underscores or surrounding whitespace
    if not (value.isascii() and value.isdigit()):
        raise argparse.ArgumentTypeError(f"invalid task id: '{value}'")
    return int(value)


def _bar_width(value: str) -> int:
    try:
        return parse_bar_width(value, source="--bar-width")
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="project-tracker",
        description="A simple CLI tool to keep track of your projects",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--data-file", type=Path, help="Data file to use instead of ~/.config/project-tracker/data.json")
    parser.add_argument("--bar-width", type=_bar_width, help="Width of the progress bar (default: 20)")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="Console log level (default: WARNING)")
    parser.add_argument("--log-file", type=Path, help="Also write JSON logs to this file")

    commands = parser.add_subparsers(dest="command", metavar="<command>")

    add_project = commands.add_parser("add-project", help="Add a new project.")
    add_project.add_argument("name", help="Name of the project.")

    commands.add_parser("list-projects", help="List all projects.")

    add_task = commands.add_parser("add-task", help="Add a task to a project.")
    add_task.add_argument("project")
    add_task.add_argument("description")

    list_tasks = commands.add_parser("list-tasks", help="List all tasks in a project.")
    list_tasks.add_argument("project")

    complete_task = commands.add_parser("complete-task", help="Mark a task as complete")
    complete_task.add_argument("project")
    complete_task.add_argument("task_id", type=_task_id)

    return parser


def build_config(args: argparse.Namespace) -> TrackerConfig:
    """Environment settings with command-line options applied on top."""
    config = TrackerConfig.from_env()
    if args.data_file is not None:
        config.data_file = args.data_file
    if args.bar_width is not None:
        config.bar_width = args.bar_width
    if args.log_level is not None:
        config.log_level = args.log_level
    if args.log_file is not None:
        config.log_file = args.log_file
    return config


def run_command(tracker: Tracker, args: argparse.Namespace):
    if args.command == "add-project":
        return tracker.add_project(args.name)
    if args.command == "list-projects":
        return tracker.list_projects()
    if args.command == "add-task":
        return tracker.add_task(args.project, args.description)
    if args.command == "list-tasks":
        return tracker.list_tasks(args.project)
    if args.command == "complete-task":
        return tracker.complete_task(args.project, args.task_id)
    return tracker.list_all()


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ValueError as e:
        parser.error(str(e))

    try:
        setup_logging(config.log_level, config.log_file)
    except OSError as e:
        print(f"error: Unable to open log file {config.log_file}: {e}", file=sys.stderr)
        return 1

    try:
        tracker = Tracker(config.data_file)
        result = run_command(tracker, args)
    except TrackerError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    lines: List[str] = render_result(result, config.bar_width)
    print("\n".join(lines))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
