"""MCP server exposing the project tracker commands as tools.

Every tool call reloads the data file, so the server and the CLI can be
used side by side against the same storage location.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from mcp.server.fastmcp import FastMCP

from .config import TrackerConfig
from .render import render_overview, render_result
from .repository import OperationResult
from .tracker import Tracker
from .tracker_logging import setup_logging

mcp = FastMCP("project-tracker")


def _tracker(data_file: Optional[str] = None) -> Tracker:
    if data_file:
        return Tracker(Path(data_file).expanduser())
    return Tracker(TrackerConfig.from_env().data_file)


def _bar_width() -> int:
    return TrackerConfig.from_env().bar_width


def _serialize_result(result: OperationResult) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "outcome": result.outcome.value,
        "changed": result.changed,
        "message": "\n".join(render_result(result, _bar_width())),
    }
    if result.project_name is not None:
        payload["project"] = result.project_name
    if result.task is not None:
        payload["task"] = result.task.to_dict()
    elif result.task_id is not None:
        payload["task_id"] = result.task_id
    return payload


@mcp.tool()
def add_project(name: str, data_file: Optional[str] = None) -> Dict[str, Any]:
    """Add a new project. Reports an informational outcome if the name is taken."""

    return _serialize_result(_tracker(data_file).add_project(name))


@mcp.tool()
def list_projects(data_file: Optional[str] = None) -> Dict[str, Any]:
    """List all project names in insertion order."""

    result = _tracker(data_file).list_projects()
    payload = _serialize_result(result)
    payload["projects"] = list(result.names)
    return payload


@mcp.tool()
def add_task(project: str, description: str, data_file: Optional[str] = None) -> Dict[str, Any]:
    """Add a task to a project; the new id is the last task's id plus one."""

    return _serialize_result(_tracker(data_file).add_task(project, description))


@mcp.tool()
def list_tasks(project: str, data_file: Optional[str] = None) -> Dict[str, Any]:
    """List the tasks of one project."""

    result = _tracker(data_file).list_tasks(project)
    payload = _serialize_result(result)
    if result.project is not None:
        payload["tasks"] = [task.to_dict() for task in result.project.tasks]
    return payload


@mcp.tool()
def complete_task(project: str, task_id: int, data_file: Optional[str] = None) -> Dict[str, Any]:
    """Mark a task complete. Completing an already completed task changes nothing."""

    return _serialize_result(_tracker(data_file).complete_task(project, task_id))


@mcp.tool()
def list_all(data_file: Optional[str] = None) -> Dict[str, Any]:
    """Every project with its tasks and progress."""

    result = _tracker(data_file).list_all()
    payload = _serialize_result(result)
    payload["projects"] = [
        {
            **project.to_dict(),
            "completed_tasks": project.completed_count(),
            "total_tasks": len(project.tasks),
            "progress": project.progress_ratio(),
        }
        for project in result.projects
    ]
    return payload


@mcp.resource("project-tracker://projects")
def resource_projects() -> str:
    """Text overview of all projects, as printed by the CLI without a command."""

    result = _tracker().list_all()
    return "\n".join(render_overview(result.projects, _bar_width()))


def main() -> None:
    config = TrackerConfig.from_env()
    setup_logging(config.log_level, config.log_file)
    mcp.run(transport="stdio")


if __name__ == "__main__":  # pragma: no cover
    main()
