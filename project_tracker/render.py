"""Plain-text rendering of operation results."""

from __future__ import annotations

from typing import List

from .models import Collection, Project, Task
from .repository import OperationResult, Outcome

DEFAULT_BAR_WIDTH = 20
INDENT = "    "


def progress_bar(ratio: float, width: int = DEFAULT_BAR_WIDTH, fill: str = "█", empty: str = " ") -> str:
    """Render ``ratio`` as ``[████      ] 40%``.

    Filled segments are rounded half up; the percentage is truncated.
    """
    if width < 1:
        raise ValueError(f"Bar width must be positive, got {width}")
    ratio = min(max(ratio, 0.0), 1.0)
    filled = min(int(ratio * width + 0.5), width)
    percentage = int(ratio * 100)
    return f"[{fill * filled}{empty * (width - filled)}] {percentage}%"


def task_line(task: Task) -> str:
    return f"{INDENT}{task.checkbox} {task.id}: {task.description}"


def project_summary(project: Project, bar_width: int = DEFAULT_BAR_WIDTH) -> List[str]:
    lines = [
        f'Project: "{project.name}"',
        f"Progress: {progress_bar(project.progress_ratio(), bar_width)}",
    ]
    if project.tasks:
        lines.extend(task_line(task) for task in project.tasks)
    else:
        lines.append(f"{INDENT}No tasks yet.")
    lines.append("")
    return lines


def render_overview(projects: Collection, bar_width: int = DEFAULT_BAR_WIDTH) -> List[str]:
    """Full listing of every project with its progress bar and tasks."""
    if not projects:
        return ["No projects found."]
    lines = ["Projects:"]
    for project in projects:
        lines.extend(project_summary(project, bar_width))
    return lines


def render_result(result: OperationResult, bar_width: int = DEFAULT_BAR_WIDTH) -> List[str]:
    """Turn any operation result into the lines shown to the user."""
    outcome = result.outcome
    name = result.project_name

    if outcome is Outcome.PROJECT_ADDED:
        return [f"Project '{name}' added"]
    if outcome is Outcome.PROJECT_EXISTS:
        return [f"Project with name '{name}' already exists."]
    if outcome is Outcome.PROJECT_NOT_FOUND:
        return [f"Project '{name}' not found."]
    if outcome is Outcome.TASK_ADDED:
        return [f"Task {result.task.description} added to project: '{name}'."]
    if outcome is Outcome.TASK_NOT_FOUND:
        return [f"Task {result.task_id} not found in project '{name}'."]
    if outcome is Outcome.TASK_ALREADY_COMPLETED:
        return [f"Task {result.task_id} is already completed!"]
    if outcome is Outcome.TASK_COMPLETED:
        return [f"Task {result.task_id} in project '{name}' is now completed!"]

    if result.operation == "list_tasks":
        lines = [f"Tasks in project: {name}:"]
        if result.project.tasks:
            lines.extend(task_line(task) for task in result.project.tasks)
        else:
            lines.append(f"{INDENT}No tasks yet")
        return lines
    if result.operation == "list_projects":
        if not result.names:
            return ["No projects found"]
        return ["Projects:", *(f" - {project_name}" for project_name in result.names)]
    return render_overview(result.projects, bar_width)
