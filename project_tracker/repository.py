"""Project and task operations over an in-memory collection.

Operations never modify the list they are given. A changing operation
returns a new list in which only the touched project is replaced; callers
persist ``result.projects`` when ``result.changed`` is true.

Task ids are assigned as the *last* task's id plus one. That equals "max
plus one" only because tasks are never removed or reordered; revisit
``next_task_id`` before adding either operation.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from .models import Collection, Project, Task


class Outcome(str, Enum):
    PROJECT_ADDED = "project_added"
    PROJECT_EXISTS = "project_exists"
    PROJECT_NOT_FOUND = "project_not_found"
    TASK_ADDED = "task_added"
    TASK_NOT_FOUND = "task_not_found"
    TASK_COMPLETED = "task_completed"
    TASK_ALREADY_COMPLETED = "task_already_completed"
    LISTED = "listed"
    EMPTY = "empty"


@dataclass(slots=True)
class OperationResult:
    """What an operation did, plus the collection to persist."""

    operation: str
    outcome: Outcome
    projects: Collection
    changed: bool = False
    project_name: Optional[str] = None
    project: Optional[Project] = None
    task: Optional[Task] = None
    task_id: Optional[int] = None
    names: List[str] = field(default_factory=list)


def find_project(projects: Collection, name: str) -> Optional[Project]:
    """Exact, case-sensitive lookup by project name."""
    for project in projects:
        if project.name == name:
            return project
    return None


def next_task_id(project: Project) -> int:
    if not project.tasks:
        return 1
    return project.tasks[-1].id + 1


def _replace_project(projects: Collection, old: Project, new: Project) -> Collection:
    return [new if project is old else project for project in projects]


def add_project(projects: Collection, name: str) -> OperationResult:
    if find_project(projects, name) is not None:
        return OperationResult("add_project", Outcome.PROJECT_EXISTS, projects, project_name=name)

    project = Project(name=name, tasks=[])
    return OperationResult(
        "add_project",
        Outcome.PROJECT_ADDED,
        [*projects, project],
        changed=True,
        project_name=name,
        project=project,
    )


def list_projects(projects: Collection) -> OperationResult:
    outcome = Outcome.LISTED if projects else Outcome.EMPTY
    return OperationResult(
        "list_projects", outcome, projects, names=[project.name for project in projects]
    )


def add_task(projects: Collection, project_name: str, description: str) -> OperationResult:
    project = find_project(projects, project_name)
    if project is None:
        return OperationResult(
            "add_task", Outcome.PROJECT_NOT_FOUND, projects, project_name=project_name
        )

    task = Task(id=next_task_id(project), description=description, completed=False)
    updated = replace(project, tasks=[*project.tasks, task])
    return OperationResult(
        "add_task",
        Outcome.TASK_ADDED,
        _replace_project(projects, project, updated),
        changed=True,
        project_name=project_name,
        project=updated,
        task=task,
        task_id=task.id,
    )


def list_tasks(projects: Collection, project_name: str) -> OperationResult:
    project = find_project(projects, project_name)
    if project is None:
        return OperationResult(
            "list_tasks", Outcome.PROJECT_NOT_FOUND, projects, project_name=project_name
        )

    outcome = Outcome.LISTED if project.tasks else Outcome.EMPTY
    return OperationResult(
        "list_tasks", outcome, projects, project_name=project_name, project=project
    )


def complete_task(projects: Collection, project_name: str, task_id: int) -> OperationResult:
    project = find_project(projects, project_name)
    if project is None:
        return OperationResult(
            "complete_task",
            Outcome.PROJECT_NOT_FOUND,
            projects,
            project_name=project_name,
            task_id=task_id,
        )

    task = project.find_task(task_id)
    if task is None:
        return OperationResult(
            "complete_task",
            Outcome.TASK_NOT_FOUND,
            projects,
            project_name=project_name,
            project=project,
            task_id=task_id,
        )

    if task.completed:
        return OperationResult(
            "complete_task",
            Outcome.TASK_ALREADY_COMPLETED,
            projects,
            project_name=project_name,
            project=project,
            task=task,
            task_id=task_id,
        )

    done = replace(task, completed=True)
    updated = replace(
        project, tasks=[done if item is task else item for item in project.tasks]
    )
    return OperationResult(
        "complete_task",
        Outcome.TASK_COMPLETED,
        _replace_project(projects, project, updated),
        changed=True,
        project_name=project_name,
        project=updated,
        task=done,
        task_id=task_id,
    )


def list_all(projects: Collection) -> OperationResult:
    outcome = Outcome.LISTED if projects else Outcome.EMPTY
    return OperationResult("list_all", outcome, projects)
