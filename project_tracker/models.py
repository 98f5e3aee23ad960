"""Data models for the project tracker.

A collection is an ordered list of projects; each project owns an ordered
list of tasks. Field names match the persisted JSON document exactly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(slots=True)
class Task:
    """A single task inside a project."""

    id: int
    description: str
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "description": self.description,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Create from dictionary representation."""
        return cls(
            id=data["id"],
            description=data["description"],
            completed=data["completed"],
        )

    @property
    def checkbox(self) -> str:
        return "[x]" if self.completed else "[ ]"


@dataclass(slots=True)
class Project:
    """A named project with its ordered tasks."""

    name: str
    tasks: List[Task] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "tasks": [task.to_dict() for task in self.tasks],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        """Create from dictionary representation."""
        return cls(
            name=data["name"],
            tasks=[Task.from_dict(item) for item in data["tasks"]],
        )

    def find_task(self, task_id: int) -> Task | None:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def completed_count(self) -> int:
        return sum(1 for task in self.tasks if task.completed)

    def progress_ratio(self) -> float:
        """Completed tasks divided by total tasks; 0.0 for a project with no tasks."""
        if not self.tasks:
            return 0.0
        return self.completed_count() / len(self.tasks)

    def validate(self) -> List[str]:
        """Validate the project and return any issues."""
        issues = []
        seen: set[int] = set()
        for task in self.tasks:
            if task.id in seen:
                issues.append(f"Duplicate task id {task.id} in project '{self.name}'")
            seen.add(task.id)
        return issues


Collection = List[Project]


def validate_collection(projects: Collection) -> List[str]:
    """Check the collection invariants and return any issues."""
    issues = []
    seen: set[str] = set()
    for project in projects:
        if project.name in seen:
            issues.append(f"Duplicate project name '{project.name}'")
        seen.add(project.name)
        issues.extend(project.validate())
    return issues
