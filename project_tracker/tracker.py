"""Command orchestration for the project tracker.

Each public method is one command: load the collection, apply a repository
operation, save when the operation changed something.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from . import repository
from .errors import TrackerError
from .models import Collection
from .repository import OperationResult, Outcome
from .storage import Storage
from .tracker_logging import log_error_with_context, log_operation, tracker_events, TrackerEvents

logger = logging.getLogger("project_tracker.tracker")

_EVENTS = {
    Outcome.PROJECT_ADDED: "project_added",
    Outcome.TASK_ADDED: "task_added",
    Outcome.TASK_COMPLETED: "task_completed",
}


class Tracker:
    """Runs tracker commands against one storage handle."""

    def __init__(self, storage: Storage | Path | str | None = None, events: Optional[TrackerEvents] = None):
        if isinstance(storage, Storage):
            self.storage = storage
        else:
            self.storage = Storage(storage)
        self.events = events if events is not None else tracker_events

    def add_project(self, name: str) -> OperationResult:
        return self._run("add_project", lambda projects: repository.add_project(projects, name), project=name)

    def list_projects(self) -> OperationResult:
        return self._run("list_projects", repository.list_projects)

    def add_task(self, project: str, description: str) -> OperationResult:
        return self._run(
            "add_task",
            lambda projects: repository.add_task(projects, project, description),
            project=project,
        )

    def list_tasks(self, project: str) -> OperationResult:
        return self._run("list_tasks", lambda projects: repository.list_tasks(projects, project), project=project)

    def complete_task(self, project: str, task_id: int) -> OperationResult:
        return self._run(
            "complete_task",
            lambda projects: repository.complete_task(projects, project, task_id),
            project=project,
            task_id=task_id,
        )

    def list_all(self) -> OperationResult:
        return self._run("list_all", repository.list_all)

    def _run(self, name: str, operation: Callable[[Collection], OperationResult], **context) -> OperationResult:
        try:
            with log_operation(name, **context):
                projects = self.storage.load()
                result = operation(projects)
                if result.changed:
                    self.storage.save(result.projects)
        except TrackerError as e:
            log_error_with_context(e, {"operation": name, "path": str(self.storage.path), **context})
            raise

        logger.info(f"{name}: {result.outcome.value}")
        event = _EVENTS.get(result.outcome)
        if event:
            self.events.emit(
                event,
                project=result.project_name,
                task_id=result.task_id,
                path=str(self.storage.path),
            )
        if result.changed:
            self.events.emit("collection_saved", projects=len(result.projects), path=str(self.storage.path))
        return result
