"""JSON codec for the persisted project collection.

An empty document is the first-run state and decodes to an empty
collection. Anything else must be a well-formed array of projects.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Tuple

from .errors import MalformedDataError
from .models import Collection, Project, validate_collection


def decode(raw: str | bytes) -> Collection:
    """Decode a stored document into a collection."""
    if len(raw) == 0:
        return []

    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedDataError(f"Data file is not valid UTF-8: {exc}") from exc

    try:
        data = json.loads(raw, object_pairs_hook=_reject_duplicate_keys)
    except json.JSONDecodeError as exc:
        raise MalformedDataError(f"Unable to parse data file: {exc}") from exc
    except RecursionError as exc:
        raise MalformedDataError("Unable to parse data file: document is nested too deeply") from exc

    if not isinstance(data, list):
        raise MalformedDataError(
            f"Expected an array of projects, got {type(data).__name__}"
        )

    for index, item in enumerate(data):
        _check_project(item, index)
    projects = [Project.from_dict(item) for item in data]

    issues = validate_collection(projects)
    if issues:
        raise MalformedDataError("; ".join(issues))
    return projects


def encode(projects: Collection) -> str:
    """Encode a collection as indented JSON with a stable key order."""
    return json.dumps(
        [project.to_dict() for project in projects],
        indent=2,
        ensure_ascii=False,
    )


def _reject_duplicate_keys(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise MalformedDataError(f"Duplicate field '{key}'")
        result[key] = value
    return result


def _check_project(item: Any, index: int) -> None:
    where = f"project #{index}"
    if not isinstance(item, dict):
        raise MalformedDataError(f"{where}: expected an object")
    name = _require(item, "name", str, where)
    tasks = _require(item, "tasks", list, where)
    where = f"project '{name}'"
    for position, entry in enumerate(tasks):
        _check_task(entry, where, position)


def _check_task(item: Any, where: str, position: int) -> None:
    where = f"{where}, task #{position}"
    if not isinstance(item, dict):
        raise MalformedDataError(f"{where}: expected an object")

    task_id = item.get("id")
    # bool is an int subclass; JSON true/false are not ids
    if isinstance(task_id, bool) or not isinstance(task_id, int):
        raise MalformedDataError(f"{where}: field 'id' must be an integer")
    if task_id < 0:
        raise MalformedDataError(f"{where}: task id {task_id} is negative")

    _require(item, "description", str, where)
    _require(item, "completed", bool, where)


def _require(item: dict, key: str, expected: type, where: str) -> Any:
    if key not in item:
        raise MalformedDataError(f"{where}: missing field '{key}'")
    value = item[key]
    if not isinstance(value, expected):
        raise MalformedDataError(
            f"{where}: field '{key}' must be {_TYPE_NAMES[expected]}, "
            f"got {type(value).__name__}"
        )
    return value


_TYPE_NAMES = {str: "a string", list: "an array", bool: "a boolean"}
