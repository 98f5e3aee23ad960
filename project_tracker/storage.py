"""Persistence gateway: the only module that touches the data file.

Every command loads the whole collection and, when it changed anything,
rewrites the whole file. There is no locking and no backup copy; the last
writer wins.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .codec import decode, encode
from .errors import MalformedDataError, StorageError, StorageLocationError
from .models import Collection, validate_collection
from .tracker_logging import log_operation

logger = logging.getLogger("project_tracker.storage")

CONFIG_SUBDIR = Path(".config") / "project-tracker"
DATA_FILENAME = "data.json"


def resolve_location(home: Optional[Path | str] = None) -> Path:
    """Return the user-scoped data file path, creating its directory."""
    if home is None:
        try:
            home = Path.home()
        except (RuntimeError, KeyError) as exc:
            raise StorageLocationError(f"Could not determine the home directory: {exc}") from exc

    config_dir = Path(home) / CONFIG_SUBDIR
    _ensure_directory(config_dir)
    return config_dir / DATA_FILENAME


def _ensure_directory(directory: Path) -> None:
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise StorageLocationError(
            f"Failed to create directory {directory}: {exc}", directory
        ) from exc


class Storage:
    """Read-modify-write access to a single JSON data file."""

    def __init__(self, data_file: Optional[Path | str] = None):
        if data_file is None:
            self.path = resolve_location()
        else:
            self.path = Path(data_file).expanduser()
            _ensure_directory(self.path.parent)
        logger.debug(f"Using data file {self.path}")

    def load(self) -> Collection:
        """Read and decode the data file, creating it empty on first use."""
        with log_operation("load", path=str(self.path)):
            try:
                with self.path.open("ab"):
                    pass
                raw = self.path.read_bytes()
            except OSError as exc:
                raise StorageError(f"Unable to read data file {self.path}: {exc}", self.path) from exc

            try:
                projects = decode(raw)
            except MalformedDataError as exc:
                exc.path = self.path
                raise

        logger.debug(f"Loaded {len(projects)} projects from {self.path}")
        return projects

    def save(self, projects: Collection) -> None:
        """Replace the data file contents with the encoded collection."""
        issues = validate_collection(projects)
        if issues:
            raise StorageError(
                f"Refusing to write data file {self.path}: " + "; ".join(issues), self.path
            )

        content = encode(projects)
        with log_operation("save", path=str(self.path), projects=len(projects)):
            try:
                with self.path.open("w", encoding="utf-8") as handle:
                    handle.write(content)
                    handle.flush()
                    os.fsync(handle.fileno())
            except OSError as exc:
                raise StorageError(f"Unable to write data file {self.path}: {exc}", self.path) from exc

        logger.debug(f"Saved {len(projects)} projects to {self.path}")

    def __repr__(self) -> str:
        return f"Storage(path={str(self.path)!r})"
