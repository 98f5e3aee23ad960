"""Error types for the project tracker.

Only environment and data failures are exceptions. Domain outcomes such as
"project not found" are reported through ``repository.Outcome`` instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class TrackerError(Exception):
    """Base class for fatal tracker errors."""


class StorageError(TrackerError):
    """The storage file could not be opened, read or written."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class StorageLocationError(StorageError):
    """The storage location could not be resolved or created."""


class MalformedDataError(TrackerError):
    """Stored data exists but does not match the expected document shape."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        message = super().__str__()
        if self.path is not None:
            return f"{self.path}: {message}"
        return message
