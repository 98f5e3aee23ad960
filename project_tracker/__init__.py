"""Personal project and task tracker with a JSON data file."""

__version__ = "0.1.0"

__all__ = [
    "Project",
    "Task",
    "Tracker",
    "Storage",
    "OperationResult",
    "Outcome",
]

from .models import Project, Task
from .repository import OperationResult, Outcome
from .storage import Storage
from .tracker import Tracker
