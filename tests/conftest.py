import logging

import pytest

from project_tracker.tracker_logging import tracker_events


@pytest.fixture(autouse=True)
def reset_tracker_logging():
    """Undo setup_logging() and registered hooks after each test."""
    yield
    logger = logging.getLogger("project_tracker")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    tracker_events.clear()


@pytest.fixture
def data_file(tmp_path, monkeypatch):
    """A temporary data file, also exported for code that reads the environment."""
    path = tmp_path / "tracker" / "data.json"
    monkeypatch.setenv("PROJECT_TRACKER_DATA_FILE", str(path))
    monkeypatch.delenv("PROJECT_TRACKER_BAR_WIDTH", raising=False)
    monkeypatch.delenv("PROJECT_TRACKER_LOG_LEVEL", raising=False)
    monkeypatch.delenv("PROJECT_TRACKER_LOG_FILE", raising=False)
    return path
