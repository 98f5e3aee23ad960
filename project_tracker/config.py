"""Runtime configuration read from the environment.

Command-line options override these values; see ``cli.build_config``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .render import DEFAULT_BAR_WIDTH

DATA_FILE_ENV = "PROJECT_TRACKER_DATA_FILE"
BAR_WIDTH_ENV = "PROJECT_TRACKER_BAR_WIDTH"
LOG_LEVEL_ENV = "PROJECT_TRACKER_LOG_LEVEL"
LOG_FILE_ENV = "PROJECT_TRACKER_LOG_FILE"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(slots=True)
class TrackerConfig:
    """Settings shared by the CLI and the MCP server."""

    data_file: Optional[Path] = None  # None -> ~/.config/project-tracker/data.json
    bar_width: int = DEFAULT_BAR_WIDTH
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "TrackerConfig":
        env = os.environ if environ is None else environ

        data_file = env.get(DATA_FILE_ENV)
        log_file = env.get(LOG_FILE_ENV)
        log_level = (env.get(LOG_LEVEL_ENV) or "WARNING").strip().upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(
                f"{LOG_LEVEL_ENV} must be one of {', '.join(LOG_LEVELS)}, got '{log_level}'"
            )

        bar_width = DEFAULT_BAR_WIDTH
        raw_width = env.get(BAR_WIDTH_ENV)
        if raw_width:
            bar_width = parse_bar_width(raw_width, source=BAR_WIDTH_ENV)

        return cls(
            data_file=Path(data_file).expanduser() if data_file else None,
            bar_width=bar_width,
            log_level=log_level,
            log_file=Path(log_file).expanduser() if log_file else None,
        )


def parse_bar_width(value: str, source: str = "bar width") -> int:
    try:
        width = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{source} must be an integer, got '{value}'") from None
    if width < 1:
        raise ValueError(f"{source} must be at least 1, got {width}")
    return width
