from __future__ import annotations

import logging
import os
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

LOG_FORMAT_ENV = "SLEEP_DASHBOARD_LOG_FORMAT"
LOG_LEVEL_ENV = "SLEEP_DASHBOARD_LOG_LEVEL"

LOG_FORMATS = ("json", "plain")

PLAIN_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _resolve_level(level: Optional[int]) -> int:
    if level is not None:
        return level

    name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    resolved = logging.getLevelName(name)
    if not isinstance(resolved, int):
        raise ValueError(f"{LOG_LEVEL_ENV}={name!r} is not a logging level")
    return resolved


def _build_formatter(format_mode: str) -> logging.Formatter:
    if format_mode == "plain":
        return logging.Formatter(PLAIN_FORMAT)

    # Dashboard events carry their payload in `extra`, which lands as top-level keys
    return JsonFormatter(
        JSON_FIELDS,
        rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
    )


def configure_logging(
        level: Optional[int] = None,
        force_format: Optional[str] = None,
) -> None:
    """
    Configure the root logger for the dashboard.

    Format: force_format, else SLEEP_DASHBOARD_LOG_FORMAT, else "json".
    Level: level, else SLEEP_DASHBOARD_LOG_LEVEL (a level name), else INFO.

    Raises ValueError for an unknown format or level name so a typo in the
    environment is caught at startup.
    """
    format_mode = (force_format or os.getenv(LOG_FORMAT_ENV, "json")).lower()
    if format_mode not in LOG_FORMATS:
        raise ValueError(f"Unknown log format {format_mode!r}; expected one of {LOG_FORMATS}")

    resolved_level = _resolve_level(level)

    root = logging.getLogger()
    root.setLevel(resolved_level)

    handler = logging.StreamHandler()
    handler.setFormatter(_build_formatter(format_mode))

    # Replace any existing handlers to avoid duplicate logs
    root.handlers.clear()
    root.addHandler(handler)

    # The dev server logs one line per callback request
    logging.getLogger("werkzeug").setLevel(max(resolved_level, logging.WARNING))
