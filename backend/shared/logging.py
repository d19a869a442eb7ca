"""Structured logging for the tracker server.

structlog events and uvicorn's own loggers both go through the stdlib root
logger, to stdout and (outside tests) to a file named after the start time.

LOG_FORMAT selects "json" or "console" (the default). LOG_LEVEL takes a
stdlib level name and defaults to INFO.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from typing import Any

LOG_FILE_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"

_LOG_FORMATS = ("console", "json")
_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")

# Server loggers that install their own handlers before the app factory runs.
_FOREIGN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _serialize_enums(
    _logger: object,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Log enum members (e.g. DifficultyMatch) by value."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
    return event_dict


def _is_test() -> bool:
    return "pytest" in sys.modules


def _env_choice(name: str, default: str, choices: tuple[str, ...]) -> str:
    value = (os.environ.get(name) or default).strip().lower()
    if value not in choices:
        msg = f"Invalid {name}={value!r}. Must be one of: {', '.join(choices)}."
        raise ValueError(msg)
    return value


def _attach(root: logging.Logger, handler: logging.Handler, *, json_mode: bool, colors: bool = False) -> None:
    renderer = structlog.processors.JSONRenderer() if json_mode else structlog.dev.ConsoleRenderer(colors=colors)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=[
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
            ],
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.format_exc_info,
                renderer,
            ],
        ),
    )
    root.addHandler(handler)


def setup_logging(log_dir: Path | str | None = None) -> Path | None:
    """Configure structlog and the root logger. Returns the log file path, if one was opened."""
    json_mode = _env_choice("LOG_FORMAT", "console", _LOG_FORMATS) == "json"
    level = getattr(logging, _env_choice("LOG_LEVEL", "info", _LOG_LEVELS).upper())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            _serialize_enums,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    for name in _FOREIGN_LOGGERS:
        foreign = logging.getLogger(name)
        foreign.handlers.clear()
        foreign.propagate = True

    _attach(root, logging.StreamHandler(sys.stdout), json_mode=json_mode, colors=sys.stdout.isatty())

    if log_dir is None or _is_test():
        return None

    dir_path = Path(log_dir)
    dir_path.mkdir(parents=True, exist_ok=True)
    file_path = dir_path / f"{datetime.now(tz=UTC).strftime(LOG_FILE_TIMESTAMP_FORMAT)}.log"
    _attach(root, logging.FileHandler(file_path), json_mode=json_mode)
    return file_path
