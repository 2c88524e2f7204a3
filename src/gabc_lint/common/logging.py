from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import structlog
from structlog.typing import EventDict, WrappedLogger

COMPONENT = "gabc-lint"
LOG_MAX_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3


def add_component(_: WrappedLogger, __: str, event_dict: EventDict) -> EventDict:
    """Tag every event with the linter name so mixed logs can be filtered."""
    event_dict.setdefault("component", COMPONENT)
    return event_dict


def _get_json_processors() -> list:
    # contextvars first: `file` bound by the batch runner lands on every event of that file
    return [
        structlog.contextvars.merge_contextvars,
        add_component,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(sort_keys=True),
    ]


def setup_logging(level: int = logging.INFO) -> None:
    """
    JSON events on stderr through the stdlib root logger.

    Diagnostics are the program output and go to stdout, so log lines never
    mix with them. Safe to call more than once (the CLI callback runs per command).
    """
    logging.basicConfig(level=level, format="%(message)s")
    structlog.configure(
        processors=_get_json_processors(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def add_file_logging(log_file: Path, level: int = logging.INFO) -> None:
    """Mirror the JSON events into a rotating JSONL file (once per path)."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    root = logging.getLogger()

    target = log_file.resolve().as_posix()
    if any(isinstance(h, RotatingFileHandler) and h.baseFilename == target for h in root.handlers):
        return

    handler = RotatingFileHandler(target, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)


log = structlog.get_logger(COMPONENT)
