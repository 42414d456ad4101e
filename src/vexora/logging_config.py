"""Vexora — Root logger setup (console or JSON lines via structlog).

Modules keep ``logging.getLogger(__name__)``; structlog only renders the
records, so stdlib and third-party loggers share one output format.
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

SHARED_PROCESSORS: list[Any] = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
]


def build_formatter(json_logs: bool = True) -> structlog.stdlib.ProcessorFormatter:
    """Formatter rendering stdlib records as JSON objects or console lines."""
    if json_logs:
        renderer: list[Any] = [
            structlog.processors.format_exc_info,
            structlog.processors.EventRenamer("message"),
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderer = [structlog.dev.ConsoleRenderer(colors=False)]
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=SHARED_PROCESSORS,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *renderer],
    )


def configure_logging(level: str = "INFO", json_logs: bool = True) -> None:
    root = logging.getLogger()
    root.setLevel(level.upper())
    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(json_logs))
    # replace handlers so repeated app factories don't duplicate output
    root.handlers = [handler]
    logging.getLogger("httpx").setLevel(logging.WARNING)
