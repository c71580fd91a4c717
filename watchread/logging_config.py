"""structlog setup for watchread.

Library code only calls :func:`get_logger`. Output is configured once per
process, either explicitly with :func:`configure_logging` /
:func:`configure_from_config`, or implicitly from the environment the first
time :func:`watchread.context.get_default_context` builds its context.
"""

from __future__ import annotations

import logging
import sys
import threading
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

import structlog

if TYPE_CHECKING:
    from watchread.config import WatchReadConfig

_configured = False
_configure_lock = threading.Lock()


def _processors(json_output: bool, colors: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colors))
    return processors


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Path | None = None,
    colors: bool | None = None,
) -> None:
    """Route watchread events through stdlib logging.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Render one JSON object per event
        log_file: Append to this file instead of stderr
        colors: Colour console output; by default only on a terminal
    """
    global _configured

    stream: TextIO = sys.stderr
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        stream = open(log_file, "a", encoding="utf-8")  # noqa: SIM115
    if colors is None:
        colors = not json_output and log_file is None and sys.stderr.isatty()

    with _configure_lock:
        logging.basicConfig(
            format="%(message)s",
            stream=stream,
            level=getattr(logging, level.upper(), logging.INFO),
            force=True,
        )
        structlog.configure(
            processors=_processors(json_output, colors),
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _configured = True


def configure_from_config(config: WatchReadConfig) -> None:
    """Configure logging from ``log_level``, ``log_json`` and ``log_file``."""
    configure_logging(
        level=config.log_level,
        json_output=config.log_json,
        log_file=config.log_file,
    )


def is_configured() -> bool:
    return _configured


def reset_logging() -> None:
    """Drop watchread's logging setup and return structlog to its defaults."""
    global _configured
    with _configure_lock:
        structlog.reset_defaults()
        logging.basicConfig(level=logging.WARNING, force=True)
        _configured = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
