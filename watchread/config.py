"""Configuration for watchread.

Provides the default paths and modes used by a
:class:`watchread.context.WatchReadContext`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_INPUT_PATH = Path("in.txt")
DEFAULT_OUTPUT_PATH = Path("log.txt")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    return default


@dataclass
class WatchReadConfig:
    """Paths and runtime toggles."""

    input_path: Path = DEFAULT_INPUT_PATH
    output_path: Path = DEFAULT_OUTPUT_PATH

    # Use native change notification when the platform supports it
    event_driven: bool = True

    # Drop writes to unopenable output files instead of raising
    silent: bool = True

    log_level: str = "INFO"
    log_json: bool = False
    log_file: Path | None = None

    def __post_init__(self) -> None:
        self.input_path = Path(self.input_path)
        self.output_path = Path(self.output_path)
        if self.log_file is not None:
            self.log_file = Path(self.log_file)

    @classmethod
    def from_env(cls) -> WatchReadConfig:
        """Load configuration from environment variables.

        Recognised variables:
            WATCHREAD_INPUT: input file path (default ``in.txt``)
            WATCHREAD_OUTPUT: output file path (default ``log.txt``)
            WATCHREAD_EVENT_DRIVEN: enable native notification (default true)
            WATCHREAD_SILENT: silent output mode (default true)
            WATCHREAD_LOG_LEVEL: log level (default ``INFO``)
            WATCHREAD_LOG_JSON: render log events as JSON (default false)
            WATCHREAD_LOG_FILE: append log events to this file (default stderr)

        Returns:
            WatchReadConfig instance
        """
        log_file = os.environ.get("WATCHREAD_LOG_FILE")
        return cls(
            input_path=Path(os.environ.get("WATCHREAD_INPUT", str(DEFAULT_INPUT_PATH))),
            output_path=Path(os.environ.get("WATCHREAD_OUTPUT", str(DEFAULT_OUTPUT_PATH))),
            event_driven=_env_flag("WATCHREAD_EVENT_DRIVEN", True),
            silent=_env_flag("WATCHREAD_SILENT", True),
            log_level=os.environ.get("WATCHREAD_LOG_LEVEL", "INFO").upper(),
            log_json=_env_flag("WATCHREAD_LOG_JSON", False),
            log_file=Path(log_file) if log_file else None,
        )
