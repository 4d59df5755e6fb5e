from __future__ import annotations

"""
Logging Configuration Models.

Settings for the crawler's log output: verbosity, the optional rotating
log file and the third-party loggers kept at a quieter level so that
`--debug` shows crawl decisions rather than connection-pool chatter.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# HTTP stack loggers that emit one record per request at DEBUG
DEFAULT_QUIET_LOGGERS: Tuple[str, ...] = ("urllib3", "requests")


@dataclass(frozen=True)
class LoggingConfig:
    """
    How a crawl run reports its progress.

    Attributes:
        level: Threshold for the package's own records.
        console: Write records to stderr (stdout is reserved for the summary).
        log_file: Rotating log file, if any.
        max_bytes: Size at which the log file rolls over.
        backup_count: Rolled-over files kept next to the log file.
        quiet_loggers: Third-party loggers pinned to `quiet_level`.
        quiet_level: Threshold applied to `quiet_loggers`.
        console_fmt: Record layout on stderr.
        file_fmt: Record layout in the log file.
        datefmt: Timestamp layout in the log file.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 2

    quiet_loggers: Tuple[str, ...] = DEFAULT_QUIET_LOGGERS
    quiet_level: str = "WARNING"

    console_fmt: str = "%(levelname)-7s %(message)s"
    file_fmt: str = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
    datefmt: str = "%Y-%m-%dT%H:%M:%S"
