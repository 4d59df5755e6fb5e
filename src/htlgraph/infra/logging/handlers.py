from __future__ import annotations

"""
Log Handler Factories.

Builds the stderr and rotating-file sinks that sit behind the log queue.
Every sink created here is tagged, so a re-configuration removes only what
this package installed and leaves pytest's or an embedding tool's handlers
alone.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from htlgraph.infra.fs import safe_mkdir

_HANDLER_TAG_ATTR: str = "_htlgraph_handler"


def _tag_handler(handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_TAG_ATTR, True)


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_console_handler(level_int: int, formatter: logging.Formatter) -> logging.StreamHandler:
    """Stderr sink; stdout carries the crawl summary."""
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(formatter)
    _tag_handler(sh)
    return sh


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Rotating file sink for `--log-file`.

    An unusable path is reported on stderr and the run continues with the
    console only.

    Returns:
        Optional[RotatingFileHandler]: The sink, or None when the file cannot be opened.
    """
    parent = os.path.dirname(os.path.abspath(log_file))
    ok, err = safe_mkdir(parent)
    if not ok:
        sys.stderr.write(f"WARNING: Log directory unavailable '{parent}': {err}\n")
        return None

    try:
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Log file unavailable '{log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    _tag_handler(fh)
    return fh
