from __future__ import annotations

"""
Logging Handler Factories.

Handlers created here carry a marker attribute so that reconfiguration
only detaches what this package attached, leaving handlers installed by
host applications or pytest untouched.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

_HANDLER_TAG_ATTR: str = "_repopacker_handler"


def tag_handler(handler: logging.Handler) -> logging.Handler:
    """Mark a handler as owned by repopacker and return it."""
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def is_own_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def create_console_handler(level: int, formatter: logging.Formatter) -> logging.Handler:
    """Tagged stderr handler."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return tag_handler(handler)


def create_rotating_file_handler(
        log_file: str,
        level: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Build a tagged RotatingFileHandler, creating parent directories.

    Args:
        log_file: Destination path.
        level: Numeric logging level.
        formatter: Formatter applied to file records.
        max_bytes: Rollover threshold in bytes.
        backup_count: Number of archived files kept.

    Returns:
        Optional[RotatingFileHandler]: The handler, or None when the file
        cannot be opened.
    """
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(parent, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: Cannot open log file '{log_file}': {e}\n")
        return None

    handler.setLevel(level)
    handler.setFormatter(formatter)
    tag_handler(handler)
    return handler
