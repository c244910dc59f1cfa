from __future__ import annotations

"""
Logging Configuration Models.

Holds the settings dataclass consumed by `configure_logging` and the
mapping from level names to logging constants.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for the logging subsystem.

    Attributes:
        level: Minimum severity captured by every handler.
        console: Emit records to stderr.
        log_file: Optional path of a rotating log file.
        max_bytes: Size at which the log file rolls over.
        backup_count: Number of rolled files kept.
        console_fmt: Format string for stderr records.
        file_fmt: Format string for file records.
        datefmt: Timestamp format for file records.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(name)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"


def parse_level(level: Optional[str]) -> int:
    """Translate a level name into its numeric constant (INFO when unknown)."""
    if not level:
        return logging.INFO
    return LEVEL_MAP.get(str(level).strip().upper(), logging.INFO)
