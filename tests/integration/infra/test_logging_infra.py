from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the asynchronous QueueListener architecture, idempotency
of configuration, log file rotation and the console fallback.
"""

import logging
import logging.handlers
from pathlib import Path
from unittest.mock import patch

import pytest

from repopacker.infra.logging import (
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    shutdown_logging,
)
from repopacker.infra.logging.config import parse_level
from repopacker.infra.logging.core import _QUEUE_LISTENER_ATTR
from repopacker.infra.logging.handlers import is_own_handler


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach package handlers before and after each test."""
    root = logging.getLogger()
    previous_level = root.level
    shutdown_logging()
    yield
    shutdown_logging()
    root.setLevel(previous_level)


def _own_handlers():
    return [h for h in logging.getLogger().handlers if is_own_handler(h)]


def test_logging_idempotency() -> None:
    """TC-01: Verify that multiple config calls do not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    count = len(logging.getLogger().handlers)

    configure_logging(cfg)
    assert len(logging.getLogger().handlers) == count, "Handlers were duplicated."
    assert len(_own_handlers()) == 1


def test_force_reconfigures(tmp_path: Path) -> None:
    """TC-02: force=True replaces the handler set and the listener."""
    configure_logging(LoggingConfig(level="INFO"))
    first = getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR)

    configure_logging(LoggingConfig(level="DEBUG"), force=True)
    second = getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR)

    assert second is not first
    assert logging.getLogger().level == logging.DEBUG
    assert len(_own_handlers()) == 1


def test_log_rotation(tmp_path: Path) -> None:
    """TC-03: Verify file rotation when size limit is exceeded."""
    log_file = tmp_path / "logs" / "test_rotate.log"
    cfg = LoggingConfig(
        level="DEBUG",
        console=False,
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1,
    )

    configure_logging(cfg)
    logger = logging.getLogger("test_rotate")
    for _ in range(10):
        logger.debug("This is a long log message to trigger rotation." * 5)

    # Stopping the listener drains the queue
    shutdown_logging()

    assert log_file.exists()
    assert (tmp_path / "logs" / "test_rotate.log.1").exists(), "Rotation backup file was not created."


def test_queue_listener_architecture() -> None:
    """TC-04: The root logger holds a single tagged QueueHandler."""
    configure_logging(LoggingConfig(level="INFO", console=True))

    root = logging.getLogger()
    own = _own_handlers()

    assert len(own) == 1
    assert isinstance(own[0], logging.handlers.QueueHandler)
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not None


def test_handler_failure_falls_back_to_console() -> None:
    """TC-05: A failing handler build installs a plain stderr handler."""
    with patch("repopacker.infra.logging.core._build_handlers", side_effect=OSError("read-only")):
        configure_logging(LoggingConfig(level="INFO"))

    own = _own_handlers()
    assert len(own) == 1
    assert isinstance(own[0], logging.StreamHandler)
    assert own[0].formatter._fmt.startswith("FALLBACK")


def test_unwritable_log_file_is_skipped(tmp_path: Path) -> None:
    """TC-06: An unopenable log file leaves console logging in place."""
    with patch(
        "repopacker.infra.logging.handlers.RotatingFileHandler",
        side_effect=OSError("denied"),
    ):
        configure_logging(LoggingConfig(level="INFO", log_file=str(tmp_path / "x.log")))

    assert len(_own_handlers()) == 1


def test_parse_level_and_default_path(tmp_path: Path) -> None:
    """TC-07: Level names map case-insensitively; the log lives under the data dir."""
    assert parse_level("debug") == logging.DEBUG
    assert parse_level("warn") == logging.WARNING
    assert parse_level("nonsense") == logging.INFO

    with patch("repopacker.infra.logging.core.get_user_data_dir", return_value=str(tmp_path)):
        assert get_default_log_path() == str(tmp_path / "logs" / "repopacker.log")
