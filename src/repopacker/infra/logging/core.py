from __future__ import annotations

"""
Logging Lifecycle.

Installs a single QueueHandler on the root logger and drains it from a
QueueListener thread into the console and optional rotating file
handlers, so file writes never stall the packing loop.
"""

import atexit
import logging
import os
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from repopacker.infra.fs import get_user_data_dir
from repopacker.infra.logging.config import LoggingConfig, parse_level
from repopacker.infra.logging.handlers import (
    create_console_handler,
    create_rotating_file_handler,
    is_own_handler,
    tag_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_repopacker_configured"
_QUEUE_LISTENER_ATTR: str = "_repopacker_queue_listener"

LOG_FILE_NAME = "repopacker.log"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(file_name: str = LOG_FILE_NAME) -> str:
    """Absolute path of the log file inside the user data directory."""
    return os.path.join(get_user_data_dir(), "logs", file_name)


def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the root logger once.

    Repeated calls are no-ops unless `force` is set, in which case the
    previously attached handlers and listener are torn down first.

    Args:
        cfg: Logging settings.
        force: Rebuild the handler set even if already configured.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()

    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level = parse_level(cfg.level)
    root.setLevel(level)

    _detach_own_handlers(root)
    _stop_listener(root)

    try:
        handlers = _build_handlers(cfg, level)
    except (OSError, ValueError, TypeError) as e:
        return _emergency_console(root, e)

    if not handlers:
        return root

    log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
    queue_handler = tag_handler(QueueHandler(log_queue))

    listener = QueueListener(log_queue, *handlers, respect_handler_level=True)
    listener.start()

    root.addHandler(queue_handler)
    setattr(root, _QUEUE_LISTENER_ATTR, listener)
    setattr(root, _CONFIGURED_FLAG_ATTR, True)

    atexit.register(_safe_stop, listener)
    return root


def get_logger(name: str) -> logging.Logger:
    """Named logger (usually `__name__`) under the configured root."""
    return logging.getLogger(name)


def shutdown_logging() -> None:
    """Flush pending records and detach repopacker handlers."""
    root = logging.getLogger()
    _stop_listener(root)
    _detach_own_handlers(root)
    setattr(root, _CONFIGURED_FLAG_ATTR, False)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _build_handlers(cfg: LoggingConfig, level: int) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []

    if cfg.console:
        handlers.append(create_console_handler(level, logging.Formatter(cfg.console_fmt)))

    if cfg.log_file:
        fh = create_rotating_file_handler(
            cfg.log_file,
            level,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh:
            handlers.append(fh)

    return handlers


def _emergency_console(root: logging.Logger, error: Exception) -> logging.Logger:
    """Attach a plain stderr handler after a configuration failure."""
    sh = logging.StreamHandler(sys.stderr)
    sh.setFormatter(logging.Formatter("FALLBACK | %(levelname)s | %(message)s"))
    root.addHandler(tag_handler(sh))
    root.warning(f"Logging setup failed ({error}). Using console fallback.")
    return root


def _detach_own_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if is_own_handler(h):
            root.removeHandler(h)
            h.close()


def _stop_listener(root: logging.Logger) -> None:
    listener = getattr(root, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop(listener)
        setattr(root, _QUEUE_LISTENER_ATTR, None)


def _safe_stop(listener: Optional[QueueListener]) -> None:
    """Stop a listener, tolerating one that was already stopped."""
    if listener is None:
        return
    # QueueListener.stop() fails when its thread was already joined
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
