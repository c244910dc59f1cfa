from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Cross-platform path handling, the per-user data directory, human-readable
byte sizes and the on-disk save sink for formatted documents.
"""

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "RepoPacker"
UNIX_APP_DIR_NAME = ".repopacker"

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the OS-specific directory for persistent application data.

    - Windows: %LOCALAPPDATA%/RepoPacker
    - Linux/Mac: ~/.repopacker

    The directory is created on demand.

    Returns:
        str: Absolute path to the application data directory.
    """
    path = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        logger.warning(f"Could not create data directory '{path}': {e}")

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Expands environment variables and '~'. Empty input resolves to `fallback`.

    Args:
        path: Raw input path string.
        fallback: Path used when `path` is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip() or fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def to_relative_posix(path: str, root: str) -> str:
    """Path of `path` relative to `root`, with forward slashes."""
    return os.path.relpath(path, root).replace(os.sep, "/")

# -----------------------------------------------------------------------------
# DISPLAY HELPERS
# -----------------------------------------------------------------------------

def format_bytes(size: int) -> str:
    """
    Render a byte count as a short human-readable string.

    Uses base-1024 units and at most two decimals with trailing zeros
    removed: 0 -> '0 Bytes', 1536 -> '1.5 KB'.
    """
    if size <= 0:
        return "0 Bytes"

    value = float(size)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1

    number = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{number} {_SIZE_UNITS[unit]}"


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a 'Z' suffix."""
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"

# -----------------------------------------------------------------------------
# SAVE SINK
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SaveResult:
    """
    Outcome of writing a formatted document to disk.

    Attributes:
        success: True when the file was written.
        file_path: Absolute destination path (when known).
        error: Error description on failure.
    """
    success: bool
    file_path: Optional[str] = None
    error: Optional[str] = None


def default_output_filename(repository_name: str, timestamp: Optional[str] = None) -> str:
    """
    Build the default document file name.

    Format: '<repo>-packed-<timestamp>.txt', where ':' and '.' of the ISO
    timestamp are replaced by '-'.
    """
    stamp = (timestamp or utc_timestamp()).replace(":", "-").replace(".", "-")
    name = repository_name.strip() or "repository"
    return f"{name}-packed-{stamp}.txt"


def save_output(
        content: str,
        file_path: Optional[str] = None,
        directory: Optional[str] = None,
        repository_name: str = "repository",
) -> SaveResult:
    """
    Write the formatted document to disk as UTF-8.

    Args:
        content: The document text.
        file_path: Explicit destination. When omitted the default file name
            is generated inside `directory` (or the working directory).
        directory: Target directory for the generated file name.
        repository_name: Used to build the default file name.

    Returns:
        SaveResult: Success flag, destination and optional error message.
    """
    if not file_path:
        base = directory or os.getcwd()
        file_path = os.path.join(base, default_output_filename(repository_name))

    target = os.path.abspath(file_path)
    try:
        parent = os.path.dirname(target)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        logger.error(f"Failed to save output to {target}: {e}")
        return SaveResult(success=False, file_path=target, error=str(e))

    logger.info(f"Output saved to {target}")
    return SaveResult(success=True, file_path=target)
