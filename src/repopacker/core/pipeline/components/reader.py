from __future__ import annotations

"""
Text File Reader with Binary Detection.

Registered binary extensions are never opened. Other files are read in
full and decoded as strict UTF-8; a NUL byte marks the content as binary.
Read and decode failures become placeholder outcomes.
"""

import logging
import os

from repopacker.domain.constants import BINARY_EXTENSIONS
from repopacker.domain.transcription_models import (
    FileOutcome,
    TransformedContent,
    binary_content_placeholder,
    binary_placeholder,
    error_placeholder,
)

logger = logging.getLogger(__name__)


def is_binary_extension(extension: str) -> bool:
    return (extension or "").lower() in BINARY_EXTENSIONS


def read_file_content(file_path: str, extension: str) -> FileOutcome:
    """
    Read a file as text, or classify it as binary.

    Args:
        file_path: Absolute filesystem path.
        extension: Lowercase extension with leading dot.

    Returns:
        FileOutcome: The decoded text, or a binary/error placeholder.
    """
    name = os.path.basename(file_path)

    if is_binary_extension(extension):
        return binary_placeholder(name)

    try:
        with open(file_path, "rb") as f:
            raw = f.read()
        if b"\x00" in raw:
            return binary_content_placeholder(name)
        return TransformedContent(text=raw.decode("utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Cannot read {file_path}: {e}")
        return error_placeholder(str(e))
