from __future__ import annotations

"""
Clipboard Sink.

Copies the formatted document to the system clipboard through pyperclip.
Headless environments without a clipboard backend report failure instead
of raising.
"""

import logging

import pyperclip

logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str) -> bool:
    """
    Place `text` on the system clipboard.

    Args:
        text: The document to copy.

    Returns:
        bool: True on success, False when no clipboard backend is usable.
    """
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.warning(f"Clipboard unavailable: {e}")
        return False

    logger.info(f"Copied {len(text)} characters to clipboard.")
    return True
