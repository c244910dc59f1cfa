from __future__ import annotations

"""
Transcription Domain Data Models.

Defines the per-file outcome union returned by the Content Transformer.
A file either yields transformed text or a placeholder marker; the
pipeline consumes both without ever aborting the batch.
"""

from dataclasses import dataclass
from typing import Union

# -----------------------------------------------------------------------------
# PER-FILE OUTCOMES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class TransformedContent:
    """
    Successfully read and transformed file content.

    Attributes:
        text: Content after every enabled transformation step.
    """
    text: str


@dataclass(frozen=True)
class Placeholder:
    """
    Fixed marker substituted for a file's real content.

    Attributes:
        text: The marker written into the document, e.g. '[Binary file: a.png]'.
        reason: Short machine-friendly cause ('binary', 'skipped', 'error').
    """
    text: str
    reason: str


FileOutcome = Union[TransformedContent, Placeholder]


def binary_placeholder(file_name: str) -> Placeholder:
    """Marker for files whose extension is registered as binary."""
    return Placeholder(text=f"[Binary file: {file_name}]", reason="binary")


def binary_content_placeholder(file_name: str) -> Placeholder:
    """Marker for text-extension files containing NUL bytes."""
    return Placeholder(text=f"[Binary content detected in file: {file_name}]", reason="binary")


def skipped_placeholder(extension: str) -> Placeholder:
    """Marker for files excluded by the extension skip list."""
    return Placeholder(text=f"[Skipped: {extension} file]", reason="skipped")


def error_placeholder(error: str) -> Placeholder:
    """Marker for unreadable or undecodable files."""
    return Placeholder(text=f"[Binary file or encoding error: {error}]", reason="error")
