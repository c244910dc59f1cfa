from __future__ import annotations

"""
Content Transformer.

Runs the per-file transformation chain in a fixed order, each step
toggled independently by ScanOptions:

1. read and binary detection (extension registry, NUL bytes),
2. comment removal (per language family),
3. blank-line collapsing,
4. secret redaction,
5. minification (one category per extension),
6. middle truncation to the per-file character budget.

Placeholders bypass every step after the first. A file never aborts the
batch: every failure degrades to a placeholder or to the content as it
was before the failing step.
"""

import logging

from repopacker.core.pipeline.components.reader import is_binary_extension, read_file_content
from repopacker.core.processing.comments import collapse_blank_lines, remove_comments
from repopacker.core.processing.minifier import minifier_for, safe_minify
from repopacker.core.processing.sanitizer import redact_secrets
from repopacker.domain.config import ScanOptions
from repopacker.domain.file_models import FileEntry
from repopacker.domain.transcription_models import (
    FileOutcome,
    Placeholder,
    TransformedContent,
    error_placeholder,
    skipped_placeholder,
)

logger = logging.getLogger(__name__)

TRUNCATION_NOTICE = "\n\n... [Content truncated, {omitted} characters omitted] ...\n\n"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def transform_file(entry: FileEntry, options: ScanOptions) -> FileOutcome:
    """
    Produce the final content outcome of one file.

    Args:
        entry: Discovered file.
        options: Run configuration.

    Returns:
        FileOutcome: TransformedContent, or a Placeholder for binary,
        skipped and unreadable files.
    """
    extension = entry.extension

    if extension in options.skip_extensions and not is_binary_extension(extension):
        return skipped_placeholder(extension)

    outcome = read_file_content(entry.absolute_path, extension)
    if isinstance(outcome, Placeholder):
        return outcome

    try:
        text = apply_transformations(outcome.text, extension, options, label=entry.relative_path)
    except Exception as e:
        logger.warning(f"Transformation failed for {entry.relative_path}: {e}")
        return error_placeholder(str(e))

    return TransformedContent(text=text)


def transform(path: str, extension: str, options: ScanOptions) -> str:
    """
    String-level form of `transform_file`: the content or the placeholder text.

    Args:
        path: Absolute path of the file.
        extension: Lowercase extension with leading dot.
        options: Run configuration.

    Returns:
        str: Transformed content or a placeholder marker.
    """
    entry = FileEntry(absolute_path=path, relative_path=path, size_bytes=0, extension=extension)
    return transform_file(entry, options).text


def apply_transformations(text: str, extension: str, options: ScanOptions, label: str = "") -> str:
    """Run steps 2-6 of the chain on already decoded text."""
    if options.remove_comments:
        text = remove_comments(text, extension)

    if options.remove_empty_lines:
        text = collapse_blank_lines(text)

    if options.redact_secrets:
        text = redact_secrets(text)

    minifier = minifier_for(extension, options.minify_code, options.minify_css, options.minify_html)
    if minifier is not None:
        text = safe_minify(text, minifier, label=label)

    if options.max_chars_per_file > 0:
        text = truncate_content(text, options.max_chars_per_file)

    return text


def truncate_content(text: str, max_chars: int) -> str:
    """
    Keep the head and tail halves of over-long content.

    Args:
        text: Content to shorten.
        max_chars: Character budget; content at or under it is unchanged.

    Returns:
        str: The original text or head + notice + tail.
    """
    if max_chars <= 0 or len(text) <= max_chars:
        return text

    half = max_chars // 2
    omitted = len(text) - max_chars
    tail = text[len(text) - half:] if half else ""
    return text[:half] + TRUNCATION_NOTICE.format(omitted=omitted) + tail
