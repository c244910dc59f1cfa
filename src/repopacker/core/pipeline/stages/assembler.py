from __future__ import annotations

"""
Metrics Accumulator and Output Assembly Stage.

Measures each file outcome (tokens, characters), keeps running totals
plus per-path maps, and assembles the terminal ProcessedOutput consumed
by the formatter.
"""

import logging
import os
from typing import List, Optional

from repopacker.core.processing.tokenizer import count_chars, count_tokens
from repopacker.domain.config import ScanOptions
from repopacker.domain.file_models import FileEntry
from repopacker.domain.pipeline_models import OutputMetadata, OutputMetrics, ProcessedOutput
from repopacker.domain.transcription_models import FileOutcome, Placeholder
from repopacker.domain.tree_models import DirectoryNode
from repopacker.infra.fs import utc_timestamp

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# METRICS
# -----------------------------------------------------------------------------

def measure(entry: FileEntry, outcome: FileOutcome, encoding: str) -> FileEntry:
    """
    Enrich an entry with its outcome text and metrics.

    Placeholders carry their literal length as char_count and zero tokens.
    """
    is_placeholder = isinstance(outcome, Placeholder)
    token_count = 0 if is_placeholder else count_tokens(outcome.text, encoding)
    return entry.with_content(
        content=outcome.text,
        token_count=token_count,
        char_count=count_chars(outcome.text),
        is_placeholder=is_placeholder,
    )


class MetricsAccumulator:
    """Append-only totals over processed entries (placeholders excluded)."""

    def __init__(self) -> None:
        self.metrics = OutputMetrics()

    def add(self, entry: FileEntry) -> None:
        if entry.is_placeholder:
            return
        m = self.metrics
        m.total_tokens += entry.token_count
        m.total_chars += entry.char_count
        m.file_token_counts[entry.relative_path] = entry.token_count
        m.file_char_counts[entry.relative_path] = entry.char_count

# -----------------------------------------------------------------------------
# ASSEMBLY
# -----------------------------------------------------------------------------

def resolve_repository_name(options: ScanOptions, root_path: str) -> str:
    """Configured display name, or the root directory's base name."""
    if options.repository_name:
        return options.repository_name
    return os.path.basename(os.path.abspath(root_path).rstrip(os.sep)) or root_path


def build_processed_output(
        files: List[FileEntry],
        metrics: OutputMetrics,
        options: ScanOptions,
        root_path: str,
        directory_tree: DirectoryNode,
        skipped_count: int,
        timestamp: Optional[str] = None,
) -> ProcessedOutput:
    """
    Assemble the terminal artifact of the processing stages.

    Args:
        files: Processed entries in discovery order.
        metrics: Accumulated metrics.
        options: Run configuration snapshot.
        root_path: Absolute repository root.
        directory_tree: Root node from the walker.
        skipped_count: Discovered minus kept files.
        timestamp: Generation time (defaults to now, UTC).

    Returns:
        ProcessedOutput: Metadata, tree and files.
    """
    metadata = OutputMetadata(
        total_files=len(files),
        total_size=sum(f.size_bytes for f in files),
        skipped_count=skipped_count,
        timestamp=timestamp or utc_timestamp(),
        repository_name=resolve_repository_name(options, root_path),
        repository_path=os.path.abspath(root_path),
        options=options,
        metrics=metrics,
    )
    logger.info(
        f"Assembled {metadata.total_files} files: "
        f"{metrics.total_tokens} tokens, {metrics.total_chars} chars"
    )
    return ProcessedOutput(metadata=metadata, directory_tree=directory_tree, files=list(files))
