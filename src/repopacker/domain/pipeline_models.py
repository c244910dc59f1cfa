from __future__ import annotations

"""
Pipeline Domain Data Models.

Defines the data structures and factory functions used to communicate
stage outputs and execution results between the pipeline engine and
interface layers (CLI or any other shell).
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from repopacker.domain.config import ScanOptions
from repopacker.domain.file_models import FileEntry, FileStats
from repopacker.domain.tree_models import DirectoryNode

# -----------------------------------------------------------------------------
# PROGRESS NOTIFICATION
# -----------------------------------------------------------------------------

STATUS_SCANNING = "scanning"
STATUS_PROCESSING = "processing"
STATUS_FORMATTING = "formatting"
STATUS_COMPLETE = "complete"
STATUS_ERROR = "error"


@dataclass(frozen=True)
class ProgressEvent:
    """
    One-way notification sent to the caller's progress sink.

    Attributes:
        status: One of scanning/processing/formatting/complete/error.
        progress: Percentage in the 0-100 range.
        message: Short human-readable status line.
        details: Optional secondary line (current file, counters).
    """
    status: str
    progress: int
    message: str
    details: Optional[str] = None


ProgressReporter = Callable[[ProgressEvent], None]

# -----------------------------------------------------------------------------
# STAGE OUTPUTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ScanResult:
    """
    Output of the Walker + Filter stages.

    Attributes:
        files: Kept files in discovery order.
        stats: Aggregates over the kept set.
        directory_tree: Root node of the walked tree.
        discovered_count: Number of files found by the walk.
    """
    files: List[FileEntry]
    stats: FileStats
    directory_tree: DirectoryNode
    discovered_count: int

    @property
    def skipped_count(self) -> int:
        return self.discovered_count - len(self.files)


@dataclass
class OutputMetrics:
    """Running token/char totals plus per-path mappings."""
    total_tokens: int = 0
    total_chars: int = 0
    file_token_counts: Dict[str, int] = field(default_factory=dict)
    file_char_counts: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class OutputMetadata:
    """
    Document-level metadata carried alongside the processed files.

    Attributes:
        total_files: Number of processed entries.
        total_size: Sum of their on-disk sizes.
        skipped_count: Discovered files excluded before processing.
        timestamp: ISO-8601 UTC generation time.
        repository_name: Display name of the repository.
        repository_path: Absolute root path.
        options: The ScanOptions snapshot used for the run.
        metrics: Aggregate token and character metrics.
    """
    total_files: int
    total_size: int
    skipped_count: int
    timestamp: str
    repository_name: str
    repository_path: str
    options: ScanOptions
    metrics: OutputMetrics

    @property
    def custom_header(self) -> str:
        return self.options.custom_header


@dataclass(frozen=True)
class ProcessedOutput:
    """
    Terminal artifact of the processing stages, consumed by the formatter.

    Attributes:
        metadata: Counts, timestamp, options snapshot and metrics.
        directory_tree: Root DirectoryNode.
        files: Processed entries in discovery order.
    """
    metadata: OutputMetadata
    directory_tree: DirectoryNode
    files: List[FileEntry]

# -----------------------------------------------------------------------------
# EXECUTION RESULT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class PipelineResult:
    """
    Unified result object of a complete pipeline execution.

    Attributes:
        ok: Flag indicating success or failure.
        error: Descriptive message in case of failure.
        base_path: Normalized root directory processed.
        target_profile: Profile used for formatting.
        document: The formatted document (empty on failure).
        output: Processed output (None on failure).
        summary: Technical execution summary and statistics.
    """
    ok: bool
    error: str
    base_path: str
    target_profile: str
    document: str = ""
    output: Optional[ProcessedOutput] = None
    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        options: ScanOptions,
        base_path: str,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> PipelineResult:
    """
    Create a failed pipeline result instance.

    Args:
        error: Detailed error description.
        options: The options used during the failed run.
        base_path: The target input directory.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        PipelineResult: An immutable error result object.
    """
    return PipelineResult(
        ok=False,
        error=error,
        base_path=base_path,
        target_profile=options.target_profile,
        summary=summary_extra or {},
    )


def create_success_result(
        options: ScanOptions,
        base_path: str,
        document: str,
        output: ProcessedOutput,
) -> PipelineResult:
    """
    Create a successful pipeline result instance with its summary block.

    Args:
        options: Final options used during execution.
        base_path: Normalized input directory.
        document: Formatted document text.
        output: Processed output consumed by the formatter.

    Returns:
        PipelineResult: An immutable success result object.
    """
    meta = output.metadata
    summary = {
        "repository_name": meta.repository_name,
        "timestamp": meta.timestamp,
        "processed": meta.total_files,
        "skipped": meta.skipped_count,
        "placeholders": sum(1 for f in output.files if f.is_placeholder),
        "total_size": meta.total_size,
        "total_tokens": meta.metrics.total_tokens,
        "total_chars": meta.metrics.total_chars,
        "document_chars": len(document),
        "options": options.to_dict(),
    }
    return PipelineResult(
        ok=True,
        error="",
        base_path=base_path,
        target_profile=options.target_profile,
        document=document,
        output=output,
        summary=summary,
    )
