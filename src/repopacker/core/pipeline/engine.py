from __future__ import annotations

"""
Core orchestration pipeline.

Coordinates the packing workflow, strictly left to right:
1. Walker: enumerate files and build the directory tree.
2. Filter: apply ignore patterns and the size threshold, compute statistics.
3. Transformer: per-file content transformation (sequential, cancellable
   between files).
4. Accumulator: token and character metrics.
5. Formatter: render the document for the target profile.

Each stage consumes the previous stage's output plus the options snapshot;
no stage reads ambient state.
"""

import logging
import os
import threading
from typing import Any, Dict, List, Optional, Tuple, Union

from repopacker.core.analysis.tree_generator import walk
from repopacker.core.formatting.formatter import format_output
from repopacker.core.pipeline.components.filters import filter_files
from repopacker.core.pipeline.components.ignore_matcher import IgnoreMatcher
from repopacker.core.pipeline.components.progress import ProgressNotifier
from repopacker.core.pipeline.stages.assembler import (
    MetricsAccumulator,
    build_processed_output,
    measure,
)
from repopacker.core.pipeline.stages.transcriber import transform_file
from repopacker.core.pipeline.stages.validator import validate_config
from repopacker.domain.config import ScanOptions
from repopacker.domain.errors import (
    InvalidRepositoryError,
    PipelineCancelledError,
    RepoPackerError,
)
from repopacker.domain.file_models import BasicStats, FileEntry, LargestFile
from repopacker.domain.pipeline_models import (
    STATUS_COMPLETE,
    STATUS_ERROR,
    STATUS_FORMATTING,
    STATUS_PROCESSING,
    STATUS_SCANNING,
    PipelineResult,
    ProcessedOutput,
    ProgressReporter,
    ScanResult,
    create_error_result,
    create_success_result,
)
from repopacker.infra.fs import format_bytes, normalize_path

logger = logging.getLogger(__name__)

ConfigInput = Union[ScanOptions, Dict[str, Any], None]


# ==============================================================================
# STAGES
# ==============================================================================

def scan_repository(
        root_path: str,
        options: ScanOptions,
        progress: Optional[ProgressReporter] = None,
) -> ScanResult:
    """
    Run the Walker and Filter stages.

    Args:
        root_path: Repository root.
        options: Run configuration.
        progress: Optional progress sink.

    Returns:
        ScanResult: Kept files, statistics, tree and discovered count.

    Raises:
        InvalidRepositoryError: If the root cannot be walked.
    """
    notifier = ProgressNotifier(progress)
    root = _resolve_root(root_path)

    notifier.emit(STATUS_SCANNING, 0, "Scanning repository...", "Checking for .gitignore patterns")
    matcher = IgnoreMatcher.for_repository(root, options.exclude_patterns)

    notifier.emit(STATUS_SCANNING, 10, "Scanning repository...", "Finding all files")
    discovered, tree = walk(root)

    notifier.emit(STATUS_SCANNING, 20, "Scanning repository...", f"Found {len(discovered)} files, filtering...")
    kept, stats = filter_files(discovered, matcher, options.max_file_size_mb, notifier)

    notifier.emit(STATUS_SCANNING, 25, "Generating directory structure...", "Mapping repository structure")
    notifier.emit(STATUS_SCANNING, 30, "Repository scan complete", f"Found {len(kept)} files to process")

    return ScanResult(files=kept, stats=stats, directory_tree=tree, discovered_count=len(discovered))


def process_files(
        scan: ScanResult,
        options: ScanOptions,
        root_path: str,
        progress: Optional[ProgressReporter] = None,
        cancel_event: Optional[threading.Event] = None,
) -> ProcessedOutput:
    """
    Run the Transformer and Accumulator stages, one file at a time.

    Args:
        scan: Output of `scan_repository`.
        options: Run configuration.
        root_path: Repository root.
        progress: Optional progress sink.
        cancel_event: Checked before each file.

    Returns:
        ProcessedOutput: Processed files, metadata and tree.

    Raises:
        PipelineCancelledError: If `cancel_event` is set between files.
    """
    notifier = ProgressNotifier(progress)
    accumulator = MetricsAccumulator()
    processed: List[FileEntry] = []
    total = len(scan.files)

    for i, entry in enumerate(scan.files):
        _check_cancelled(cancel_event)
        notifier.emit(
            STATUS_PROCESSING,
            30 + 50 * i / total,
            f"Processing file {i + 1}/{total}",
            entry.relative_path,
        )

        outcome = transform_file(entry, options)
        enriched = measure(entry, outcome, options.tokenizer_encoding)
        accumulator.add(enriched)
        processed.append(enriched)
        logger.debug(f"Processed {entry.relative_path}: {enriched.char_count} chars")

    return build_processed_output(
        processed,
        accumulator.metrics,
        options,
        _resolve_root(root_path),
        scan.directory_tree,
        scan.skipped_count,
    )


# ==============================================================================
# ORCHESTRATION
# ==============================================================================

def pack_repository(
        root_path: str,
        options: Optional[ScanOptions] = None,
        progress: Optional[ProgressReporter] = None,
        cancel_event: Optional[threading.Event] = None,
) -> Tuple[str, ProcessedOutput]:
    """
    Execute the whole pipeline and return the formatted document.

    Args:
        root_path: Repository root.
        options: Run configuration (defaults when omitted).
        progress: Optional progress sink.
        cancel_event: Optional cooperative cancellation flag.

    Returns:
        Tuple[str, ProcessedOutput]: Document text and the processed output.

    Raises:
        InvalidRepositoryError: Missing or unreadable root.
        PipelineCancelledError: Cancellation observed between files or stages.
    """
    opts = options or ScanOptions()
    notifier = ProgressNotifier(progress)
    logger.info(f"Packing repository: {root_path}")

    scan = scan_repository(root_path, opts, progress)
    _check_cancelled(cancel_event)

    notifier.emit(STATUS_PROCESSING, 30, "Reading file contents...")
    output = process_files(scan, opts, root_path, progress, cancel_event)
    _check_cancelled(cancel_event)

    notifier.emit(STATUS_FORMATTING, 80, "Formatting output...")
    document = format_output(output, opts.target_profile)

    notifier.emit(STATUS_COMPLETE, 100, "Processing complete!")
    logger.info(f"Pack finished: {len(document)} characters")
    return document, output


def run_pipeline(
        input_path: Optional[str],
        config: ConfigInput = None,
        *,
        progress: Optional[ProgressReporter] = None,
        cancel_event: Optional[threading.Event] = None,
) -> PipelineResult:
    """
    Execute the pipeline and report the outcome as a value.

    Expected failures (invalid root, cancellation) never raise: they produce
    `PipelineResult(ok=False)` and an 'error' progress event.

    Args:
        input_path: Repository root (empty means the working directory).
        config: ScanOptions, or a raw dictionary validated non-strictly.
        progress: Optional progress sink.
        cancel_event: Optional cooperative cancellation flag.

    Returns:
        PipelineResult: Status, document, processed output and summary.
    """
    logger.info("Pipeline execution started.")
    options = _coerce_options(config)
    base_path = normalize_path(input_path, os.getcwd())
    notifier = ProgressNotifier(progress)

    try:
        document, output = pack_repository(base_path, options, progress, cancel_event)
    except PipelineCancelledError as e:
        logger.warning(f"Pipeline cancelled: {e}")
        notifier.emit(STATUS_ERROR, 0, f"Error: {e}")
        return create_error_result(str(e), options, base_path, {"cancelled": True})
    except (RepoPackerError, OSError) as e:
        logger.error(f"Pipeline failed: {e}")
        notifier.emit(STATUS_ERROR, 0, f"Error: {e}")
        return create_error_result(str(e), options, base_path)

    return create_success_result(options, base_path, document, output)


def get_basic_stats(root_path: str, options: Optional[ScanOptions] = None) -> BasicStats:
    """
    Cheap pre-scan summary: Walker + Filter, no content is read.

    Args:
        root_path: Repository root.
        options: Run configuration (defaults when omitted).

    Returns:
        BasicStats: Counts, sizes, per-type counts and largest files.

    Raises:
        InvalidRepositoryError: Missing or unreadable root.
    """
    opts = options or ScanOptions()
    scan = scan_repository(root_path, opts)

    file_type_counts: Dict[str, int] = {}
    for entry in scan.files:
        if entry.extension:
            file_type_counts[entry.extension] = file_type_counts.get(entry.extension, 0) + 1

    return BasicStats(
        file_count=scan.stats.total_files,
        total_size_bytes=scan.stats.total_size,
        file_type_counts=file_type_counts,
        skipped_count=scan.skipped_count,
        largest_files=[
            LargestFile(name=f.relative_path, size_formatted=format_bytes(f.size_bytes))
            for f in scan.stats.largest_files
        ],
    )


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _resolve_root(root_path: str) -> str:
    root = normalize_path(root_path, os.getcwd())
    if not os.path.isdir(root):
        raise InvalidRepositoryError(path=root, message="Invalid input directory")
    return root


def _check_cancelled(cancel_event: Optional[threading.Event]) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise PipelineCancelledError()


def _coerce_options(config: ConfigInput) -> ScanOptions:
    if isinstance(config, ScanOptions):
        return config
    if config is None:
        return ScanOptions()

    options, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")
    return options
