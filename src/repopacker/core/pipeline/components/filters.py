from __future__ import annotations

"""
File Filter and Statistics.

Applies the ignore matcher and the per-file size threshold to the walker's
flat list, then aggregates counts and sizes of the kept set.
"""

import logging
from typing import Dict, List, Optional, Tuple

from repopacker.core.pipeline.components.ignore_matcher import IgnoreMatcher
from repopacker.core.pipeline.components.progress import ProgressNotifier
from repopacker.domain.constants import FILTER_PROGRESS_BATCH, LARGEST_FILES_LIMIT
from repopacker.domain.file_models import ExtensionStats, FileEntry, FileStats
from repopacker.domain.pipeline_models import STATUS_SCANNING

logger = logging.getLogger(__name__)

NO_EXTENSION_KEY = "no-extension"

# -----------------------------------------------------------------------------
# FILTERING
# -----------------------------------------------------------------------------

def exceeds_size_limit(size_bytes: int, max_file_size_mb: float) -> bool:
    """
    Check the per-file threshold (mebibytes, inclusive at the limit).

    A non-positive limit disables the check.
    """
    if max_file_size_mb <= 0:
        return False
    return size_bytes > max_file_size_mb * 1024 * 1024


def filter_files(
        files: List[FileEntry],
        matcher: IgnoreMatcher,
        max_file_size_mb: float,
        notifier: Optional[ProgressNotifier] = None,
) -> Tuple[List[FileEntry], FileStats]:
    """
    Drop ignored and oversized entries, preserving discovery order.

    Args:
        files: Walker output.
        matcher: Compiled ignore patterns.
        max_file_size_mb: Per-file threshold in mebibytes.
        notifier: Optional progress emitter (one event every 50 files).

    Returns:
        Tuple[List[FileEntry], FileStats]: Kept entries and their aggregates.
    """
    kept: List[FileEntry] = []
    total = len(files)
    ignored = 0
    oversized = 0

    for i, entry in enumerate(files):
        if notifier and i % FILTER_PROGRESS_BATCH == 0:
            notifier.emit(
                STATUS_SCANNING,
                20 + 10 * i / total,
                "Filtering files...",
                f"Processed {i}/{total} files",
            )

        if matcher.matches(entry.relative_path):
            ignored += 1
            continue

        if exceeds_size_limit(entry.size_bytes, max_file_size_mb):
            logger.debug(f"Over size limit: {entry.relative_path} ({entry.size_bytes} bytes)")
            oversized += 1
            continue

        kept.append(entry)

    logger.info(f"Filter kept {len(kept)}/{total} files ({ignored} ignored, {oversized} over size limit)")
    return kept, compute_file_statistics(kept)

# -----------------------------------------------------------------------------
# STATISTICS
# -----------------------------------------------------------------------------

def compute_file_statistics(files: List[FileEntry], top_n: int = LARGEST_FILES_LIMIT) -> FileStats:
    """
    Aggregate count and size per extension plus the largest files.

    The largest-files list is sorted by size descending; `sorted` is stable,
    so ties keep discovery order.
    """
    by_extension: Dict[str, ExtensionStats] = {}
    for entry in files:
        key = entry.extension or NO_EXTENSION_KEY
        bucket = by_extension.setdefault(key, ExtensionStats())
        bucket.count += 1
        bucket.size += entry.size_bytes

    largest = sorted(files, key=lambda f: f.size_bytes, reverse=True)[:top_n]

    return FileStats(
        total_files=len(files),
        total_size=sum(f.size_bytes for f in files),
        by_extension=by_extension,
        largest_files=largest,
    )
