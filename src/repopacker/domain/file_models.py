from __future__ import annotations

"""
File Discovery Data Models.

Defines the immutable records produced by the Directory Walker and
enriched by later pipeline stages, plus the aggregate statistics computed
by the File Filter.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

# -----------------------------------------------------------------------------
# DISCOVERED FILES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileEntry:
    """
    One discovered file.

    Stages never mutate an entry: enrichment returns a new copy through
    `with_content`.

    Attributes:
        absolute_path: Absolute filesystem path.
        relative_path: Path relative to the scan root, forward-slash normalized.
        size_bytes: File size in bytes.
        extension: Lowercase extension including the leading dot, or empty.
        content: Transformed content or placeholder marker (after processing).
        token_count: Estimated token count of `content`.
        char_count: Literal character length of `content`.
        is_placeholder: True when `content` is a placeholder marker.
    """
    absolute_path: str
    relative_path: str
    size_bytes: int
    extension: str
    content: Optional[str] = None
    token_count: int = 0
    char_count: int = 0
    is_placeholder: bool = False

    @property
    def name(self) -> str:
        """Base file name."""
        return self.relative_path.rsplit("/", 1)[-1]

    def with_content(
            self,
            content: str,
            token_count: int,
            char_count: int,
            is_placeholder: bool,
    ) -> FileEntry:
        """Return an enriched copy carrying processed content and metrics."""
        return replace(
            self,
            content=content,
            token_count=token_count,
            char_count=char_count,
            is_placeholder=is_placeholder,
        )

# -----------------------------------------------------------------------------
# FILTER STATISTICS
# -----------------------------------------------------------------------------

@dataclass
class ExtensionStats:
    """Count and cumulative size of kept files sharing one extension."""
    count: int = 0
    size: int = 0


@dataclass(frozen=True)
class FileStats:
    """
    Aggregates over the kept file set.

    Attributes:
        total_files: Number of kept files.
        total_size: Sum of kept file sizes in bytes.
        by_extension: Per-extension counters ('no-extension' for empty).
        largest_files: Top-N kept files by size, descending, ties in discovery order.
    """
    total_files: int = 0
    total_size: int = 0
    by_extension: Dict[str, ExtensionStats] = field(default_factory=dict)
    largest_files: List[FileEntry] = field(default_factory=list)

# -----------------------------------------------------------------------------
# PRE-SCAN SUMMARY
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LargestFile:
    """Display record for the pre-scan largest files list."""
    name: str
    size_formatted: str


@dataclass(frozen=True)
class BasicStats:
    """
    Cheap repository summary computed without reading file contents.

    Attributes:
        file_count: Number of files that would be processed.
        total_size_bytes: Sum of their sizes.
        file_type_counts: Count per extension (extension-less files omitted).
        skipped_count: Discovered files excluded by patterns or size.
        largest_files: Largest kept files, formatted for display.
    """
    file_count: int
    total_size_bytes: int
    file_type_counts: Dict[str, int]
    skipped_count: int
    largest_files: List[LargestFile]
