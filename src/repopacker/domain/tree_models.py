from __future__ import annotations

"""
Directory Tree Structure Data Models.

Provides the recursive node type used by the Directory Walker to build the
hierarchical project map rendered in the output document.
"""

from dataclasses import dataclass, field
from typing import Tuple

NODE_DIRECTORY = "directory"
NODE_FILE = "file"

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DirectoryNode:
    """
    Represents one entry (directory or file) in the directory tree.

    Children are ordered directories-first, then by name, at every level.
    File nodes never carry children.

    Attributes:
        name: Base name of the entry.
        path: Path relative to the scan root ('' for the root itself).
        kind: Either 'directory' or 'file'.
        children: Ordered child nodes (directories only).
    """
    name: str
    path: str
    kind: str = NODE_DIRECTORY
    children: Tuple[DirectoryNode, ...] = field(default_factory=tuple)

    @property
    def is_directory(self) -> bool:
        return self.kind == NODE_DIRECTORY
