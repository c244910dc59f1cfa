from __future__ import annotations

"""
Directory Walker.

Recursively enumerates every file under a repository root and produces
both the flat discovery list and the nested DirectoryNode tree. Order is
deterministic at every level: directories first, then files, each group
sorted by name. Structural directories (VCS, dependency and build
folders) are pruned during traversal itself.
"""

import logging
import os
from typing import List, Tuple

from repopacker.domain.constants import STRUCTURAL_EXCLUSIONS
from repopacker.domain.errors import InvalidRepositoryError
from repopacker.domain.file_models import FileEntry
from repopacker.domain.tree_models import NODE_DIRECTORY, NODE_FILE, DirectoryNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def walk(root_path: str) -> Tuple[List[FileEntry], DirectoryNode]:
    """
    Walk the repository rooted at `root_path`.

    Unreadable subdirectories are skipped with a warning. Symbolic links to
    directories are never followed; symbolic links to files are kept only
    when their target resolves inside the root.

    Args:
        root_path: Repository root directory.

    Returns:
        Tuple[List[FileEntry], DirectoryNode]: Flat file list in discovery
        order and the root tree node (path '').

    Raises:
        InvalidRepositoryError: If the root is missing, not a directory or
            cannot be listed.
    """
    root = os.path.abspath(root_path)
    if not os.path.isdir(root):
        raise InvalidRepositoryError(path=root, message="Repository root is not a directory")

    try:
        with os.scandir(root):
            pass
    except OSError as e:
        raise InvalidRepositoryError(path=root, message=f"Cannot read repository root ({e.strerror})")

    logger.info(f"Walking repository: {root}")
    real_root = os.path.realpath(root)
    files: List[FileEntry] = []
    children = _walk_directory(root, "", real_root, files)

    tree = DirectoryNode(
        name=os.path.basename(root.rstrip(os.sep)) or root,
        path="",
        kind=NODE_DIRECTORY,
        children=tuple(children),
    )
    logger.debug(f"Walk finished: {len(files)} files discovered.")
    return files, tree

# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _walk_directory(
        abs_dir: str,
        rel_dir: str,
        real_root: str,
        files: List[FileEntry],
) -> List[DirectoryNode]:
    """
    Recurse into one directory, appending discovered files to `files`.

    Returns the ordered child nodes of the directory.
    """
    try:
        with os.scandir(abs_dir) as it:
            entries = list(it)
    except OSError as e:
        logger.warning(f"Skipping unreadable directory '{rel_dir or '.'}': {e}")
        return []

    dirs, regular = _partition_entries(entries, real_root)
    nodes: List[DirectoryNode] = []

    for entry in dirs:
        rel_path = _join(rel_dir, entry.name)
        grandchildren = _walk_directory(entry.path, rel_path, real_root, files)
        nodes.append(DirectoryNode(
            name=entry.name,
            path=rel_path,
            kind=NODE_DIRECTORY,
            children=tuple(grandchildren),
        ))

    for entry, size in regular:
        rel_path = _join(rel_dir, entry.name)
        files.append(FileEntry(
            absolute_path=os.path.abspath(entry.path),
            relative_path=rel_path,
            size_bytes=size,
            extension=os.path.splitext(entry.name)[1].lower(),
        ))
        nodes.append(DirectoryNode(name=entry.name, path=rel_path, kind=NODE_FILE))

    return nodes


def _partition_entries(
        entries: List[os.DirEntry],
        real_root: str,
) -> Tuple[List[os.DirEntry], List[Tuple[os.DirEntry, int]]]:
    """Split scandir entries into sorted directories and sorted (file, size) pairs."""
    dirs: List[os.DirEntry] = []
    regular: List[Tuple[os.DirEntry, int]] = []

    for entry in entries:
        try:
            if entry.is_dir(follow_symlinks=False):
                if entry.name not in STRUCTURAL_EXCLUSIONS:
                    dirs.append(entry)
                continue

            if entry.is_symlink():
                if entry.is_dir() or not _target_inside_root(entry.path, real_root):
                    logger.debug(f"Ignoring symbolic link: {entry.path}")
                    continue

            if entry.is_file():
                regular.append((entry, entry.stat().st_size))
        except OSError as e:
            logger.warning(f"Cannot stat '{entry.path}': {e}")

    dirs.sort(key=lambda e: e.name)
    regular.sort(key=lambda pair: pair[0].name)
    return dirs, regular


def _target_inside_root(path: str, real_root: str) -> bool:
    target = os.path.realpath(path)
    return target == real_root or target.startswith(real_root + os.sep)


def _join(rel_dir: str, name: str) -> str:
    return f"{rel_dir}/{name}" if rel_dir else name
