from __future__ import annotations

"""
Gitignore-Style Ignore Matcher.

Compiles three ordered pattern layers into a single pathspec
GitIgnoreSpec:

1. the repository's own .gitignore,
2. the built-in defaults (dependency, VCS and build folders, logs, locks),
3. user-supplied exclude patterns.

Later layers take precedence: the last pattern matching a path decides,
so a user '!pattern' can re-include a path ignored by .gitignore.
"""

import logging
import os
from typing import Iterable, List, Sequence

import pathspec

from repopacker.domain.constants import DEFAULT_IGNORE_PATTERNS

logger = logging.getLogger(__name__)

GITIGNORE_FILE = ".gitignore"

# -----------------------------------------------------------------------------
# GITIGNORE INTEGRATION
# -----------------------------------------------------------------------------

def parse_gitignore_lines(lines: Iterable[str]) -> List[str]:
    """Keep non-empty, non-comment lines, stripped of surrounding whitespace."""
    patterns: List[str] = []
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        patterns.append(line)
    return patterns


def load_gitignore_patterns(root_path: str) -> List[str]:
    """
    Read the repository-level .gitignore file.

    Args:
        root_path: Repository root directory.

    Returns:
        List[str]: Patterns in file order; empty when the file is absent or
        unreadable.
    """
    gitignore_path = os.path.join(root_path, GITIGNORE_FILE)
    if not os.path.isfile(gitignore_path):
        return []

    try:
        with open(gitignore_path, "r", encoding="utf-8") as f:
            patterns = parse_gitignore_lines(f)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read {gitignore_path}: {e}")
        return []

    logger.debug(f"Loaded {len(patterns)} patterns from .gitignore")
    return patterns

# -----------------------------------------------------------------------------
# MATCHER
# -----------------------------------------------------------------------------

class IgnoreMatcher:
    """Predicate over repository-relative paths."""

    def __init__(self, patterns: Sequence[str]) -> None:
        self.patterns: List[str] = list(patterns)
        self._spec = pathspec.GitIgnoreSpec.from_lines(self.patterns)

    @classmethod
    def from_layers(
            cls,
            gitignore_patterns: Sequence[str] = (),
            user_patterns: Sequence[str] = (),
    ) -> IgnoreMatcher:
        """Compose .gitignore, built-in defaults and user patterns, in that order."""
        layered = list(gitignore_patterns) + list(DEFAULT_IGNORE_PATTERNS) + list(user_patterns)
        return cls(layered)

    @classmethod
    def for_repository(cls, root_path: str, user_patterns: Sequence[str] = ()) -> IgnoreMatcher:
        """Build the matcher for a repository root, reading its .gitignore."""
        return cls.from_layers(load_gitignore_patterns(root_path), user_patterns)

    def matches(self, relative_path: str) -> bool:
        """
        True when the path is ignored.

        Args:
            relative_path: Forward-slash path relative to the repository root.
        """
        return self._spec.match_file(relative_path)
