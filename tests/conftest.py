from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures: a raw options dictionary and a sample repository factory.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Union

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def mock_config_dict() -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Mirrors the fields of 'repopacker.domain.config.ScanOptions' plus the
    interface-level 'input_path' key.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        # IO
        "input_path": "/tmp/test_input",

        # Selection
        "max_file_size_mb": 50.0,
        "exclude_patterns": [],
        "skip_extensions": [],

        # Transformations
        "remove_comments": False,
        "remove_empty_lines": False,
        "redact_secrets": False,
        "minify_code": False,
        "minify_css": False,
        "minify_html": False,
        "max_chars_per_file": 0,

        # Output
        "custom_header": "",
        "repository_name": "",
        "repository_instructions": "",
        "target_profile": "generic",
        "tokenizer_encoding": "heuristic",
    }


RepoFactory = Callable[[Dict[str, Union[str, bytes]]], Path]


@pytest.fixture
def make_repo(tmp_path: Path) -> RepoFactory:
    """
    Factory building a repository from a {relative_path: content} mapping.

    String contents are written as UTF-8, bytes are written verbatim.
    Parent directories are created as needed.

    Returns:
        Callable: Builder returning the repository root.
    """
    def _build(files: Dict[str, Union[str, bytes]], name: str = "repo") -> Path:
        root = tmp_path / name
        root.mkdir(exist_ok=True)
        for rel, content in files.items():
            target = root / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content, encoding="utf-8")
        return root

    return _build
