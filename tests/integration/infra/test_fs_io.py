from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, cross-platform data directory resolution,
human-readable sizes and the save-output sink.
"""

import os
import re
from pathlib import Path
from unittest.mock import patch

import pytest

from repopacker.infra.fs import (
    default_output_filename,
    format_bytes,
    get_user_data_dir,
    normalize_path,
    save_output,
    to_relative_posix,
    utc_timestamp,
)

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_windows() -> None:
    """TC-01: Verify resolution of %LOCALAPPDATA% on Windows systems."""
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert "RepoPacker" in path


def test_get_user_data_dir_unix() -> None:
    """TC-01: Verify resolution of ~/.repopacker on Unix-like systems."""
    mock_home = "/home/testuser"
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value=mock_home):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert path.replace("\\", "/").endswith("/home/testuser/.repopacker")


def test_normalize_path_expansion() -> None:
    """TC-02: Verify expansion of environment variables and fallback."""
    with patch.dict(os.environ, {"TEST_VAR": "my_folder"}):
        path = normalize_path("$TEST_VAR/sub", fallback=".")
        assert path.lower().endswith(os.path.join("my_folder", "sub").lower())

    assert normalize_path("   ", fallback="/tmp") == os.path.abspath("/tmp")


def test_to_relative_posix(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b.txt"
    assert to_relative_posix(str(target), str(tmp_path)) == "a/b.txt"

# -----------------------------------------------------------------------------
# DISPLAY HELPERS
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("size,expected", [
    (0, "0 Bytes"),
    (10, "10 Bytes"),
    (1024, "1 KB"),
    (1536, "1.5 KB"),
    (1024 * 1024, "1 MB"),
    (int(2.25 * 1024 ** 3), "2.25 GB"),
])
def test_format_bytes(size: int, expected: str) -> None:
    """TC-03: Base-1024 units with trailing zeros dropped."""
    assert format_bytes(size) == expected


def test_utc_timestamp_format() -> None:
    """TC-04: ISO-8601 with milliseconds and a Z suffix."""
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_timestamp())

# -----------------------------------------------------------------------------
# SAVE SINK TESTS
# -----------------------------------------------------------------------------

def test_default_output_filename() -> None:
    """TC-05: ':' and '.' of the timestamp become '-'."""
    name = default_output_filename("demo", "2024-05-01T12:30:45.123Z")
    assert name == "demo-packed-2024-05-01T12-30-45-123Z.txt"


def test_save_output_explicit_path(tmp_path: Path) -> None:
    """TC-06: Content is written as UTF-8, creating parent directories."""
    target = tmp_path / "nested" / "pack.txt"

    result = save_output("héllo", file_path=str(target))

    assert result.success is True
    assert result.file_path == str(target)
    assert target.read_text(encoding="utf-8") == "héllo"


def test_save_output_default_name(tmp_path: Path) -> None:
    """TC-07: Without a path the generated name lands in the given directory."""
    result = save_output("doc", directory=str(tmp_path), repository_name="demo")

    saved = Path(result.file_path)
    assert result.success is True
    assert saved.parent == tmp_path
    assert saved.name.startswith("demo-packed-")
    assert saved.suffix == ".txt"


def test_save_output_failure(tmp_path: Path) -> None:
    """TC-08: An OSError is reported in the result instead of raised."""
    with patch("builtins.open", side_effect=PermissionError("denied")):
        result = save_output("doc", file_path=str(tmp_path / "x.txt"))

    assert result.success is False
    assert "denied" in result.error
