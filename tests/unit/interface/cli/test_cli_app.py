from __future__ import annotations

"""
Unit tests for the CLI Application Controller.

Runs `main()` in-process with the persisted configuration, clipboard and
logging bootstrap patched, asserting exit codes and stream output.
"""

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from repopacker.interface.cli import app

APP = "repopacker.interface.cli.app"


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path):
    """Keep the user data directory and logging setup out of the tests."""
    with patch("repopacker.domain.config.get_user_data_dir", return_value=str(tmp_path / "data")), \
            patch(f"{APP}.configure_logging"):
        (tmp_path / "data").mkdir()
        yield


@pytest.fixture
def sample_repo(make_repo) -> Path:
    return make_repo({
        "src/app.js": "// entry\nconsole.log('hi');\n",
        "README.md": "# Sample\n",
        "debug.log": "noise",
    })


def test_merge_config_skips_none() -> None:
    """TC-01: None overrides never replace base values."""
    merged = app._merge_config({"a": 1, "b": 2}, {"a": None, "b": 3, "c": 4})
    assert merged == {"a": 1, "b": 3, "c": 4}


def test_document_goes_to_stdout(sample_repo: Path, capsys) -> None:
    """TC-02: Without a sink the formatted document is printed."""
    code = app.main(["-i", str(sample_repo), "--use-defaults", "--encoding", "heuristic"])

    out = capsys.readouterr().out
    assert code == 0
    assert out.startswith("# Repository Pack")
    assert "### 1. `src/app.js`" in out
    assert "debug.log" not in out.split("## Table of Contents")[1]


def test_invalid_input_path_exit_code(tmp_path: Path, capsys) -> None:
    """TC-03: A missing directory exits with 2."""
    code = app.main(["-i", str(tmp_path / "missing"), "--use-defaults"])

    assert code == 2
    assert "ERROR:" in capsys.readouterr().err


def test_dump_config(sample_repo: Path, capsys) -> None:
    """TC-04: The merged, validated configuration is printed as JSON."""
    code = app.main(["-i", str(sample_repo), "--use-defaults", "-p", "claude", "--skip-ext", "MD", "--dump-config"])

    data = json.loads(capsys.readouterr().out)
    assert code == 0
    assert data["target_profile"] == "claude"
    assert data["skip_extensions"] == [".md"]
    assert data["input_path"] == os.path.abspath(str(sample_repo))


def test_json_summary(sample_repo: Path, capsys) -> None:
    """TC-05: --json prints the run summary instead of the document."""
    code = app.main(["-i", str(sample_repo), "--use-defaults", "--encoding", "heuristic", "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert payload["ok"] is True
    assert payload["summary"]["processed"] == 2
    assert payload["summary"]["skipped"] == 1


def test_stats_mode(sample_repo: Path, capsys) -> None:
    """TC-06: --stats prints the pre-scan summary only."""
    code = app.main(["-i", str(sample_repo), "--use-defaults", "--stats", "--json"])

    stats = json.loads(capsys.readouterr().out)
    assert code == 0
    assert stats["file_count"] == 2
    assert stats["skipped_count"] == 1
    assert stats["file_type_counts"] == {".js": 1, ".md": 1}


def test_output_file_sink(sample_repo: Path, tmp_path: Path, capsys) -> None:
    """TC-07: -o writes the document and prints a short summary."""
    target = tmp_path / "out" / "pack.txt"

    code = app.main(["-i", str(sample_repo), "--use-defaults", "--encoding", "heuristic", "-o", str(target)])

    out = capsys.readouterr().out
    assert code == 0
    assert target.read_text(encoding="utf-8").startswith("# Repository Pack")
    assert "Saved:" in out
    assert "Files processed: 2" in out


def test_clipboard_failure_exit_code(sample_repo: Path, capsys) -> None:
    """TC-08: An unavailable clipboard makes the run exit with 1."""
    with patch(f"{APP}.copy_to_clipboard", return_value=False) as copy:
        code = app.main(["-i", str(sample_repo), "--use-defaults", "--encoding", "heuristic", "--clipboard"])

    assert code == 1
    copy.assert_called_once()
    assert "Clipboard is not available" in capsys.readouterr().err


def test_pipeline_failure_exit_code(sample_repo: Path, capsys) -> None:
    """TC-09: A failed pipeline result exits with 1."""
    failed = app.PipelineResult(ok=False, error="boom", base_path=str(sample_repo), target_profile="generic")

    with patch(f"{APP}.run_pipeline", return_value=failed):
        code = app.main(["-i", str(sample_repo), "--use-defaults"])

    assert code == 1
    assert "ERROR: boom" in capsys.readouterr().err


def test_keyboard_interrupt_exit_code(sample_repo: Path) -> None:
    """TC-10: Ctrl+C maps to exit code 130."""
    with patch(f"{APP}.run_pipeline", side_effect=KeyboardInterrupt):
        assert app.main(["-i", str(sample_repo), "--use-defaults"]) == 130


def test_save_config_persists_session(sample_repo: Path, tmp_path: Path) -> None:
    """TC-11: --save-config stores the merged options for the next run."""
    app.main(["-i", str(sample_repo), "--use-defaults", "-p", "gemini", "--save-config", "--dump-config"])

    stored = json.loads((tmp_path / "data" / "config.json").read_text(encoding="utf-8"))
    assert stored["last_session"]["target_profile"] == "gemini"
    assert stored["last_session"]["input_path"] == os.path.abspath(str(sample_repo))
