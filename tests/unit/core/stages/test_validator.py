from __future__ import annotations

"""
Unit tests for the Configuration Validator.

Verifies:
1. Type coercion (String to Bool/List/Float).
2. Default value injection.
3. Domain normalization (extensions, profiles).
4. Strict mode validation.
"""

import pytest

from repopacker.core.pipeline.stages.validator import validate_config
from repopacker.domain.config import ScanOptions
from repopacker.domain.errors import ConfigValidationError


def test_validate_none_returns_defaults() -> None:
    """TC-01: Non-dict input yields defaults and a warning."""
    opts, warnings = validate_config(None)

    assert opts == ScanOptions()
    assert len(warnings) > 0


def test_validate_empty_dict_returns_defaults() -> None:
    """TC-02: Missing keys take defaults silently."""
    opts, warnings = validate_config({})

    assert opts == ScanOptions()
    assert warnings == []


def test_validate_complete_dict(mock_config_dict) -> None:
    """TC-03: A well-formed dictionary maps field by field."""
    mock_config_dict["target_profile"] = "Claude"
    mock_config_dict["exclude_patterns"] = ["*.tmp", "!keep.tmp"]

    opts, warnings = validate_config(mock_config_dict)

    assert warnings == []
    assert opts.target_profile == "claude"
    assert opts.exclude_patterns == ("*.tmp", "!keep.tmp")
    assert opts.tokenizer_encoding == "heuristic"


def test_validate_converts_strings_to_bools() -> None:
    """TC-04: Common truthy and falsy strings are accepted."""
    opts, _ = validate_config({"remove_comments": "yes", "minify_css": "off", "redact_secrets": 1})

    assert opts.remove_comments is True
    assert opts.minify_css is False
    assert opts.redact_secrets is True


def test_validate_csv_lists_and_numbers() -> None:
    """TC-05: CSV strings become tuples; numeric strings become floats."""
    opts, _ = validate_config({
        "exclude_patterns": "*.log, tmp/ ,",
        "max_file_size_mb": "2.5",
        "max_chars_per_file": "1000",
    })

    assert opts.exclude_patterns == ("*.log", "tmp/")
    assert opts.max_file_size_mb == 2.5
    assert opts.max_chars_per_file == 1000


def test_validate_normalizes_extensions() -> None:
    """TC-06: Extensions are lowercased and dot-prefixed."""
    opts, warnings = validate_config({"skip_extensions": ["MD", ".TXT"]})

    assert opts.skip_extensions == (".md", ".txt")
    assert any("corrected" in w for w in warnings)


def test_validate_unknown_profile_falls_back() -> None:
    """TC-07: Unknown profiles render as generic."""
    opts, warnings = validate_config({"target_profile": "bard"})

    assert opts.target_profile == "generic"
    assert warnings


def test_validate_rejects_bad_values_non_strict() -> None:
    """TC-08: Invalid values fall back and warn."""
    opts, warnings = validate_config({
        "max_file_size_mb": "huge",
        "max_chars_per_file": -5,
        "remove_empty_lines": "maybe",
        "exclude_patterns": ["ok", 3],
    })

    assert opts.max_file_size_mb == 50.0
    assert opts.max_chars_per_file == 0
    assert opts.remove_empty_lines is False
    assert opts.exclude_patterns == ("ok",)
    assert len(warnings) == 4


def test_validate_ignores_unknown_keys() -> None:
    """TC-09: Interface keys such as input_path do not leak into options."""
    opts, warnings = validate_config({"input_path": "/tmp", "output_file": "x.txt"})

    assert opts == ScanOptions()
    assert warnings == []


def test_validate_strict_mode_raises() -> None:
    """TC-10: Strict mode raises on the first violation."""
    with pytest.raises(ConfigValidationError) as exc:
        validate_config({"remove_comments": "yes"}, strict=True)
    assert exc.value.field == "remove_comments"

    with pytest.raises(ConfigValidationError):
        validate_config({"target_profile": "bard"}, strict=True)

    with pytest.raises(ConfigValidationError):
        validate_config([], strict=True)
