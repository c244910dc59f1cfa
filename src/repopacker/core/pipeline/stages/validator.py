from __future__ import annotations

"""
Configuration Validation Service.

Converts an untrusted dictionary (CLI overrides, persisted JSON) into an
immutable ScanOptions snapshot. Values are coerced where the intent is
unambiguous and fall back to defaults otherwise, collecting warnings. In
strict mode the first violation raises ConfigValidationError.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from repopacker.domain.config import ScanOptions
from repopacker.domain.constants import DEFAULT_PROFILE, TARGET_PROFILES
from repopacker.domain.errors import ConfigValidationError

logger = logging.getLogger(__name__)

_STRING_FIELDS = (
    "custom_header",
    "target_profile",
    "repository_name",
    "repository_instructions",
    "tokenizer_encoding",
)

_BOOL_FIELDS = (
    "remove_comments",
    "remove_empty_lines",
    "redact_secrets",
    "minify_code",
    "minify_html",
    "minify_css",
)

_LIST_FIELDS = ("exclude_patterns", "skip_extensions")


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[ScanOptions, List[str]]:
    """
    Validate and normalize a raw configuration dictionary.

    Unknown keys (such as 'input_path') are ignored. Missing keys take the
    ScanOptions defaults.

    Args:
        config: Raw configuration data.
        strict: Raise on the first invalid value instead of coercing.

    Returns:
        Tuple[ScanOptions, List[str]]: The options snapshot and warnings.

    Raises:
        ConfigValidationError: In strict mode, on the first violation.
    """
    warnings: List[str] = []
    defaults = ScanOptions()

    if not isinstance(config, dict):
        msg = f"expected dict, received {type(config).__name__}"
        _reject("config", msg, warnings, strict)
        return defaults, warnings

    values: Dict[str, Any] = {}

    for field in _STRING_FIELDS:
        values[field] = _as_str(config.get(field), getattr(defaults, field), field, warnings, strict)

    for field in _BOOL_FIELDS:
        values[field] = _as_bool(config.get(field), getattr(defaults, field), field, warnings, strict)

    for field in _LIST_FIELDS:
        values[field] = _as_list_str(config.get(field), field, warnings, strict)

    values["max_file_size_mb"] = _as_float(
        config.get("max_file_size_mb"), defaults.max_file_size_mb, "max_file_size_mb", warnings, strict
    )
    values["max_chars_per_file"] = _as_non_negative_int(
        config.get("max_chars_per_file"), defaults.max_chars_per_file, "max_chars_per_file", warnings, strict
    )

    values["skip_extensions"] = _normalize_extensions(values["skip_extensions"], warnings, strict)
    values["target_profile"] = _normalize_profile(values["target_profile"], warnings, strict)

    options = ScanOptions(
        max_file_size_mb=values["max_file_size_mb"],
        exclude_patterns=tuple(values["exclude_patterns"]),
        remove_comments=values["remove_comments"],
        remove_empty_lines=values["remove_empty_lines"],
        redact_secrets=values["redact_secrets"],
        minify_code=values["minify_code"],
        minify_html=values["minify_html"],
        minify_css=values["minify_css"],
        custom_header=values["custom_header"],
        target_profile=values["target_profile"],
        skip_extensions=tuple(values["skip_extensions"]),
        max_chars_per_file=values["max_chars_per_file"],
        repository_name=values["repository_name"],
        repository_instructions=values["repository_instructions"],
        tokenizer_encoding=values["tokenizer_encoding"],
    )

    for w in warnings:
        logger.debug(f"Config: {w}")
    return options, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _reject(field: str, message: str, warnings: List[str], strict: bool) -> None:
    if strict:
        raise ConfigValidationError(field=field, message=message)
    warnings.append(f"Invalid field '{field}': {message}. Using fallback.")


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback
    _reject(field, f"expected str, received {type(value).__name__}", warnings, strict)
    return fallback


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                return True
            if s in ("false", "0", "no", "n", "off"):
                return False

    _reject(field, f"expected bool, received {type(value).__name__}", warnings, strict)
    return fallback


def _as_list_str(value: Any, field: str, warnings: List[str], strict: bool) -> List[str]:
    """Accept a list of strings, or a CSV string outside strict mode."""
    if value is None:
        return []

    if isinstance(value, str) and not strict:
        return [x.strip() for x in value.split(",") if x.strip()]

    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                if item.strip():
                    out.append(item.strip())
                continue
            if strict:
                raise ConfigValidationError(field=f"{field}[{i}]", message="expected str")
            warnings.append(f"Invalid item in '{field}[{i}]': expected str. Item discarded.")
        return out

    _reject(field, f"expected list[str], received {type(value).__name__}", warnings, strict)
    return []


def _as_float(value: Any, fallback: float, field: str, warnings: List[str], strict: bool) -> float:
    if value is None:
        return fallback
    if isinstance(value, bool):
        _reject(field, "expected number, received bool", warnings, strict)
        return fallback
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and not strict:
        parsed = _parse_number(value)
        if parsed is not None:
            return parsed
    _reject(field, f"expected number, received {value!r}", warnings, strict)
    return fallback


def _as_non_negative_int(value: Any, fallback: int, field: str, warnings: List[str], strict: bool) -> int:
    number = _as_float(value, float(fallback), field, warnings, strict)
    if number < 0:
        _reject(field, "must be >= 0", warnings, strict)
        return fallback
    return int(number)


def _parse_number(raw: str) -> Optional[float]:
    try:
        return float(raw.strip())
    except ValueError:
        return None


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_extensions(exts: List[str], warnings: List[str], strict: bool) -> List[str]:
    """Lowercase extensions and prefix them with a dot."""
    out: List[str] = []
    for ext in exts:
        e = ext.strip().lower()
        if not e:
            continue
        if not e.startswith("."):
            if strict:
                raise ConfigValidationError(field="skip_extensions", message=f"'{ext}' must start with '.'")
            warnings.append(f"Extension '{ext}' corrected to '.{e}'.")
            e = "." + e
        out.append(e)
    return out


def _normalize_profile(profile: str, warnings: List[str], strict: bool) -> str:
    p = profile.strip().lower()
    if p in TARGET_PROFILES:
        return p
    if strict:
        raise ConfigValidationError(field="target_profile", message=f"unknown profile '{profile}'")
    warnings.append(f"Unknown profile '{profile}'. Using '{DEFAULT_PROFILE}'.")
    return DEFAULT_PROFILE
