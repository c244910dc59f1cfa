from __future__ import annotations

"""
Configuration Domain Management.

Defines the immutable ScanOptions snapshot consumed by every pipeline
stage, the dictionary-based defaults used by interface layers, and JSON
persistence of the user's last session in the per-user data directory.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Tuple

from repopacker.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_MAX_FILE_SIZE_MB,
    DEFAULT_PROFILE,
    DEFAULT_TOKENIZER_ENCODING,
)
from repopacker.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.json"

# -----------------------------------------------------------------------------
# Run Snapshot
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ScanOptions:
    """
    Configuration snapshot for one pipeline run.

    Attributes:
        max_file_size_mb: Per-file size threshold in mebibytes (<= 0 disables it).
        exclude_patterns: Gitignore-style patterns appended after the built-in layer.
        remove_comments: Strip comments using the per-language rule table.
        remove_empty_lines: Collapse blank-line runs and trim blank edges.
        redact_secrets: Redact keys, tokens, private keys and IP addresses.
        minify_code: Minify the JavaScript/TypeScript family.
        minify_html: Minify HTML documents.
        minify_css: Minify stylesheets.
        custom_header: Free text injected verbatim into the document.
        target_profile: Output layout identifier.
        skip_extensions: Extensions emitted as '[Skipped: ...]' without reading.
        max_chars_per_file: Middle-truncation threshold in characters (0 disables it).
        repository_name: Display name (defaults to the root's base name).
        repository_instructions: Optional free text rendered after the header.
        tokenizer_encoding: tiktoken encoding name or 'heuristic'.
    """
    max_file_size_mb: float = DEFAULT_MAX_FILE_SIZE_MB
    exclude_patterns: Tuple[str, ...] = ()
    remove_comments: bool = False
    remove_empty_lines: bool = False
    redact_secrets: bool = False
    minify_code: bool = False
    minify_html: bool = False
    minify_css: bool = False
    custom_header: str = ""
    target_profile: str = DEFAULT_PROFILE
    skip_extensions: Tuple[str, ...] = ()
    max_chars_per_file: int = 0
    repository_name: str = ""
    repository_instructions: str = ""
    tokenizer_encoding: str = DEFAULT_TOKENIZER_ENCODING

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-compatible dictionary."""
        data = asdict(self)
        data["exclude_patterns"] = list(self.exclude_patterns)
        data["skip_extensions"] = list(self.skip_extensions)
        return data


# -----------------------------------------------------------------------------
# Defaults (Dict-based)
# -----------------------------------------------------------------------------

def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration (Session State).

    Returns:
        Dict[str, Any]: Default configuration values, including the input path.
    """
    defaults = ScanOptions().to_dict()
    defaults["input_path"] = os.getcwd()
    return defaults


def get_config_path() -> str:
    """Absolute path of the persisted configuration file."""
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_config() -> Dict[str, Any]:
    """
    Load the last session configuration from disk, merged over defaults.

    Returns:
        Dict[str, Any]: The merged configuration, or defaults on any failure.
    """
    defaults = get_default_config()
    config_path = get_config_path()

    if not os.path.exists(config_path):
        logger.debug("Config file not found. Returning defaults.")
        return defaults

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config: {e}. Using defaults.")
        return defaults

    if not isinstance(data, dict):
        logger.warning("Corrupted config file. Resetting to defaults.")
        return defaults

    session = data.get("last_session", {})
    if not isinstance(session, dict):
        logger.warning("Corrupted session block in config file. Ignoring it.")
        return defaults

    merged = dict(defaults)
    merged.update(session)
    return merged


def save_config(config: Dict[str, Any]) -> bool:
    """
    Persist the session configuration to disk.

    Args:
        config: The configuration dictionary to save.

    Returns:
        bool: True when the file was written.
    """
    config_path = get_config_path()
    state = {"version": CURRENT_CONFIG_VERSION, "last_session": config}
    try:
        os.makedirs(os.path.dirname(config_path), exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            json.dump(state, f, indent=4, ensure_ascii=False)
        logger.debug(f"Configuration saved to {config_path}")
        return True
    except (OSError, TypeError) as e:
        logger.error(f"Failed to save config: {e}")
        return False
