from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides compatible with `validate_config`.
"""

import argparse
from typing import Any, Dict, List, Optional

from repopacker.domain.constants import APP_VERSION, TARGET_PROFILES

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the repopacker CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="repopacker",
        description="Pack a source repository into a single LLM-ready document.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    # --- Input and Layout ---
    p.add_argument(
        "-i", "--input",
        dest="input_path",
        default=None,
        help="Repository root to pack (default: current directory).",
    )
    p.add_argument(
        "-p", "--profile",
        dest="target_profile",
        choices=TARGET_PROFILES,
        default=None,
        help="Output layout for the target assistant.",
    )
    p.add_argument(
        "--header",
        dest="custom_header",
        default=None,
        help="Repository description injected into the document.",
    )
    p.add_argument(
        "--instructions",
        dest="repository_instructions",
        default=None,
        help="Free-text instructions rendered after the description.",
    )
    p.add_argument(
        "--name",
        dest="repository_name",
        default=None,
        help="Display name of the repository (default: root folder name).",
    )

    # --- Selection ---
    p.add_argument(
        "--max-size",
        dest="max_file_size_mb",
        type=float,
        default=None,
        help="Per-file size limit in MB; 0 disables it (default: 50).",
    )
    p.add_argument(
        "--exclude",
        dest="exclude_patterns",
        default=None,
        help="Comma-separated gitignore-style patterns ('!pattern' re-includes).",
    )
    p.add_argument(
        "--skip-ext",
        dest="skip_extensions",
        default=None,
        help="Comma-separated extensions emitted as placeholders without reading.",
    )

    # --- Transformations ---
    p.add_argument("--remove-comments", action="store_true", help="Strip comments.")
    p.add_argument("--remove-empty-lines", action="store_true", help="Collapse blank lines.")
    p.add_argument("--redact-secrets", action="store_true", help="Redact keys, tokens and IPs.")
    p.add_argument("--minify-code", action="store_true", help="Minify JS/TS files.")
    p.add_argument("--minify-css", action="store_true", help="Minify CSS files.")
    p.add_argument("--minify-html", action="store_true", help="Minify HTML files.")
    p.add_argument(
        "--max-chars",
        dest="max_chars_per_file",
        type=int,
        default=None,
        help="Truncate file contents longer than N characters (0: off).",
    )
    p.add_argument(
        "--encoding",
        dest="tokenizer_encoding",
        default=None,
        help="tiktoken encoding for token counts, or 'heuristic'.",
    )

    # --- Output Sinks ---
    p.add_argument(
        "-o", "--output",
        dest="output_file",
        default=None,
        help="Write the document to FILE.",
    )
    p.add_argument(
        "--save",
        action="store_true",
        help="Write the document to '<repo>-packed-<timestamp>.txt' in the current directory.",
    )
    p.add_argument(
        "--clipboard",
        action="store_true",
        help="Copy the document to the clipboard.",
    )

    # --- Diagnostics ---
    p.add_argument("--stats", action="store_true", help="Print a pre-scan summary only.")
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result summary as JSON instead of the document.",
    )
    p.add_argument("--dump-config", action="store_true", help="Print the merged configuration and exit.")
    p.add_argument(
        "--save-config",
        action="store_true",
        help="Persist the merged configuration as the last session.",
    )
    p.add_argument("--use-defaults", action="store_true", help="Ignore the persisted configuration.")
    p.add_argument("--debug", action="store_true", help="Elevate logging verbosity to DEBUG.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

_FLAG_FIELDS = {
    "remove_comments": "remove_comments",
    "remove_empty_lines": "remove_empty_lines",
    "redact_secrets": "redact_secrets",
    "minify_code": "minify_code",
    "minify_css": "minify_css",
    "minify_html": "minify_html",
}

_VALUE_FIELDS = (
    "input_path",
    "target_profile",
    "custom_header",
    "repository_instructions",
    "repository_name",
    "max_file_size_mb",
    "max_chars_per_file",
    "tokenizer_encoding",
)


def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Only values actually given on the command line are included, so that
    persisted settings survive when a flag is absent.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    for field in _VALUE_FIELDS:
        value = getattr(args, field)
        if value is not None:
            overrides[field] = value

    for attr, field in _FLAG_FIELDS.items():
        if getattr(args, attr):
            overrides[field] = True

    if args.exclude_patterns:
        overrides["exclude_patterns"] = _split_csv(args.exclude_patterns)
    if args.skip_extensions:
        overrides["skip_extensions"] = _split_csv(args.skip_extensions)

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Comma-separated string to a list of non-empty stripped items."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
