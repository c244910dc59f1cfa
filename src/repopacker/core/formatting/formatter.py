from __future__ import annotations

"""
Output Formatter.

Renders a ProcessedOutput into the Markdown-flavoured document pasted into
an LLM chat. Every profile shares one skeleton:

    title, summary, processing options, usage guidelines, token counts,
    optional description and instructions, directory tree, table of
    contents, one fenced block per file, optional footer.

Profiles (see `profiles.py`) only switch the table-of-contents style,
anchors, separators and footer.
"""

import logging
from typing import List, Optional

from repopacker.core.analysis.tree_renderer import render_directory_tree
from repopacker.core.formatting.profiles import TOC_LINKS, TOC_TABLE, Profile, get_profile
from repopacker.domain.config import ScanOptions
from repopacker.domain.constants import LANGUAGE_BY_EXTENSION
from repopacker.domain.file_models import FileEntry
from repopacker.domain.pipeline_models import OutputMetadata, ProcessedOutput
from repopacker.infra.fs import format_bytes

logger = logging.getLogger(__name__)

FENCE = "```"

_GUIDELINES = (
    "This file contains a packed representation of the entire repository's contents.",
    "It is designed to be easily consumable by AI systems for analysis, code review, "
    "or other automated processes.",
    "When processing this file, use the file path to distinguish between different files "
    "in the repository.",
    "This file should be treated as read-only. Any changes should be made to the original "
    "repository files.",
)
_REDACTED_NOTICE = "Sensitive information has been redacted for security purposes."
_UNREDACTED_NOTICE = (
    "Be aware that this file may contain sensitive information. "
    "Handle it with appropriate security."
)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def format_output(processed: ProcessedOutput, target_profile: Optional[str] = None) -> str:
    """
    Render the document for a target profile.

    Args:
        processed: Terminal artifact of the processing stages.
        target_profile: Profile identifier; defaults to the one in the
            options snapshot. Unknown identifiers render as 'generic'.

    Returns:
        str: The formatted document.
    """
    meta = processed.metadata
    profile = get_profile(target_profile or meta.options.target_profile)
    logger.info(f"Formatting {meta.total_files} files with profile '{profile.key}'")

    parts: List[str] = [f"{profile.title}\n\n"]
    parts.append(generate_file_summary(meta))
    parts.append(_token_section(meta))

    if meta.custom_header:
        parts.append(f"## Repository Description\n\n{meta.custom_header}\n\n")

    if meta.options.repository_instructions:
        parts.append(f"## Repository Instructions\n\n{meta.options.repository_instructions}\n\n")

    parts.append("## Directory Structure\n\n")
    parts.append(f"{FENCE}\n{render_directory_tree(processed.directory_tree)}\n{FENCE}\n\n")

    parts.append(_table_of_contents(processed.files, profile))
    parts.append(_file_blocks(processed.files, profile))

    if profile.footer_lines:
        parts.append(f"---\n\n# Instructions for {profile.display_name}\n\n")
        parts.extend(f"{line}\n" for line in profile.footer_lines)

    return "".join(parts)


def get_language_from_extension(extension: str) -> str:
    """Fence language tag for an extension ('' when unknown)."""
    return LANGUAGE_BY_EXTENSION.get((extension or "").lower(), "")


def generate_file_summary(meta: OutputMetadata) -> str:
    """Summary block, processing options and usage guidelines."""
    opts = meta.options
    lines = [
        f"Generated: {meta.timestamp}",
        f"Repository: {meta.repository_name}",
        f"Total Files: {meta.total_files}",
        f"Total Size: {format_bytes(meta.total_size)}",
        f"Skipped Files: {meta.skipped_count}",
        "",
        "## Processing Options",
        "",
        f"- Comments Removed: {_yes_no(opts.remove_comments)}",
        f"- Empty Lines Removed: {_yes_no(opts.remove_empty_lines)}",
        f"- Security Check: {_yes_no(opts.redact_secrets)}",
        f"- Minify JavaScript: {_yes_no(opts.minify_code)}",
        f"- Minify CSS: {_yes_no(opts.minify_css)}",
        f"- Minify HTML: {_yes_no(opts.minify_html)}",
        f"- Max File Size: {_format_limit(opts)}",
        f"- Exclude Patterns: {', '.join(opts.exclude_patterns) if opts.exclude_patterns else 'None'}",
        "",
        "## Usage Guidelines",
        "",
    ]
    lines.extend(f"- {g}" for g in _GUIDELINES)
    lines.append(f"- {_REDACTED_NOTICE if opts.redact_secrets else _UNREDACTED_NOTICE}")
    return "\n".join(lines) + "\n\n"


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _format_limit(opts: ScanOptions) -> str:
    if opts.max_file_size_mb <= 0:
        return "Unlimited"
    return f"{opts.max_file_size_mb:g} MB"


def _token_section(meta: OutputMetadata) -> str:
    m = meta.metrics
    return (
        "## Token Count Information\n\n"
        f"Total Tokens: {m.total_tokens:,}\n"
        f"Total Characters: {m.total_chars:,}\n\n"
    )


def _table_of_contents(files: List[FileEntry], profile: Profile) -> str:
    out = ["## Table of Contents\n\n"]

    if profile.toc_style == TOC_TABLE:
        out.append("| # | File | Size |\n")
        out.append("|---|------|------|\n")
        for i, f in enumerate(files, start=1):
            out.append(f"| {i} | `{f.relative_path}` | {format_bytes(f.size_bytes)} |\n")
    elif profile.toc_style == TOC_LINKS:
        for i, f in enumerate(files, start=1):
            out.append(f"{i}. [{f.relative_path}](#file-{i}) ({format_bytes(f.size_bytes)})\n")
    else:
        for i, f in enumerate(files, start=1):
            out.append(f"{i}. `{f.relative_path}` ({format_bytes(f.size_bytes)})\n")

    return "".join(out)


def _file_blocks(files: List[FileEntry], profile: Profile) -> str:
    out = ["\n## Files\n\n"]
    last = len(files) - 1

    for i, f in enumerate(files):
        number = i + 1
        if profile.file_anchors:
            out.append(f'<a id="file-{number}"></a>\n')
        out.append(f"### {number}. `{f.relative_path}`\n\n")
        out.append(f"Size: {format_bytes(f.size_bytes)}\n\n")
        language = get_language_from_extension(f.extension)
        out.append(f"{FENCE}{language}\n{f.content or ''}\n{FENCE}\n\n")

        if profile.file_separators and i < last:
            out.append("---\n\n")

    return "".join(out)
