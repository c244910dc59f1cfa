from __future__ import annotations

"""
Target Output Profiles.

A profile is a small declarative record of layout differences on top of the
shared document skeleton: title suffix, table-of-contents style, per-file
anchors, separators between file blocks and the closing footer. Adding a
target means adding a table entry.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from repopacker.domain.constants import DEFAULT_PROFILE

TOC_PLAIN = "plain"
TOC_LINKS = "links"
TOC_TABLE = "table"


@dataclass(frozen=True)
class Profile:
    """
    Layout options of one target.

    Attributes:
        key: Identifier used in configuration.
        display_name: Name in the title and footer ('' for the generic layout).
        toc_style: One of 'plain', 'links' or 'table'.
        file_anchors: Emit '<a id="file-N"></a>' before each file heading.
        file_separators: Emit '---' between consecutive file blocks.
        footer_lines: Sentences of the closing instructions section (empty: no footer).
    """
    key: str
    display_name: str = ""
    toc_style: str = TOC_PLAIN
    file_anchors: bool = False
    file_separators: bool = False
    footer_lines: Tuple[str, ...] = ()

    @property
    def title(self) -> str:
        if self.display_name:
            return f"# Repository Pack for {self.display_name}"
        return "# Repository Pack"


PROFILES: Dict[str, Profile] = {
    "generic": Profile(key="generic"),
    "claude": Profile(
        key="claude",
        display_name="Claude",
        footer_lines=(
            "This repository pack contains the complete codebase. "
            "You can reference files by their path or number from the table of contents.",
            "When discussing code, please cite the relevant file paths to maintain context.",
        ),
    ),
    "chatgpt": Profile(
        key="chatgpt",
        display_name="ChatGPT",
        toc_style=TOC_LINKS,
        file_anchors=True,
        footer_lines=(
            "This repository pack contains the complete codebase. "
            "You can navigate using the table of contents links.",
            "When discussing code, please cite the relevant file paths to maintain context.",
        ),
    ),
    "perplexity": Profile(key="perplexity", display_name="Perplexity", toc_style=TOC_TABLE),
    "gemini": Profile(key="gemini", display_name="Gemini", file_separators=True),
}


def get_profile(name: str) -> Profile:
    """Profile for an identifier (case-insensitive); unknown names map to generic."""
    return PROFILES.get((name or "").strip().lower(), PROFILES[DEFAULT_PROFILE])
