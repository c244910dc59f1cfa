from __future__ import annotations

"""
Comment Stripping and Blank-Line Collapsing.

Comment removal is a textual heuristic, not a lexer: each language family
maps to an ordered list of regexes applied to the whole content. Markers
inside string literals are stripped as well. Adding a language means adding
an entry to the rule table.
"""

import logging
import re
from typing import Dict, Final, List, Tuple

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# COMMENT PATTERNS
# -----------------------------------------------------------------------------

_LINE_SLASHES: Final[re.Pattern] = re.compile(r"//.*$", re.MULTILINE)
_LINE_HASH: Final[re.Pattern] = re.compile(r"#.*$", re.MULTILINE)
_LINE_DASHES: Final[re.Pattern] = re.compile(r"--.*$", re.MULTILINE)
_BLOCK_C: Final[re.Pattern] = re.compile(r"/\*[\s\S]*?\*/")
_BLOCK_TRIPLE_SINGLE: Final[re.Pattern] = re.compile(r"'''[\s\S]*?'''")
_BLOCK_TRIPLE_DOUBLE: Final[re.Pattern] = re.compile(r'"""[\s\S]*?"""')
_BLOCK_MARKUP: Final[re.Pattern] = re.compile(r"<!--[\s\S]*?-->")

# Ordered rule sets per language family
_FAMILY_RULES: Final[Dict[str, Tuple[re.Pattern, ...]]] = {
    "c": (_LINE_SLASHES, _BLOCK_C),
    "script": (_LINE_HASH, _BLOCK_TRIPLE_SINGLE, _BLOCK_TRIPLE_DOUBLE),
    "markup": (_BLOCK_MARKUP,),
    "style": (_BLOCK_C,),
    "sql": (_LINE_DASHES, _BLOCK_C),
    "shell": (_LINE_HASH,),
}

_FAMILY_BY_EXTENSION: Final[Dict[str, str]] = {
    **dict.fromkeys(
        [".js", ".jsx", ".ts", ".tsx", ".java", ".c", ".cpp", ".cs", ".go", ".swift", ".kt", ".php"],
        "c",
    ),
    **dict.fromkeys([".py", ".rb"], "script"),
    **dict.fromkeys([".html", ".xml", ".svg"], "markup"),
    **dict.fromkeys([".css", ".scss", ".less"], "style"),
    ".sql": "sql",
    **dict.fromkeys([".sh", ".bash"], "shell"),
}

_BLANK_RUN: Final[re.Pattern] = re.compile(r"\n\s*\n")
_LEADING_BLANK: Final[re.Pattern] = re.compile(r"^\s*\n")
_TRAILING_BLANK: Final[re.Pattern] = re.compile(r"\n\s*$")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def comment_rules_for(extension: str) -> List[re.Pattern]:
    """Patterns applied for an extension (empty for unknown extensions)."""
    family = _FAMILY_BY_EXTENSION.get((extension or "").lower())
    if family is None:
        return []
    return list(_FAMILY_RULES[family])


def remove_comments(text: str, extension: str) -> str:
    """
    Strip comments according to the extension's language family.

    Args:
        text: Source content.
        extension: Lowercase extension with leading dot.

    Returns:
        str: Content without comments, unchanged for unknown extensions.
    """
    if not text:
        return text

    for pattern in comment_rules_for(extension):
        text = pattern.sub("", text)
    return text


def collapse_blank_lines(text: str) -> str:
    """
    Collapse runs of blank or whitespace-only lines into one line break,
    then trim blank lines at both ends.
    """
    if not text:
        return text

    text = _BLANK_RUN.sub("\n", text)
    text = _LEADING_BLANK.sub("", text, count=1)
    return _TRAILING_BLANK.sub("", text, count=1)
