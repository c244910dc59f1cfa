from __future__ import annotations

"""
Code Minification Utility.

Per-category minifiers selected by file extension:

- JavaScript/TypeScript family through rjsmin (comments and redundant
  whitespace removed, identifiers never renamed),
- stylesheets through rcssmin,
- HTML through a regex pass that collapses whitespace runs to a single
  space, drops ordinary comments and delegates embedded <script>/<style>
  bodies to the two minifiers above. Conditional comments, <pre> and
  <textarea> blocks and self-closing syntax are left untouched.

Any failure falls back to the input text with a warning.
"""

import logging
import re
from typing import Callable, Final, List, Optional

import rcssmin
import rjsmin

from repopacker.domain.constants import CSS_EXTENSIONS, HTML_EXTENSIONS, JS_EXTENSIONS

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# HTML PATTERNS
# -----------------------------------------------------------------------------

_PROTECTED_BLOCK: Final[re.Pattern] = re.compile(
    r"<!--\[if[\s\S]*?<!\[endif\]-->|<(pre|textarea)\b[\s\S]*?</\1\s*>",
    re.IGNORECASE,
)
_SCRIPT_BLOCK: Final[re.Pattern] = re.compile(
    r"(<script\b[^>]*>)([\s\S]*?)(</script\s*>)", re.IGNORECASE
)
_STYLE_BLOCK: Final[re.Pattern] = re.compile(
    r"(<style\b[^>]*>)([\s\S]*?)(</style\s*>)", re.IGNORECASE
)
_SCRIPT_TYPE: Final[re.Pattern] = re.compile(r"\stype\s*=\s*['\"]?([^'\"\s>]+)", re.IGNORECASE)
_HTML_COMMENT: Final[re.Pattern] = re.compile(r"<!--[\s\S]*?-->")
_WHITESPACE_RUN: Final[re.Pattern] = re.compile(r"\s+")

_JS_SCRIPT_TYPES: Final[frozenset] = frozenset({
    "text/javascript", "application/javascript", "module", "text/babel",
})

# Private-use delimiters. Slots nest, so restoration runs last-in first-out
_SLOT: Final[str] = "\ue000{}\ue001"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def minify_js(text: str) -> str:
    """Minify JavaScript-family source, dropping all comments."""
    return rjsmin.jsmin(text, keep_bang_comments=False)


def minify_css(text: str) -> str:
    """Minify a stylesheet, dropping all comments."""
    return rcssmin.cssmin(text, keep_bang_comments=False)


def minify_html(text: str) -> str:
    """
    Minify an HTML document.

    Args:
        text: HTML source.

    Returns:
        str: Whitespace-collapsed HTML with embedded scripts and styles minified.
    """
    slots: List[str] = []

    def _stash(segment: str) -> str:
        slots.append(segment)
        return _SLOT.format(len(slots) - 1)

    text = _PROTECTED_BLOCK.sub(lambda m: _stash(m.group(0)), text)
    text = _SCRIPT_BLOCK.sub(lambda m: _stash(_minify_script_tag(m)), text)
    text = _STYLE_BLOCK.sub(
        lambda m: _stash(f"{m.group(1)}{minify_css(m.group(2))}{m.group(3)}"), text
    )

    text = _HTML_COMMENT.sub("", text)
    text = _WHITESPACE_RUN.sub(" ", text).strip()

    for index in reversed(range(len(slots))):
        text = text.replace(_SLOT.format(index), slots[index], 1)
    return text


def minifier_for(
        extension: str,
        minify_code: bool,
        minify_css_files: bool,
        minify_html_files: bool,
) -> Optional[Callable[[str], str]]:
    """
    Select the minifier for an extension, or None.

    The three categories are mutually exclusive: an extension belongs to at
    most one of them, and only that category's toggle is consulted.
    """
    ext = (extension or "").lower()
    if ext in JS_EXTENSIONS:
        return minify_js if minify_code else None
    if ext in CSS_EXTENSIONS:
        return minify_css if minify_css_files else None
    if ext in HTML_EXTENSIONS:
        return minify_html if minify_html_files else None
    return None


def safe_minify(text: str, minifier: Callable[[str], str], label: str = "") -> str:
    """
    Run a minifier, falling back to the input on failure or empty output.

    Args:
        text: Content to minify.
        minifier: One of the minify_* functions.
        label: File path used in log messages.

    Returns:
        str: Minified text, or the original text.
    """
    if not text:
        return text

    try:
        result = minifier(text)
    except Exception as e:
        logger.warning(f"Minification failed for {label or 'content'}: {e}")
        return text

    if not result and text.strip():
        logger.warning(f"Minifier produced no output for {label or 'content'}; keeping original.")
        return text

    logger.debug(f"Minified {label}: {len(text)} -> {len(result)} chars")
    return result

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _minify_script_tag(match: re.Match) -> str:
    open_tag, body, close_tag = match.group(1), match.group(2), match.group(3)
    type_match = _SCRIPT_TYPE.search(open_tag)
    if type_match and type_match.group(1).lower() not in _JS_SCRIPT_TYPES:
        return match.group(0)
    return f"{open_tag}{minify_js(body)}{close_tag}"
