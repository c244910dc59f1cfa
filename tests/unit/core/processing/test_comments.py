from __future__ import annotations

"""
Unit tests for comment stripping and blank-line collapsing.
"""

from repopacker.core.processing.comments import (
    collapse_blank_lines,
    comment_rules_for,
    remove_comments,
)


# -----------------------------------------------------------------------------
# COMMENT REMOVAL
# -----------------------------------------------------------------------------

def test_c_family_line_and_block_comments() -> None:
    """TC-01: '//' and '/* */' comments are removed for JavaScript."""
    src = "// a\nconsole.log(1);\n/* b */\nconsole.log(2);"
    assert remove_comments(src, ".js") == "\nconsole.log(1);\n\nconsole.log(2);"


def test_multiline_block_comment() -> None:
    src = "int x;\n/* one\n two */\nint y;"
    assert remove_comments(src, ".c") == "int x;\n\nint y;"


def test_python_hash_and_docstrings() -> None:
    """TC-02: '#' comments and triple-quoted blocks are removed for Python."""
    src = '# header\nx = 1  # tail\n"""doc"""\ny = 2'
    assert remove_comments(src, ".py") == "\nx = 1  \n\ny = 2"


def test_markup_comments() -> None:
    src = "<div><!-- note --><p>x</p></div>"
    assert remove_comments(src, ".html") == "<div><p>x</p></div>"


def test_sql_comments() -> None:
    src = "SELECT 1; -- trailing\n/* block */SELECT 2;"
    assert remove_comments(src, ".sql") == "SELECT 1; \nSELECT 2;"


def test_unknown_extension_is_untouched() -> None:
    """TC-03: Extensions without a rule set keep their content."""
    src = "# not a comment in markdown\n// neither"
    assert remove_comments(src, ".md") == src
    assert comment_rules_for(".md") == []


def test_rule_lookup_is_case_insensitive() -> None:
    assert comment_rules_for(".JS") == comment_rules_for(".js")


# -----------------------------------------------------------------------------
# BLANK LINES
# -----------------------------------------------------------------------------

def test_collapse_blank_runs_and_trim_edges() -> None:
    """TC-04: Runs of blank lines collapse and blank edges are trimmed."""
    src = "\n\n  \na\n\n\n   \nb\n\n"
    assert collapse_blank_lines(src) == "a\nb"


def test_collapse_keeps_single_newlines() -> None:
    assert collapse_blank_lines("a\nb\nc") == "a\nb\nc"


def test_collapse_empty_text() -> None:
    assert collapse_blank_lines("") == ""


def test_comments_then_blank_lines_pipeline() -> None:
    """TC-05: Combined passes leave only the code lines."""
    src = "// a\nconsole.log(1);\n/* b */\nconsole.log(2);"
    assert collapse_blank_lines(remove_comments(src, ".js")) == "console.log(1);\nconsole.log(2);"
