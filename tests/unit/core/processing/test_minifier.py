from __future__ import annotations

"""
Unit tests for the Minifier.

Verifies:
1. Category selection by extension and toggle.
2. JS and CSS delegation (comments and whitespace removed).
3. HTML whitespace collapsing with protected blocks.
4. Fallback to the original text on failure.
"""

from repopacker.core.processing.minifier import (
    minifier_for,
    minify_css,
    minify_html,
    minify_js,
    safe_minify,
)


# -----------------------------------------------------------------------------
# SELECTION
# -----------------------------------------------------------------------------

def test_minifier_selection_by_category() -> None:
    """TC-01: Each extension consults only its own toggle."""
    assert minifier_for(".ts", True, False, False) is minify_js
    assert minifier_for(".css", False, True, False) is minify_css
    assert minifier_for(".HTML", False, False, True) is minify_html
    assert minifier_for(".css", True, False, True) is None
    assert minifier_for(".py", True, True, True) is None


# -----------------------------------------------------------------------------
# JS / CSS
# -----------------------------------------------------------------------------

def test_minify_js_strips_comments_and_whitespace() -> None:
    """TC-02: JavaScript output is shorter and comment free."""
    src = "function  add ( a, b ) {\n  // sum\n  /* block */\n  return a + b;\n}\n"

    out = minify_js(src)

    assert "// sum" not in out
    assert "block" not in out
    assert "add" in out
    assert len(out) < len(src)


def test_minify_css_strips_comments() -> None:
    """TC-03: Stylesheet comments and spacing are removed."""
    src = "/* theme */\nbody {\n  color: red;\n}\n"

    out = minify_css(src)

    assert "theme" not in out
    assert "color:red" in out


# -----------------------------------------------------------------------------
# HTML
# -----------------------------------------------------------------------------

def test_minify_html_collapses_whitespace_between_tags() -> None:
    """TC-04: Whitespace runs between tags shrink to a single space."""
    assert minify_html("<div>\n  <p>Hi</p>\n</div>\n") == "<div> <p>Hi</p> </div>"


def test_minify_html_keeps_space_between_inline_elements() -> None:
    """TC-04b: Words in adjacent inline elements stay separated."""
    assert minify_html("<p><b>Hello</b>   <i>world</i></p>") == "<p><b>Hello</b> <i>world</i></p>"


def test_minify_html_drops_comments_but_keeps_conditionals() -> None:
    """TC-05: Ordinary comments go, conditional comments stay."""
    src = "<!-- note --><div>x</div><!--[if IE]><p>old</p><![endif]-->"

    out = minify_html(src)

    assert "note" not in out
    assert "<!--[if IE]><p>old</p><![endif]-->" in out


def test_minify_html_preserves_pre_blocks() -> None:
    """TC-06: Whitespace inside <pre> is left untouched."""
    src = "<div>\n <pre>  a\n  b</pre>\n</div>"

    out = minify_html(src)

    assert "<pre>  a\n  b</pre>" in out


def test_minify_html_minifies_embedded_style() -> None:
    """TC-07: <style> bodies are delegated to the CSS minifier."""
    src = "<style>\n  /* c */\n  p {\n    margin: 0;\n  }\n</style>"

    out = minify_html(src)

    assert "/* c */" not in out
    assert "margin:0" in out


def test_minify_html_skips_non_js_scripts() -> None:
    """TC-08: Template scripts keep their body."""
    body = "\n  {{ value }}  // keep\n"
    src = f'<script type="text/template">{body}</script>'

    assert body in minify_html(src)


def test_minify_html_minifies_script_with_data_type_attribute() -> None:
    """TC-08b: A data-type attribute is not mistaken for the script type."""
    src = "<script data-type=\"widget\">\n  var  a = 1;  // note\n</script>"

    out = minify_html(src)

    assert "note" not in out
    assert "var a=1;" in out


def test_minify_html_restores_blocks_nested_in_scripts() -> None:
    """TC-08c: A <pre> literal inside a script body survives intact."""
    src = "<html>\n<body>\n<script>\nel.innerHTML = \"<pre>x</pre>\";\n</script>\n</body>\n</html>"

    out = minify_html(src)

    assert "\x00" not in out
    assert "\ue000" not in out
    assert "el.innerHTML=\"<pre>x</pre>\";" in out
    assert out.startswith("<html> <body> <script>")


# -----------------------------------------------------------------------------
# FALLBACK
# -----------------------------------------------------------------------------

def test_safe_minify_falls_back_on_exception() -> None:
    """TC-09: A raising minifier returns the original text."""
    def _broken(_text: str) -> str:
        raise ValueError("parse error")

    assert safe_minify("let a = 1;", _broken, "a.js") == "let a = 1;"


def test_safe_minify_falls_back_on_empty_output() -> None:
    """TC-10: Empty output for non-empty input is rejected."""
    assert safe_minify("body {}", lambda _t: "", "a.css") == "body {}"


def test_safe_minify_returns_result() -> None:
    assert safe_minify("a  b", lambda t: t.replace("  ", " ")) == "a b"
