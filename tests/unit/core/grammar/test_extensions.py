"""Unit tests for core/grammar/extensions.py"""

import pytest

from mdpreview.core.grammar.extensions import (
    MathBlock,
    MathInline,
    Subscript,
    Superscript,
    default_extensions,
)
from mdpreview.core.models import ExtensionLevel, ExtensionMatch


@pytest.mark.parametrize("src,expected", [
    ("~abc~", ExtensionMatch("~abc~", "abc")),
    ("~2~O", ExtensionMatch("~2~", "2")),
    ("~a b~", None),
    ("~~a~~", None),
    ("~~", None),
    ("x~a~", None),
    ("~a\nb~", None),
])
def test_subscript_attempt_match(src, expected):
    assert Subscript().attempt_match(src) == expected


@pytest.mark.parametrize("src,expected", [
    ("^abc^", ExtensionMatch("^abc^", "abc")),
    ("^a^b^", ExtensionMatch("^a^", "a")),
    ("^a b^", None),
    ("^^", None),
    ("a^b^", None),
])
def test_superscript_attempt_match(src, expected):
    assert Superscript().attempt_match(src) == expected


def test_sub_and_superscript_render_escaped():
    assert Subscript().render("<b>") == "<sub>&lt;b&gt;</sub>"
    assert Superscript().render("a&b") == "<sup>a&amp;b</sup>"


@pytest.mark.parametrize("src,expected", [
    ("$a+b$", ExtensionMatch("$a+b$", "a+b")),
    ("$x$ and $y$", ExtensionMatch("$x$", "x")),
    ("$$a+b$$", None),
    ("$a\nb$", None),
    ("$$", None),
    ("$unclosed", None),
])
def test_math_inline_attempt_match(typesetter, src, expected):
    assert MathInline(typesetter).attempt_match(src) == expected


@pytest.mark.parametrize("src,raw,text", [
    ("$$\na+b\n$$", "$$\na+b\n$$", "a+b"),
    ("$$x$$ tail", "$$x$$", "x"),
    ("$$\n  \\frac{1}{2}\n  x\n$$\nmore", "$$\n  \\frac{1}{2}\n  x\n$$", "\\frac{1}{2}\n  x"),
])
def test_math_block_attempt_match(typesetter, src, raw, text):
    assert MathBlock(typesetter).attempt_match(src) == ExtensionMatch(raw, text)


def test_math_block_needs_closing_delimiter(typesetter):
    assert MathBlock(typesetter).attempt_match("$$\na+b\n") is None


def test_math_inline_render_uses_inline_mode(typesetter):
    assert MathInline(typesetter).render("x^2") == '<span class="math math-inline">x^2</span>'


def test_math_block_render_uses_display_mode(typesetter):
    assert MathBlock(typesetter).render("x").startswith('<span class="math math-display">x</span>')


def test_math_inline_failure_is_local_escaped_fragment(typesetter):
    html = MathInline(typesetter).render("\\invalid<x>")
    assert html.startswith('<span class="math-error">Error: ')
    assert "&lt;x&gt;" in html
    assert "<x>" not in html


def test_math_block_failure_is_local_escaped_fragment(typesetter):
    html = MathBlock(typesetter).render("\\invalid")
    assert html.startswith('<div class="math-error">Error rendering math: ')


def test_default_extensions_order(typesetter):
    """Registration order is part of the grammar's contract."""
    exts = default_extensions(typesetter)
    assert [e.name for e in exts] == ["subscript", "superscript", "math_block", "math_inline"]
    assert [e.level for e in exts] == [
        ExtensionLevel.inline, ExtensionLevel.inline, ExtensionLevel.block, ExtensionLevel.inline,
    ]
