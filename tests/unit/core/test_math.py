"""Unit tests for core/math.py"""

import latex2mathml.converter
import pytest

from mdpreview.core.grammar.extensions import MathInline
from mdpreview.core.math import MathMLTypesetter
from mdpreview.errors import MathTypesettingError


def test_inline_and_display_modes():
    typesetter = MathMLTypesetter()
    assert 'display="inline"' in typesetter.render_to_string("x")
    assert 'display="block"' in typesetter.render_to_string("x", display_mode=True)


def test_failure_names_the_expression():
    """Converter errors without a message still say what failed."""
    with pytest.raises(MathTypesettingError, match=r"in 'x\^'"):
        MathMLTypesetter().render_to_string("x^")


def test_failure_keeps_converter_message(monkeypatch):
    def convert(expression, display="inline"):
        raise ValueError("unbalanced braces")

    monkeypatch.setattr(latex2mathml.converter, "convert", convert)
    with pytest.raises(MathTypesettingError) as info:
        MathMLTypesetter().render_to_string("{x")
    assert str(info.value) == "ValueError in '{x': unbalanced braces"


def test_error_fragment_shows_expression():
    html = MathInline(MathMLTypesetter()).render("x^")
    assert html.startswith('<span class="math-error">Error: ')
    assert "x^" in html
