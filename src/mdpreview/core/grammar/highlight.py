"""Fenced code highlighting with Pygments"""

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound


PLAIN_TEXT = "text"


def resolve_language(lang: str, fallback: str = PLAIN_TEXT) -> str:
    """Return lang if Pygments knows it, else the plain-text fallback."""
    try:
        get_lexer_by_name(lang)
    except ClassNotFound:
        return fallback
    return lang


def make_highlighter(fallback: str = PLAIN_TEXT):
    """Build a markdown-it `highlight` option that never fails on an unknown tag."""
    formatter = HtmlFormatter(nowrap=True)

    def highlight_code(code: str, lang: str, attrs: str) -> str:
        lexer = get_lexer_by_name(resolve_language(lang.strip(), fallback), stripnl=False)
        return highlight(code, lexer, formatter)

    return highlight_code
