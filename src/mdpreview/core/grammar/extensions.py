"""Custom grammar extensions: subscript, superscript, inline and block math

Each extension is a prefix matcher plus a renderer. attempt_match() is called
with the source remaining at the scan cursor and returns None when the pattern
does not apply, so the registry can fall through to the next extension and
finally to the base grammar.
"""

import logging
import re
from typing import Optional

from markdown_it.common.utils import escapeHtml

from mdpreview.core.math import MathTypesetter
from mdpreview.core.models import ExtensionLevel, ExtensionMatch
from mdpreview.errors import MathTypesettingError


logger = logging.getLogger(__name__)


class GrammarExtension:
    """A pluggable rule recognising and rendering one piece of custom syntax."""
    name: str
    level: ExtensionLevel
    marker: str                 # first character of every match
    pattern: re.Pattern

    def attempt_match(self, src: str) -> Optional[ExtensionMatch]:
        m = self.pattern.match(src)
        if not m:
            return None
        return ExtensionMatch(raw=m.group(0), text=self.captured(m))

    def captured(self, m: re.Match) -> str:
        return m.group(1)

    def render(self, text: str) -> str:
        raise NotImplementedError


class Subscript(GrammarExtension):
    name = "subscript"
    level = ExtensionLevel.inline
    marker = "~"
    pattern = re.compile(r"~([^~\s]+)~")

    def render(self, text: str) -> str:
        return f"<sub>{escapeHtml(text)}</sub>"


class Superscript(GrammarExtension):
    name = "superscript"
    level = ExtensionLevel.inline
    marker = "^"
    pattern = re.compile(r"\^([^\^\s]+)\^")

    def render(self, text: str) -> str:
        return f"<sup>{escapeHtml(text)}</sup>"


class MathBlock(GrammarExtension):
    name = "math_block"
    level = ExtensionLevel.block
    marker = "$"
    pattern = re.compile(r"\$\$\n?([\s\S]+?)\n?\$\$")

    def __init__(self, typesetter: MathTypesetter):
        self.typesetter = typesetter

    def captured(self, m: re.Match) -> str:
        return m.group(1).strip()

    def render(self, text: str) -> str:
        try:
            return self.typesetter.render_to_string(text, display_mode=True) + "\n"
        except MathTypesettingError as e:
            logger.warning("Block math failed: %s", e)
            return f'<div class="math-error">Error rendering math: {escapeHtml(str(e))}</div>\n'


class MathInline(GrammarExtension):
    name = "math_inline"
    level = ExtensionLevel.inline
    marker = "$"
    # the lookahead keeps a doubled delimiter for block math
    pattern = re.compile(r"\$(?!\$)([^$\n]+?)\$")

    def __init__(self, typesetter: MathTypesetter):
        self.typesetter = typesetter

    def render(self, text: str) -> str:
        try:
            return self.typesetter.render_to_string(text, display_mode=False)
        except MathTypesettingError as e:
            logger.warning("Inline math failed: %s", e)
            return f'<span class="math-error">Error: {escapeHtml(str(e))}</span>'


def default_extensions(typesetter: MathTypesetter) -> list[GrammarExtension]:
    """Extensions in registration order."""
    return [Subscript(), Superscript(), MathBlock(typesetter), MathInline(typesetter)]
