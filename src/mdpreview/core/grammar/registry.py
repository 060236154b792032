"""Grammar extension registry layered onto markdown-it"""

import logging
from typing import Iterable, Optional

from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock
from markdown_it.rules_inline import StateInline
from mdit_py_plugins.footnote import footnote_plugin

from mdpreview.core.grammar.extensions import GrammarExtension, default_extensions
from mdpreview.core.grammar.highlight import PLAIN_TEXT, make_highlighter
from mdpreview.core.math import MathMLTypesetter, MathTypesetter
from mdpreview.core.models import ExtensionLevel
from mdpreview.errors import GrammarParseError


logger = logging.getLogger(__name__)

# custom rules run ahead of every base rule of their level
FIRST_BLOCK_RULE = "table"
FIRST_INLINE_RULE = "text"


def _inline_rule(extension: GrammarExtension):
    def rule(state: StateInline, silent: bool) -> bool:
        if state.src[state.pos] != extension.marker:
            return False
        match = extension.attempt_match(state.src[state.pos:state.posMax])
        if match is None:
            return False
        if not silent:
            token = state.push(extension.name, "", 0)
            token.content = match.text
            token.markup = match.raw
        state.pos += len(match.raw)
        return True
    return rule


def _line_content(state: StateBlock, line: int) -> str:
    """Text of a line without the prefixes nested containers (blockquotes, list items) own."""
    return state.src[state.bMarks[line] + state.tShift[line]:state.eMarks[line]]


def _block_rule(extension: GrammarExtension):
    def rule(state: StateBlock, startLine: int, endLine: int, silent: bool) -> bool:
        if state.is_code_block(startLine):
            return False
        start = state.bMarks[startLine] + state.tShift[startLine]
        if start >= state.eMarks[startLine] or state.src[start] != extension.marker:
            return False
        lines = [_line_content(state, line) for line in range(startLine, endLine)]
        match = extension.attempt_match("\n".join(lines))
        if match is None:
            return False
        consumed = match.raw.count("\n")
        last_line = startLine + consumed
        # blocks own whole lines; trailing text after the closer is not ours
        closer_end = len(match.raw) - (match.raw.rfind("\n") + 1)
        if lines[consumed][closer_end:].strip():
            return False
        if silent:
            return True
        state.line = last_line + 1
        token = state.push(extension.name, "", 0)
        token.content = match.text
        token.markup = match.raw
        token.map = [startLine, state.line]
        return True
    return rule


def _render_rule(extension: GrammarExtension):
    def render(self, tokens, idx, options, env) -> str:
        return extension.render(tokens[idx].content)
    return render


class GrammarExtensionRegistry:
    """Ordered set of grammar extensions wired into a single MarkdownIt instance.

    Block-level extensions are tried before the base block rules at each line,
    inline extensions before the base inline rules at each position; within a
    level, registration order decides.
    """

    def __init__(
        self,
        typesetter: Optional[MathTypesetter] = None,
        extensions: Optional[Iterable[GrammarExtension]] = None,
        preset: str = "gfm-like",
        highlight_fallback: str = PLAIN_TEXT,
        ):
        typesetter = typesetter or MathMLTypesetter()
        self.extensions: tuple[GrammarExtension, ...] = tuple(
            default_extensions(typesetter) if extensions is None else extensions
        )
        self.md = self._build(preset, highlight_fallback)

    def extensions_for(self, level: ExtensionLevel) -> list[GrammarExtension]:
        return [ext for ext in self.extensions if ext.level == level]

    def _build(self, preset: str, highlight_fallback: str) -> MarkdownIt:
        md = MarkdownIt(preset, options_update={
            "linkify": False,
            "highlight": make_highlighter(highlight_fallback),
        })
        md.use(footnote_plugin)
        for ext in self.extensions_for(ExtensionLevel.block):
            md.block.ruler.before(
                FIRST_BLOCK_RULE, ext.name, _block_rule(ext),
                {"alt": ["paragraph", "reference", "blockquote", "list"]},
            )
        for ext in self.extensions_for(ExtensionLevel.inline):
            md.inline.ruler.before(FIRST_INLINE_RULE, ext.name, _inline_rule(ext))
        for ext in self.extensions:
            md.add_render_rule(ext.name, _render_rule(ext))
        return md

    def parse(self, body: str) -> str:
        """Render markdown body to (unsanitized) HTML."""
        try:
            return self.md.render(body)
        except Exception as e:
            raise GrammarParseError(f"Failed to parse markdown: {e}") from e
