"""Math typesetting: LaTeX expressions to MathML"""

from typing import Protocol

import latex2mathml.converter

from mdpreview.errors import MathTypesettingError


class MathTypesetter(Protocol):
    def render_to_string(self, expression: str, display_mode: bool = False) -> str: ...


class MathMLTypesetter:
    """Typesets LaTeX with latex2mathml; any converter failure becomes MathTypesettingError."""

    def render_to_string(self, expression: str, display_mode: bool = False) -> str:
        display = "block" if display_mode else "inline"
        try:
            return latex2mathml.converter.convert(expression, display=display)
        except Exception as e:
            detail = f": {e}" if str(e) else ""
            raise MathTypesettingError(f"{type(e).__name__} in {expression!r}{detail}") from e
