"""Root test configuration: in-process stand-ins for the math and diagram collaborators"""

import pytest
from markdown_it.common.utils import escapeHtml

from mdpreview.config import Settings
from mdpreview.core.dom import Page, set_inner_html
from mdpreview.errors import DiagramSyntaxError, MathTypesettingError


class FakeTypesetter:
    """Wraps expressions in a span; expressions containing \\invalid fail."""

    def render_to_string(self, expression: str, display_mode: bool = False) -> str:
        if "\\invalid" in expression:
            raise MathTypesettingError(f"Undefined control sequence in {expression}")
        mode = "display" if display_mode else "inline"
        return f'<span class="math math-{mode}">{escapeHtml(expression)}</span>'


class FakeDiagramEngine:
    """Renders a stub SVG; sources containing 'invalid' fail with a syntax error."""

    def __init__(self):
        self.calls: list[str] = []

    async def run(self, targets) -> None:
        for target in targets:
            source = target.get_text()
            self.calls.append(source)
            if "invalid" in source:
                raise DiagramSyntaxError(f"Parse error on line 1: {source.splitlines()[0]}")
            set_inner_html(target, '<svg class="diagram"><g></g></svg>')


@pytest.fixture(name="typesetter")
def typesetter_fixture():
    return FakeTypesetter()


@pytest.fixture(name="diagram_engine")
def diagram_engine_fixture():
    return FakeDiagramEngine()


@pytest.fixture(name="settings")
def settings_fixture():
    return Settings()


@pytest.fixture(name="page")
def page_fixture(settings):
    return Page.blank(settings.mount_target_id)
