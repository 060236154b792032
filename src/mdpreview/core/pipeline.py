"""Render pipeline: front matter -> grammar -> sanitize -> mount -> diagrams"""

import logging
from typing import Optional

from mdpreview.client import DocumentClient
from mdpreview.config import Settings
from mdpreview.core.diagrams import DiagramEngine, DiagramRenderer, MermaidCliEngine
from mdpreview.core.dom import Page, set_inner_html
from mdpreview.core.formatter import front_matter_to_table
from mdpreview.core.frontmatter import extract_front_matter
from mdpreview.core.grammar.registry import GrammarExtensionRegistry
from mdpreview.core.math import MathTypesetter
from mdpreview.core.models import DiagramBlock
from mdpreview.core.sanitize import sanitize_html


logger = logging.getLogger(__name__)

RENDER_ERROR_HTML = "<p>Error rendering markdown content</p>"
LOAD_ERROR_HTML = "<p>Error loading markdown file</p>"


class MarkdownRenderer:
    """Renders untrusted markdown into mount targets of a Page.

    Calls on one target may overlap: each call takes a new render generation
    for its target id, and a call whose generation has been superseded stops
    mutating the target at its next resumption point.
    """

    def __init__(
        self,
        page: Page,
        settings: Optional[Settings] = None,
        typesetter: Optional[MathTypesetter] = None,
        diagram_engine: Optional[DiagramEngine] = None,
        client: Optional[DocumentClient] = None,
        ):
        self.page = page
        self.settings = settings or Settings()
        self.registry = GrammarExtensionRegistry(
            typesetter,
            preset=self.settings.parser_preset,
            highlight_fallback=self.settings.highlight_fallback,
        )
        engine = diagram_engine or MermaidCliEngine(self.settings.diagram_command, self.settings.diagram_timeout)
        self.diagrams = DiagramRenderer(engine, self.registry.parse, self.settings.diagram_language)
        self.client = client or DocumentClient(self.settings.base_url, self.settings.fetch_timeout)
        self._generations: dict[str, int] = {}

    def _begin(self, target_id: str) -> int:
        generation = self._generations.get(target_id, 0) + 1
        self._generations[target_id] = generation
        return generation

    def _is_current(self, target_id: str, generation: int) -> bool:
        return self._generations.get(target_id) == generation

    def to_html(self, markdown: str) -> str:
        """Sanitized markup with the front-matter table prepended; raises on parse failure."""
        extraction = extract_front_matter(markdown)
        html = sanitize_html(self.registry.parse(extraction.body))
        if extraction.front_matter is not None:
            html = front_matter_to_table(extraction.front_matter) + html
        return html

    async def render(self, markdown: str, target_id: Optional[str] = None) -> list[DiagramBlock]:
        """Render markdown into the target, replacing its content. Never raises.

        Returns the diagram blocks attempted by this call.
        """
        target_id = target_id or self.settings.mount_target_id
        container = self.page.get_element_by_id(target_id)
        if container is None:
            logger.error('Container with id "%s" not found', target_id)
            return []

        generation = self._begin(target_id)
        try:
            set_inner_html(container, self.to_html(markdown))
            return await self.diagrams.render_diagrams(
                container, is_current=lambda: self._is_current(target_id, generation),
            )
        except Exception:
            logger.exception("Error rendering markdown")
            if self._is_current(target_id, generation):
                set_inner_html(container, RENDER_ERROR_HTML)
            return []

    async def load_and_render(self, name: str, target_id: Optional[str] = None) -> list[DiagramBlock]:
        """Fetch a document by name and render it. Never raises."""
        target_id = target_id or self.settings.mount_target_id
        generation = self._begin(target_id)
        try:
            content = await self.client.fetch(name)
        except Exception:
            logger.exception("Error loading markdown file %s", name)
            container = self.page.get_element_by_id(target_id)
            if container is not None and self._is_current(target_id, generation):
                set_inner_html(container, LOAD_ERROR_HTML)
            return []
        if not self._is_current(target_id, generation):
            logger.debug("Discarding stale load of %s for %s", name, target_id)
            return []
        return await self.render(content, target_id)
