"""Post-sanitization diagram rendering with per-block fallback"""

import asyncio
import logging
import re
import shlex
import shutil
import tempfile
from pathlib import Path
from typing import Callable, Optional, Protocol

from bs4 import Tag

from mdpreview.core.dom import make_element, parse_fragment, set_inner_html
from mdpreview.core.models import DiagramBlock, DiagramState
from mdpreview.errors import DiagramSyntaxError


logger = logging.getLogger(__name__)

ERROR_BANNER_STYLE = (
    "background-color: #ffd5cdff; border: 1px solid #ffc107; border-radius: 4px; "
    "padding: 12px; margin-bottom: 8px; color: #856404;"
)

_BACKTICK_RUN = re.compile(r"`+")


class DiagramEngine(Protocol):
    async def run(self, targets: list[Tag]) -> None: ...


class MermaidCliEngine:
    """Renders each target's text to SVG with the Mermaid CLI (mmdc)."""

    def __init__(self, command: str = "mmdc", timeout: float = 30.0):
        self.command = shlex.split(command)
        self.timeout = timeout

    def _executable(self) -> list[str]:
        path = shutil.which(self.command[0]) if self.command else None
        if path is None:
            raise DiagramSyntaxError(f"Mermaid CLI not found: {' '.join(self.command) or '<empty>'}")
        return [path, *self.command[1:]]

    async def run(self, targets: list[Tag]) -> None:
        for target in targets:
            svg = await self.render_svg(target.get_text())
            set_inner_html(target, svg)
            target["data-processed"] = "true"

    async def render_svg(self, source: str) -> str:
        """Run mmdc on source and return the SVG markup; DiagramSyntaxError on any failure."""
        cmd = self._executable()
        with tempfile.TemporaryDirectory(prefix="mdpreview-") as tmp:
            in_file = Path(tmp) / "diagram.mmd"
            out_file = Path(tmp) / "diagram.svg"
            in_file.write_text(source, encoding="utf-8")
            proc = await asyncio.create_subprocess_exec(
                *cmd, "-i", str(in_file), "-o", str(out_file), "-b", "transparent",
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            try:
                stdout, stderr = await asyncio.wait_for(proc.communicate(), self.timeout)
            except asyncio.TimeoutError:
                proc.kill()
                await proc.wait()
                raise DiagramSyntaxError(f"Mermaid CLI timed out after {self.timeout:g}s")
            if proc.returncode != 0 or not out_file.exists():
                detail = (stderr or stdout).decode("utf-8", errors="replace").strip()
                raise DiagramSyntaxError(detail or f"Mermaid CLI exited with code {proc.returncode}")
            return out_file.read_text(encoding="utf-8")


def fence(source: str, language: str) -> str:
    """Markdown fence around source that no backtick run inside source can close."""
    longest = max((len(run) for run in _BACKTICK_RUN.findall(source)), default=0)
    ticks = "`" * max(3, longest + 1)
    return f"{ticks}{language}\n{source}\n{ticks}"


class DiagramRenderer:
    """Replaces diagram-tagged code blocks in a mounted tree, strictly in document order."""

    def __init__(self, engine: DiagramEngine, parse: Callable[[str], str], language: str = "mermaid"):
        self.engine = engine
        self.parse = parse          # grammar engine, used for the fallback code block
        self.language = language

    @property
    def selector(self) -> str:
        return f"code.language-{self.language}"

    async def render_diagrams(
        self,
        container: Tag,
        is_current: Optional[Callable[[], bool]] = None,
        ) -> list[DiagramBlock]:
        """Attempt every diagram block once; a failed block never affects its siblings.

        is_current is checked before each block and before any fallback mutation;
        once it returns False the remaining blocks are left untouched.
        """
        blocks: list[DiagramBlock] = []
        for index, code in enumerate(container.select(self.selector)):
            if is_current is not None and not is_current():
                logger.debug("Render superseded; skipping remaining diagrams")
                break
            block = DiagramBlock(index=index, source=code.get_text())
            blocks.append(block)
            await self._render_block(block, code, is_current)
        return blocks

    async def _render_block(self, block: DiagramBlock, code: Tag, is_current) -> None:
        placeholder = make_element(
            "div", {"class": self.language, "id": f"{self.language}-{block.index}"}, text=block.source,
        )
        container = code.parent if code.parent is not None and code.parent.name == "pre" else code
        block.state = DiagramState.rendering
        try:
            container.replace_with(placeholder)
            await self.engine.run([placeholder])
        except Exception as err:
            block.state = DiagramState.fallback
            block.error = str(err)
            logger.error("%s render failed: %s", self.language, err)
            if is_current is not None and not is_current():
                return
            # a newer render may have cleared the container
            if placeholder.parent is None:
                logger.debug("Placeholder %s-%d detached; skipping fallback", self.language, block.index)
                return
            placeholder.replace_with(self._fallback(block))
        else:
            block.state = DiagramState.rendered

    def _fallback(self, block: DiagramBlock) -> Tag:
        """Error banner followed by the original source as an ordinary code block."""
        banner = make_element("div", {"class": "diagram-error", "style": ERROR_BANNER_STYLE})
        banner.append(make_element("strong", text=f"{self.language.capitalize()} Syntax Error:"))
        banner.append(f" {block.error}")

        code = make_element("div")
        for node in parse_fragment(self.parse(fence(block.source, self.language))):
            code.append(node)

        wrapper = make_element("div", {"class": "diagram-fallback"})
        wrapper.append(banner)
        wrapper.append(code)
        return wrapper
