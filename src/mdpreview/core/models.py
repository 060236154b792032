"""Intermediate data models for the render pipeline"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ExtensionLevel(str, Enum):
    """Where a grammar extension is tried: at block starts or at inline positions"""
    block = "block"
    inline = "inline"


class DiagramState(str, Enum):
    """Lifecycle of a diagram block within one render call"""
    discovered = "discovered"
    rendering = "rendering"
    rendered = "rendered"
    fallback = "fallback"


TERMINAL_STATES = frozenset({DiagramState.rendered, DiagramState.fallback})


@dataclass(frozen=True)
class Extraction:
    """Front-matter extraction result; front_matter is None when absent or undecodable."""
    front_matter: Any
    body: str


@dataclass(frozen=True)
class ExtensionMatch:
    """A prefix match produced by a grammar extension at the scan cursor."""
    raw: str        # full matched span, delimiters included
    text: str       # captured payload handed to render()


@dataclass
class DiagramBlock:
    """A diagram-tagged code block found in the mounted tree."""
    index: int                      # document order
    source: str
    state: DiagramState = DiagramState.discovered
    error: Optional[str] = None

    @property
    def settled(self) -> bool:
        return self.state in TERMINAL_STATES
