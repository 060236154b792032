"""Host-facing entry points: the preview contribution and the local dev harness"""

import logging
from typing import Any, Optional

from mdpreview.client import DocumentClient
from mdpreview.config import Settings
from mdpreview.core.dom import Page
from mdpreview.core.pipeline import MarkdownRenderer


logger = logging.getLogger(__name__)

CONTRIBUTION_ID = "markdown_preview_renderer"

SAMPLE_MARKDOWN = r"""# Markdown Preview

This preview is running in **local development mode**.

## Features

- YAML front matter support
- Mermaid diagrams
- Math equations
- Syntax highlighting
- Footnotes[^1], H~2~O and x^2^

### Sample Mermaid Diagram

```mermaid
graph TD
    A[Start] --> B{Hosted?}
    B -->|Yes| C[Load Extension]
    B -->|No| D[Local Dev Mode]
    C --> E[Render Content]
    D --> E
```

### Sample Math

Inline: $E = mc^2$

Block:
$$
\frac{-b \pm \sqrt{b^2 - 4ac}}{2a}
$$

[^1]: Footnotes are rendered at the end of the document.
"""


class PreviewContribution:
    """What a host plugin registry calls once per content item."""

    def __init__(self, page: Page, settings: Optional[Settings] = None, **renderer_options: Any):
        self.page = page
        self.settings = settings or Settings()
        # shared by every call; render generations live on the renderer
        self.renderer = MarkdownRenderer(page, self.settings, **renderer_options)

    async def render_content(self, raw_content: str, options: Optional[dict] = None) -> None:
        logger.info("Rendering markdown content %s", options or {})
        await self.renderer.render(raw_content, self.settings.mount_target_id)


async def load_local_test_file(renderer: MarkdownRenderer, client: Optional[DocumentClient] = None) -> bool:
    """Render the sample document served under /test, or the built-in sample if it cannot be fetched.

    Returns True when the served document was used.
    """
    client = client or renderer.client
    path = f"/test/{renderer.settings.sample_document}"
    try:
        content = await client.fetch_raw(path)
    except Exception as e:
        logger.error("Failed to load test file %s: %s", path, e)
        await renderer.render(SAMPLE_MARKDOWN)
        return False
    await renderer.render(content)
    logger.info("Loaded test markdown file for local development")
    return True
