"""Local development server: document endpoint, raw files and server-side preview"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from mdpreview.config import Settings
from mdpreview.core.dom import Page
from mdpreview.core.pipeline import MarkdownRenderer


logger = logging.getLogger(__name__)


def _resolve(docs_dir: Path, filename: str) -> Optional[Path]:
    """Path of filename inside docs_dir, or None if it escapes the directory."""
    root = docs_dir.resolve()
    path = (root / filename).resolve()
    return path if path.parent == root else None


def create_app(settings: Optional[Settings] = None, **renderer_options) -> FastAPI:
    """Build the dev server. renderer_options are passed to MarkdownRenderer for /preview."""
    settings = settings or Settings()
    docs_dir = Path(settings.docs_dir)
    app = FastAPI(title=f"{settings.app_name} dev server")

    @app.get("/api/markdown/{filename}")
    async def get_markdown(filename: str):
        path = _resolve(docs_dir, filename)
        if path is None or not path.is_file():
            return JSONResponse(status_code=404, content={"error": "File not found"})
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Error reading file %s: %s", path, e)
            return JSONResponse(status_code=500, content={"error": "Error reading file"})
        return {"content": content}

    @app.get("/preview/{filename}", response_class=HTMLResponse)
    async def preview(filename: str):
        path = _resolve(docs_dir, filename)
        if path is None or not path.is_file():
            return HTMLResponse("<p>Error loading markdown file</p>", status_code=404)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Error reading file %s: %s", path, e)
            return HTMLResponse("<p>Error loading markdown file</p>", status_code=500)
        page = Page.blank(settings.mount_target_id, title=filename)
        renderer = MarkdownRenderer(page, settings, **renderer_options)
        await renderer.render(content)
        return HTMLResponse(page.html())

    if docs_dir.is_dir():
        app.mount("/test", StaticFiles(directory=docs_dir), name="test")
    if Path(settings.dist_dir).is_dir():
        app.mount("/dist", StaticFiles(directory=settings.dist_dir), name="dist")
    # must stay last, "/" matches every path
    if Path(settings.static_dir).is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
    return app
