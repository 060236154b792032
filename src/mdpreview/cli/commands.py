"""CLI command implementations"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdpreview.client import DocumentClient
from mdpreview.config import Settings, load_config
from mdpreview.core.dom import Page
from mdpreview.core.pipeline import MarkdownRenderer


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _write(page: Page, out: Optional[str]) -> None:
    """Write the rendered page to out, or to stdout when out is not given."""
    if out:
        Path(out).write_text(page.html(), encoding="utf-8")
        typer.echo(f"Wrote {out}")
    else:
        typer.echo(page.html())


def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log at DEBUG level")] = False,
    ):
    """Configure logging for every command."""
    settings = _settings()
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def render_cmd(
    path: Annotated[Path, typer.Argument(exists=True, dir_okay=False, readable=True, help="Markdown file to render")],
    out: Annotated[Optional[str], typer.Option("--out", "-o", help="Output HTML file (default: stdout)")] = None,
    target: Annotated[Optional[str], typer.Option("--target-id", help="Mount target id")] = None,
    ):
    """Render a local markdown file into a standalone HTML page."""
    settings = _settings(overrides={"mount_target_id": target})
    page = Page.blank(settings.mount_target_id, title=path.name)
    renderer = MarkdownRenderer(page, settings)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Cannot read {path}", e)
    blocks = asyncio.run(renderer.render(text))
    for block in blocks:
        typer.echo(f"  diagram {block.index}: {block.state.value}", err=True)
    _write(page, out)


def fetch_cmd(
    name: Annotated[str, typer.Argument(help="Document name on the server")],
    base_url: Annotated[Optional[str], typer.Option("--base-url", help="Document server root URL")] = None,
    out: Annotated[Optional[str], typer.Option("--out", "-o", help="Output HTML file (default: stdout)")] = None,
    ):
    """Fetch a document from a running dev server and render it."""
    settings = _settings(overrides={"base_url": base_url})
    page = Page.blank(settings.mount_target_id, title=name)
    client = DocumentClient(settings.base_url, settings.fetch_timeout)
    renderer = MarkdownRenderer(page, settings, client=client)
    asyncio.run(renderer.load_and_render(name))
    _write(page, out)


def serve_cmd(
    host: Annotated[Optional[str], typer.Option("--host", help="Bind address")] = None,
    port: Annotated[Optional[int], typer.Option("--port", help="Bind port")] = None,
    docs: Annotated[Optional[str], typer.Option("--docs-dir", help="Directory of markdown documents")] = None,
    ):
    """Run the local development server."""
    import uvicorn

    from mdpreview.server import create_app

    settings = _settings(overrides={"host": host, "port": port, "docs_dir": docs})
    typer.echo(f"Server running at http://{settings.host}:{settings.port}")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())
