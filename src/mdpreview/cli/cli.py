"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdpreview.cli.commands import fetch_cmd, main_callback, render_cmd, serve_cmd


app = typer.Typer(name="mdpreview", no_args_is_help=True, help="Sanitized markdown preview renderer")

app.callback()(main_callback)
app.command(name="render")(render_cmd)
app.command(name="fetch")(fetch_cmd)
app.command(name="serve")(serve_cmd)
