"""CLI entrypoint: Typer app definition and command registration"""

import typer

from noteblocks.cli.commands import init_cmd, normalize_cmd, tags_cmd, typography_cmd


app = typer.Typer(name="noteblocks", no_args_is_help=True, help="Normalize note content into typed blocks")

app.command(name="normalize")(normalize_cmd)
app.command(name="typography")(typography_cmd)
app.command(name="tags")(tags_cmd)
app.command(name="init")(init_cmd)
