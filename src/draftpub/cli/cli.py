"""CLI entrypoint: Typer app definition and command registration"""

import typer

from draftpub.cli.commands import edit_cmd, index_cmd, init_cmd, new_cmd, preview_cmd, slug_cmd, sync_cmd


app = typer.Typer(name="draftpub", no_args_is_help=True, help="Draft to article publishing pipeline")

app.command(name="sync")(sync_cmd)
app.command(name="index")(index_cmd)
app.command(name="new")(new_cmd)
app.command(name="edit")(edit_cmd)
app.command(name="preview")(preview_cmd)
app.command(name="slug")(slug_cmd)
app.command(name="init")(init_cmd)
