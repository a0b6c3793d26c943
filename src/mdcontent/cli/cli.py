"""CLI entrypoint: Typer app definition and command registration"""

import logging
from typing import Annotated

import typer

from mdcontent.cli.commands import (
    check_cmd, export_cmd, find_cmd, fmt_cmd, index_cmd, init_cmd, parse_cmd, tags_cmd,
)


app = typer.Typer(name="mdcontent", no_args_is_help=True, help="Front-matter Markdown content toolkit")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    ):
    """Parse, check, normalize, export and index front-matter Markdown documents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


app.command(name="parse")(parse_cmd)
app.command(name="check")(check_cmd)
app.command(name="fmt")(fmt_cmd)
app.command(name="export")(export_cmd)
app.command(name="index")(index_cmd)
app.command(name="tags")(tags_cmd)
app.command(name="find")(find_cmd)
app.command(name="init")(init_cmd)
