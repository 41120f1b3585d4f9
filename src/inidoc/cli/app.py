from __future__ import annotations

import typer
from rich.console import Console

from inidoc import __version__
from inidoc.cli.commands.config import app as config_app
from inidoc.cli.commands.demo import demo_cmd
from inidoc.cli.commands.init import app as init_app
from inidoc.cli.commands.parse import parse_cmd
from inidoc.cli.commands.tokens import tokens_cmd
from inidoc.cli.commands.view import view_cmd

app = typer.Typer(
    name="inidoc",
    help="Parse INI-style configuration files into ordered sections and key/value pairs.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"inidoc {__version__}")
        raise typer.Exit(0)


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", callback=_version_callback
    ),
) -> None:
    pass


# Commands
app.command("parse")(parse_cmd)
app.command("tokens")(tokens_cmd)
app.command("demo")(demo_cmd)
app.command("view")(view_cmd)

# Command groups
app.add_typer(init_app, name="init")
app.add_typer(config_app, name="config")
