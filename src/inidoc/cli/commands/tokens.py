from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from inidoc.cli.commands._common import config_root, load_cli_config
from inidoc.cli.ui import get_ui, render_tokens
from inidoc.cli.utils.files import read_source
from inidoc.core.errors import ExitCode
from inidoc.core.models import TokenType
from inidoc.parsers import tokenize


def tokens_cmd(
    file: Path = typer.Argument(..., help="INI document to tokenize ('-' reads stdin)."),
    stray: Optional[str] = typer.Option(
        None, "--stray", help="Stray top-level characters: error or skip."
    ),
) -> None:
    """Print the token stream of a document."""
    ui = get_ui()
    loaded = load_cli_config(config_root([file]), stray=stray)

    try:
        text = read_source(file)
    except (OSError, UnicodeDecodeError) as e:
        ui.err_console.print(f"[err]Cannot read {escape(str(file))}:[/err] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(code=int(ExitCode.ERROR))

    tokens = list(tokenize(text, loaded.parse))
    render_tokens(ui.console, tokens, title=f"Tokens ({file})")

    if tokens and tokens[-1].type == TokenType.ERROR:
        raise typer.Exit(code=int(ExitCode.PARSE_ERROR))
    raise typer.Exit(code=int(ExitCode.OK))
