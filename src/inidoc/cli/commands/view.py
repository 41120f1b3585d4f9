from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from inidoc.cli.commands._common import config_root, load_cli_config
from inidoc.cli.ui import get_ui, render_parse_errors, run_tui
from inidoc.cli.utils.files import document_name, read_source
from inidoc.core.errors import ExitCode
from inidoc.parsers import try_parse


def view_cmd(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="INI document to browse."),
    keep_empty_sections: Optional[bool] = typer.Option(
        None,
        "--keep-empty-sections/--drop-empty-sections",
        help="Keep headers that collected no pairs before the next header.",
    ),
) -> None:
    """Browse a document in an interactive terminal UI."""
    ui = get_ui()
    loaded = load_cli_config(config_root([file]), keep_empty_sections=keep_empty_sections)

    try:
        text = read_source(file)
    except (OSError, UnicodeDecodeError) as e:
        ui.err_console.print(f"[err]Cannot read {escape(str(file))}:[/err] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(code=int(ExitCode.ERROR))

    result = try_parse(document_name(file), text, loaded.parse)
    if result.error is not None or result.document is None:
        render_parse_errors(ui.err_console, [result.error] if result.error else [])
        raise typer.Exit(code=int(ExitCode.PARSE_ERROR))

    run_tui(document=result.document)
