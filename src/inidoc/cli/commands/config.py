from __future__ import annotations

import json
from pathlib import Path

import typer

from inidoc.cli.commands._common import print_config_sources
from inidoc.cli.ui import get_ui
from inidoc.core.config import load_config

app = typer.Typer(help="Configuration utilities.")


@app.command("show")
def show_config_cmd(
    path: Path = typer.Argument(
        Path("."), help="Path to resolve project/global config from."
    ),
) -> None:
    ui = get_ui()
    loaded = load_config(start_dir=path.resolve())

    print_config_sources(ui.console, loaded)
    effective = {
        "parse": loaded.parse.model_dump(mode="json"),
        "output": loaded.output.model_dump(mode="json"),
    }
    ui.console.print_json(json.dumps(effective))
