from __future__ import annotations

from pathlib import Path

import typer

from inidoc.cli.utils.files import ensure_dir, write_file

app = typer.Typer(help="Initialize inidoc config in a project.")


DEFAULT_CONFIG_TOML = """\
[parse]
# keep section headers that collected no pairs before the next header
keep_empty_sections = false
# top-level characters that start neither a section nor a key: "error" or "skip"
stray_characters = "error"

[output]
# json, yaml, table or flat
format = "json"
indent = 2
"""


@app.command("repo")
def init_repo(
    path: Path = typer.Argument(Path("."), help="Project path to initialize."),
    force: bool = typer.Option(False, "--force", help="Overwrite existing files."),
) -> None:
    root = path.resolve()
    cfg_dir = root / ".inidoc"
    ensure_dir(cfg_dir)

    target = cfg_dir / "config.toml"
    if write_file(target, DEFAULT_CONFIG_TOML, force=force):
        typer.echo(f"Initialized {target}")
    else:
        typer.echo(f"Kept existing {target} (use --force to overwrite)")
