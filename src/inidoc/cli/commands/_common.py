from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import typer

from inidoc.cli.utils.files import STDIN_MARK
from inidoc.core.config import LoadedConfig, load_config
from inidoc.core.models import OutputFormat

STRAY_CHOICES = ("error", "skip")


def config_root(files: List[Path]) -> Path:
    """Directory the project config search starts from."""
    for f in files:
        if str(f) != STDIN_MARK:
            return f.resolve().parent
    return Path.cwd()


def load_cli_config(
    start_dir: Path,
    *,
    fmt: Optional[OutputFormat] = None,
    indent: Optional[int] = None,
    keep_empty_sections: Optional[bool] = None,
    stray: Optional[str] = None,
) -> LoadedConfig:
    if stray is not None and stray not in STRAY_CHOICES:
        raise typer.BadParameter(
            f"expected one of {', '.join(STRAY_CHOICES)}", param_hint="--stray"
        )

    cli_overrides: Dict[str, Any] = {
        "parse": {
            "keep_empty_sections": keep_empty_sections,
            "stray_characters": stray,
        },
        "output": {
            "format": fmt.value if fmt is not None else None,
            "indent": indent,
        },
    }
    return load_config(start_dir=start_dir, cli_overrides=cli_overrides)


def print_config_sources(console, loaded: LoadedConfig) -> None:
    console.print("[bold]Config sources:[/bold]")
    console.print(f"  global: {loaded.global_path or '-'}", soft_wrap=True)
    console.print(f"  repo:   {loaded.repo_path or '-'}", soft_wrap=True)
    console.print()
