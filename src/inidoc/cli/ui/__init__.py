from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.theme import Theme

from inidoc.cli.ui.formatters import (
    render_document,
    render_parse_errors,
    render_summary,
    render_tokens,
)

THEME = Theme(
    {
        "ok": "green",
        "warn": "yellow",
        "err": "bold red",
        "muted": "dim",
        "path": "cyan",
        "section": "bold magenta",
        "key": "bold",
        "value": "green",
        "token": "blue",
    }
)


@dataclass(frozen=True)
class UI:
    console: Console
    err_console: Console
    verbose: bool = False


def get_ui(*, verbose: bool = False) -> UI:
    return UI(
        console=Console(theme=THEME, highlight=False),
        err_console=Console(theme=THEME, highlight=False, stderr=True),
        verbose=verbose,
    )


def run_tui(*args, **kwargs) -> None:
    # textual is imported lazily; plain output never pays for it
    from inidoc.cli.ui.tui import run_tui as _run

    _run(*args, **kwargs)


__all__ = [
    "THEME",
    "UI",
    "get_ui",
    "render_document",
    "render_parse_errors",
    "render_summary",
    "render_tokens",
    "run_tui",
]
