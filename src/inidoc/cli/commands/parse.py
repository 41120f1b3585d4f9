from __future__ import annotations

import time
from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape

from inidoc.cli.commands._common import config_root, load_cli_config, print_config_sources
from inidoc.cli.ui import get_ui, render_document, render_parse_errors, render_summary
from inidoc.cli.utils.files import document_name, read_source
from inidoc.core.errors import ExitCode
from inidoc.core.models import OutputFormat, ParseIssue, ParseResult
from inidoc.parsers import try_parse


def parse_cmd(
    files: List[Path] = typer.Argument(
        ..., help="INI documents to parse ('-' reads stdin)."
    ),
    name: Optional[str] = typer.Option(
        None, "--name", help="Document name (single input only; defaults to the file stem)."
    ),
    fmt: Optional[OutputFormat] = typer.Option(
        None, "--format", "-f", help="Output format (overrides config if set)."
    ),
    indent: Optional[int] = typer.Option(
        None, "--indent", min=0, max=8, help="JSON indent (overrides config if set)."
    ),
    keep_empty_sections: Optional[bool] = typer.Option(
        None,
        "--keep-empty-sections/--drop-empty-sections",
        help="Keep headers that collected no pairs before the next header.",
    ),
    stray: Optional[str] = typer.Option(
        None, "--stray", help="Stray top-level characters: error or skip."
    ),
    fail_fast: bool = typer.Option(
        False, "--fail-fast", help="Stop at the first document that fails."
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Verbose output."),
) -> None:
    """Parse INI documents and print them."""
    ui = get_ui(verbose=verbose)
    console = ui.console

    if name is not None and len(files) > 1:
        raise typer.BadParameter("--name needs exactly one input", param_hint="--name")

    loaded = load_cli_config(
        config_root(files),
        fmt=fmt,
        indent=indent,
        keep_empty_sections=keep_empty_sections,
        stray=stray,
    )
    if ui.verbose:
        print_config_sources(ui.err_console, loaded)

    t0 = time.perf_counter()
    results: List[ParseResult] = []
    read_failed = False

    for path in files:
        doc_name = name or document_name(path)
        try:
            text = read_source(path)
        except (OSError, UnicodeDecodeError) as e:
            read_failed = True
            ui.err_console.print(f"[err]Cannot read {escape(str(path))}:[/err] {escape(str(e))}", soft_wrap=True)
            if fail_fast:
                break
            continue

        result = try_parse(doc_name, text, loaded.parse)
        results.append(result)
        if result.document is not None:
            render_document(console, result.document, output=loaded.output)
        elif fail_fast:
            break

    issues: List[ParseIssue] = [r.error for r in results if r.error is not None]
    render_parse_errors(ui.err_console, issues)

    if ui.verbose:
        render_summary(
            ui.err_console,
            results,
            duration_ms=int((time.perf_counter() - t0) * 1000),
        )

    if read_failed:
        raise typer.Exit(code=int(ExitCode.ERROR))
    if issues:
        raise typer.Exit(code=int(ExitCode.PARSE_ERROR))
    raise typer.Exit(code=int(ExitCode.OK))
