from __future__ import annotations

from typing import Optional

import typer
from rich.text import Text

from inidoc.cli.ui import get_ui, render_document
from inidoc.core.errors import ExitCode
from inidoc.core.models import OutputConfig, OutputFormat
from inidoc.parsers import parse

DEMO_NAME = "test"

DEMO_INPUT = """
key=abcdefg

[user]
name=Adam Eury
age=35
job=Software Engineer
email=adam@test.com

[address]
street=1800 Test Lane
city=Testy Mctestersonville
state=North Carolina
zip=90210
"""


def demo_cmd(
    fmt: OutputFormat = typer.Option(
        OutputFormat.JSON, "--format", "-f", help="Output format."
    ),
    show_input: bool = typer.Option(
        False, "--show-input", help="Print the sample input first."
    ),
) -> None:
    """Parse and print a built-in sample document."""
    ui = get_ui()
    if show_input:
        ui.console.print(Text(DEMO_INPUT), soft_wrap=True)

    doc = parse(DEMO_NAME, DEMO_INPUT)
    render_document(ui.console, doc, output=OutputConfig(format=fmt))
    raise typer.Exit(code=int(ExitCode.OK))
