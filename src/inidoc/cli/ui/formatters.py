from __future__ import annotations

import json
from typing import Iterable, List, Optional, Sequence

import yaml
from rich.console import Console
from rich.json import JSON
from rich.table import Table
from rich.text import Text

from inidoc.core.models import Document, OutputConfig, OutputFormat, ParseIssue, ParseResult, TokenType
from inidoc.parsers.common import document_to_dict, flatten_document
from inidoc.parsers.types import Token


def _short(s: str, max_len: int = 140) -> str:
    s = s or ""
    if len(s) <= max_len:
        return s
    return s[:max_len] + "…"


def _section_title(name: str) -> str:
    return f"[{name}]" if name else "(preamble)"


# ----------------------------
# Documents
# ----------------------------

def document_json(doc: Document, *, indent: int = 2) -> str:
    return json.dumps(document_to_dict(doc), indent=indent or None, ensure_ascii=False)


def document_yaml(doc: Document) -> str:
    return yaml.safe_dump(
        document_to_dict(doc), sort_keys=False, allow_unicode=True, default_flow_style=False
    )


def document_tables(doc: Document) -> List[Table]:
    tables: List[Table] = []
    for section in doc.sections:
        t = Table(title=Text(_section_title(section.name)), title_style="section", show_lines=False)
        t.add_column("Key", style="key", no_wrap=True)
        t.add_column("Value", style="value")
        for kv in section.pairs:
            t.add_row(Text(kv.key), Text(_short(kv.value)))
        if not section.pairs:
            t.add_row(Text("—", style="muted"), Text(""))
        tables.append(t)
    return tables


def render_document(
    console: Console,
    doc: Document,
    *,
    output: Optional[OutputConfig] = None,
) -> None:
    output = output or OutputConfig()
    fmt = output.format

    if fmt == OutputFormat.JSON:
        console.print(
            JSON(document_json(doc, indent=output.indent), indent=output.indent or None),
            soft_wrap=True,
        )
    elif fmt == OutputFormat.YAML:
        console.print(Text(document_yaml(doc)), soft_wrap=True, end="")
    elif fmt == OutputFormat.TABLE:
        console.print(Text(doc.name, style="bold"))
        for t in document_tables(doc):
            console.print(t)
    elif fmt == OutputFormat.FLAT:
        for k, v in flatten_document(doc):
            console.print(Text(f"{k} = {v}"), soft_wrap=True)
    else:  # pragma: no cover
        raise ValueError(f"unknown output format: {fmt}")


# ----------------------------
# Tokens
# ----------------------------

def render_tokens(console: Console, tokens: Iterable[Token], *, title: str = "Tokens") -> int:
    table = Table(title=title, show_lines=False)
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("Type", style="token", no_wrap=True)
    table.add_column("Line", justify="right", no_wrap=True)
    table.add_column("Col", justify="right", no_wrap=True)
    table.add_column("Text")

    n = 0
    for n, tok in enumerate(tokens, start=1):
        style = "err" if tok.type == TokenType.ERROR else ""
        kind = tok.type.value
        if tok.error_kind is not None:
            kind = f"{kind}:{tok.error_kind.value}"
        table.add_row(
            str(n),
            Text(kind, style=style),
            str(tok.line),
            str(tok.column),
            Text(_short(repr(tok.value), 120)),
        )

    console.print(table)
    return n


# ----------------------------
# Errors
# ----------------------------

def format_issue(issue: ParseIssue) -> str:
    where = issue.name or "<input>"
    if issue.line is not None:
        where = f"{where}:{issue.line}:{issue.column or 1}"
    return f"{where}: {issue.message} ({issue.kind.value})"


def render_parse_errors(
    console: Console,
    issues: Sequence[ParseIssue],
    *,
    max_items: int = 25,
) -> None:
    if not issues:
        return

    console.print(f"[err]✖ {len(issues)} document(s) failed to parse.[/err]")

    shown = list(issues)[:max_items]
    for issue in shown:
        console.print(Text(f"- {format_issue(issue)}"), soft_wrap=True)

    if len(issues) > len(shown):
        console.print(f"[muted]… and {len(issues) - len(shown)} more[/muted]")


# ----------------------------
# Summary
# ----------------------------

def render_summary(
    console: Console,
    results: Sequence[ParseResult],
    *,
    header: str = "Summary",
    duration_ms: Optional[int] = None,
) -> None:
    ok = [r for r in results if r.ok]

    cols = ["documents", "parsed", "failed", "sections", "pairs"]
    vals = [
        str(len(results)),
        str(len(ok)),
        str(len(results) - len(ok)),
        str(sum(len(r.document.sections) for r in ok if r.document)),
        str(sum(r.document.pair_count() for r in ok if r.document)),
    ]
    if duration_ms is not None:
        cols.append("duration_ms")
        vals.append(str(duration_ms))

    table = Table(title=header, show_header=True, show_lines=False)
    for c in cols:
        table.add_column(c, style="bold", no_wrap=True)
    table.add_row(*vals)

    console.print()
    console.print(table)
