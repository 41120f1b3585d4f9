from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from rich.table import Table
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.reactive import reactive
from textual.widgets import DataTable, Footer, Header, Input, Static

from inidoc.core.models import Document, Section


def _short(s: Optional[str], n: int = 160) -> str:
    s = s or ""
    return s if len(s) <= n else s[:n] + "…"


def _label(section: Section) -> str:
    return section.name or "(preamble)"


def filter_pairs(section: Section, query: str) -> List[Tuple[str, str]]:
    """Pairs of `section` whose key or value contains `query` (case-insensitive)."""
    q = (query or "").strip().lower()
    out: List[Tuple[str, str]] = []
    for kv in section.pairs:
        if q and q not in kv.key.lower() and q not in kv.value.lower():
            continue
        out.append((kv.key, kv.value))
    return out


def matching_sections(doc: Document, query: str) -> List[int]:
    """Indexes of sections whose name, or any pair, matches `query`."""
    q = (query or "").strip().lower()
    if not q:
        return list(range(len(doc.sections)))
    return [
        i
        for i, s in enumerate(doc.sections)
        if q in s.name.lower() or filter_pairs(s, q)
    ]


class DocumentInfo(Static):
    """Header panel: document name and counts."""

    def __init__(self, doc: Document) -> None:
        super().__init__()
        self._doc = doc

    def render(self):
        t = Table(show_header=False, box=None, pad_edge=False)
        t.add_column("k", style="bold")
        t.add_column("v")
        t.add_row("Document", self._doc.name)
        t.add_row("Sections", str(len(self._doc.sections)))
        t.add_row("Pairs", str(self._doc.pair_count()))
        return t


@dataclass(frozen=True)
class TUIData:
    document: Document


class DocumentTUI(App):
    """Browse a parsed document: sections on the left, pairs on the right."""

    CSS = """
    Screen { overflow: hidden; }

    #info { height: 5; padding: 0 1; }
    #filters { height: 4; padding: 0 1; }

    #search {
        width: 1fr;
        min-width: 30;
        height: 3;
        margin: 0 1;
        padding: 0 1;
        border: solid $accent;
    }

    #sections_table { width: 30%; height: 1fr; }
    #pairs_table { width: 1fr; height: 1fr; }
    .pill { padding: 0 1; border: solid $panel; }
    """

    search_query = reactive("")

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True, priority=False),
        Binding("/", "focus_search", "Search", show=True, priority=False),
        Binding("escape", "clear_search", "Clear search", show=True, priority=False),
    ]

    def __init__(self, data: TUIData, **kwargs):
        super().__init__(**kwargs)
        self.data = data
        self._visible_sections: List[int] = []
        self._mounted = False

    def compose(self) -> ComposeResult:
        yield Header()

        with Container(id="info"):
            yield DocumentInfo(self.data.document)

        with Container(id="filters"):
            with Horizontal():
                yield Static("Search:", classes="pill")
                yield Input(placeholder="filter by section/key/value…", id="search")

        with Horizontal():
            yield DataTable(id="sections_table")
            yield DataTable(id="pairs_table")

        yield Footer()

    def on_mount(self) -> None:
        sections = self.query_one("#sections_table", DataTable)
        sections.cursor_type = "row"
        sections.zebra_stripes = True
        sections.add_columns("Section", "Pairs")

        pairs = self.query_one("#pairs_table", DataTable)
        pairs.cursor_type = "row"
        pairs.zebra_stripes = True
        pairs.add_columns("Key", "Value")

        self._refresh_sections()
        self._refresh_pairs(0)
        self._mounted = True
        self.set_focus(sections)

    # ----------------------------
    # Actions
    # ----------------------------

    def action_focus_search(self) -> None:
        self.query_one("#search", Input).focus()

    def action_clear_search(self) -> None:
        inp = self.query_one("#search", Input)
        inp.value = ""
        self.search_query = ""
        inp.focus()

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "search":
            return
        self.search_query = (event.value or "").strip().lower()

    def watch_search_query(self, query: str) -> None:
        if not self._mounted:
            return
        self._refresh_sections()
        self._refresh_pairs(0)

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        if event.data_table.id != "sections_table":
            return
        self._refresh_pairs(event.cursor_row)

    # ----------------------------
    # Refresh tables
    # ----------------------------

    def _refresh_sections(self) -> None:
        t = self.query_one("#sections_table", DataTable)
        t.clear()
        doc = self.data.document
        self._visible_sections = matching_sections(doc, self.search_query)
        for i in self._visible_sections:
            s = doc.sections[i]
            t.add_row(_short(_label(s), 60), str(len(s.pairs)))

    def _refresh_pairs(self, row: int) -> None:
        t = self.query_one("#pairs_table", DataTable)
        t.clear()
        if row < 0 or row >= len(self._visible_sections):
            return
        section = self.data.document.sections[self._visible_sections[row]]
        query = self.search_query
        if query and query in section.name.lower():
            query = ""
        for key, value in filter_pairs(section, query):
            t.add_row(key, _short(value, 180))


def run_tui(*, document: Document) -> None:
    DocumentTUI(TUIData(document=document)).run()
