"""Search Deck - a TUI for building a PDF index and trying queries on it."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from pathlib import Path

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import (
    Button,
    DataTable,
    DirectoryTree,
    Footer,
    Header,
    Input,
    Label,
    Log,
    Static,
)

from pdfsearch.config import load_config
from pdfsearch.errors import PdfSearchError
from pdfsearch.indexer import index_source
from pdfsearch.service import SearchService, SearchStatus


@dataclass
class IndexStats:
    """Statistics about the index being built or served."""

    source: str = ""
    chunks: int = 0
    tokens: int = 0
    pages: int = 0
    pdf_bytes: int = 0
    status: str = "idle"
    start_time: datetime | None = None
    end_time: datetime | None = None

    @property
    def elapsed(self) -> str:
        if self.start_time is None:
            return "-"
        seconds = ((self.end_time or datetime.now()) - self.start_time).total_seconds()
        return f"{seconds:.1f}s"


STATUS_STYLES = {
    "idle": "dim",
    "indexing": "bold yellow",
    "ready": "bold green",
    "error": "bold red",
}


class StatsPanel(Static):
    """Index statistics display."""

    def on_mount(self) -> None:
        self.set_stats(IndexStats())

    def set_stats(self, stats: IndexStats) -> None:
        style = STATUS_STYLES.get(stats.status, "white")
        rows = [
            ("status", f"[{style}]{stats.status}[/]"),
            ("elapsed", stats.elapsed),
            ("source", stats.source or "-"),
            ("pages", f"{stats.pages:,}"),
            ("pdf size", f"{stats.pdf_bytes / 1024:.1f} KB"),
            ("chunks", f"{stats.chunks:,}"),
            ("terms", f"{stats.tokens:,}"),
        ]
        self.update("\n".join(f"[b]{name:<9}[/b] {value}" for name, value in rows))


class ResultsTable(DataTable):
    """Ranked matches for the last query."""

    def on_mount(self) -> None:
        self.add_columns("#", "Page", "Score", "Preview")
        self.cursor_type = "row"

    def set_rows(self, rows: list[tuple[int | None, float, str]]) -> None:
        self.clear()
        for rank, (page, score, preview) in enumerate(rows, 1):
            flat = " ".join(preview.split())
            if len(flat) > 100:
                flat = flat[:97] + "..."
            self.add_row(str(rank), "--" if page is None else str(page), f"{score:g}", flat)


class SearchDeck(App):
    """The pdfsearch Search Deck - index and query console."""

    class StatsUpdated(Message):
        def __init__(self, stats: IndexStats) -> None:
            self.stats = stats
            super().__init__()

    class LogMessage(Message):
        def __init__(self, message: str) -> None:
            self.message = message
            super().__init__()

    CSS = """
    #deck {
        layout: horizontal;
    }

    #sidebar {
        width: 38;
        padding: 0 1;
        border-right: tall $accent;
    }

    #workspace {
        width: 1fr;
        padding: 0 1;
    }

    StatsPanel {
        height: auto;
        padding: 0 1;
        border: heavy $accent;
    }

    #source-bar {
        height: auto;
        margin: 1 0;
    }

    #source-input {
        width: 1fr;
    }

    #source-bar Button {
        min-width: 10;
        margin-left: 1;
    }

    ResultsTable {
        height: 2fr;
        border: heavy $secondary;
    }

    #log-panel {
        height: 1fr;
        border: tall $secondary;
    }

    .heading {
        color: $accent;
        text-style: bold underline;
    }

    #dir-tree {
        height: 1fr;
        border: tall $accent;
    }
    """

    BINDINGS = [
        Binding("ctrl+b", "index", "Build Index", show=True),
        Binding("ctrl+l", "clear", "Clear", show=True),
        Binding("ctrl+q", "quit", "Quit", show=True),
    ]

    TITLE = "pdfsearch Search Deck"
    SUB_TITLE = "Index & Query Console"

    def __init__(self) -> None:
        super().__init__()
        self.config = load_config()
        self.service = SearchService(self.config)

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="deck"):
            with Vertical(id="sidebar"):
                yield Label("Index", classes="heading")
                yield StatsPanel()
                yield Label("PDFs", classes="heading")
                root = self.config.pdf_dir if self.config.pdf_dir.is_dir() else Path.cwd()
                yield DirectoryTree(root, id="dir-tree")

            with Vertical(id="workspace"):
                with Horizontal(id="source-bar"):
                    yield Input(placeholder="PDF or .txt path to index", id="source-input")
                    yield Button("Index", id="index-btn", variant="primary")
                    yield Button("Reset", id="clear-btn")
                yield Input(placeholder="Query (Enter to search)", id="query-input")
                yield ResultsTable(id="results")
                yield Label("Log", classes="heading")
                yield Log(id="log-panel")

        yield Footer()

    def on_mount(self) -> None:
        self._log(f"PDFs: {self.config.pdf_dir}  indexes: {self.config.index_dir}")
        self.load_default()

    def _log(self, message: str) -> None:
        self.query_one("#log-panel", Log).write_line(f"{datetime.now():%H:%M:%S}  {message}")

    def on_search_deck_stats_updated(self, event: StatsUpdated) -> None:
        self.query_one(StatsPanel).set_stats(event.stats)

    def on_search_deck_log_message(self, event: LogMessage) -> None:
        self._log(event.message)

    def on_directory_tree_file_selected(self, event: DirectoryTree.FileSelected) -> None:
        self.query_one("#source-input", Input).value = str(event.path)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "index-btn":
            self.action_index()
        elif event.button.id == "clear-btn":
            self.action_clear()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "query-input":
            self.run_query(event.value)
        elif event.input.id == "source-input":
            self.action_index()

    def action_clear(self) -> None:
        self.query_one("#results", ResultsTable).clear()
        self.query_one("#log-panel", Log).clear()
        self._log("Cleared")

    def action_index(self) -> None:
        source = self.query_one("#source-input", Input).value.strip()
        if not source:
            self._log("ERROR: No PDF path specified")
            return
        self.run_index(source)

    def _stats_for(self, source: str) -> IndexStats:
        index = self.service.get_index()
        pages = {c.page for c in index.chunks if c.page is not None}
        return IndexStats(
            source=source or (index.meta.source if index.meta and index.meta.source else ""),
            chunks=len(index),
            tokens=len(index.inverted),
            pages=len(pages),
            pdf_bytes=(index.meta.pdf_size or 0) if index.meta else 0,
            status="ready" if len(index) else "idle",
        )

    @work(exclusive=True, thread=True)
    def load_default(self) -> None:
        """Load the default index in a background thread."""
        try:
            self.post_message(self.StatsUpdated(self._stats_for("")))
        except PdfSearchError as e:
            self.post_message(self.LogMessage(f"ERROR: {e}"))

    @work(exclusive=True, thread=True)
    def run_index(self, source: str) -> None:
        """Build an index in a background thread, then serve it."""
        stats = IndexStats(source=Path(source).stem, status="indexing", start_time=datetime.now())
        self.post_message(self.StatsUpdated(stats))
        self.post_message(self.LogMessage(f"Indexing {source}..."))

        try:
            result = index_source(Path(source), self.config)
        except (PdfSearchError, OSError) as e:
            self.post_message(self.StatsUpdated(replace(stats, status="error", end_time=datetime.now())))
            self.post_message(self.LogMessage(f"ERROR: {e}"))
            return

        self.service.on_indexed(result)
        done = replace(self._stats_for(result.source), start_time=stats.start_time, end_time=datetime.now())
        self.post_message(self.StatsUpdated(done))
        self.post_message(
            self.LogMessage(f"COMPLETE: {done.chunks} chunks -> {result.paths[0]}")
        )

    def run_query(self, query: str) -> None:
        try:
            outcome = self.service.search({"query": query, "limit": 20})
        except PdfSearchError as e:
            self._log(f"ERROR: {e}")
            return

        table = self.query_one("#results", ResultsTable)
        if outcome.status is not SearchStatus.OK:
            table.clear()
            self._log(outcome.message or "")
            return
        table.set_rows([(s.page, s.score, s.preview) for s in outcome.snippets])
        self._log(f"{len(outcome.snippets)} results for {query!r}")
        if outcome.stale:
            self._log("Index is out of date with its PDF; re-index recommended")


def main() -> None:
    """Run the Search Deck TUI."""
    app = SearchDeck()
    app.run()


if __name__ == "__main__":
    main()
