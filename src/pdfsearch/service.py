"""Query service owning the loaded indexes."""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional

from pdfsearch.config import AppConfig
from pdfsearch.indexer import (
    IndexBuildResult,
    default_index_path,
    source_index_path,
    source_name,
)
from pdfsearch.models import Index
from pdfsearch.schemas import SearchRequest
from pdfsearch.search import expand_context, highlight, score_chunks
from pdfsearch.storage import IndexStore
from pdfsearch.utils import is_fresh

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = ""
ELLIPSIS = "…"


class SearchStatus(str, Enum):
    OK = "ok"
    EMPTY_QUERY = "empty_query"
    EMPTY_INDEX = "empty_index"
    NO_MATCHES = "no_matches"


MESSAGES = {
    SearchStatus.EMPTY_QUERY: "Empty query",
    SearchStatus.EMPTY_INDEX: "Index is empty. Run `pdfsearch index`.",
    SearchStatus.NO_MATCHES: "No matches",
}


@dataclass(frozen=True)
class Snippet:
    """One formatted search hit."""

    chunk_id: int
    score: float
    page: Optional[int]
    preview: str

    def render(self) -> str:
        loc = f" (p.{self.page})" if self.page is not None else ""
        return f"•{loc} score={self.score:g}: {self.preview}"


@dataclass(frozen=True)
class SearchOutcome:
    """Result of a search request, including why it may be empty."""

    status: SearchStatus
    snippets: tuple[Snippet, ...] = ()
    stale: Optional[bool] = None

    @property
    def message(self) -> Optional[str]:
        return MESSAGES.get(self.status)


@dataclass(frozen=True)
class IndexSummary:
    """What is loaded for a source and whether it is out of date."""

    source: Optional[str]
    chunks: int
    created_at: Optional[int]
    pdf_path: Optional[Path]
    stale: Optional[bool]

    def render(self) -> str:
        created = (
            datetime.fromtimestamp(self.created_at / 1000, tz=timezone.utc).isoformat()
            if self.created_at
            else "unknown"
        )
        stale_mark = " (STALE)" if self.stale else ""
        return f"index: source={self.source or 'default'} chunks={self.chunks} created={created}{stale_mark}"


def make_snippet(index: Index, chunk_id: int, score: float, request: SearchRequest) -> Snippet:
    """Expand and truncate the context around a match, then highlight it."""
    chunk = index.chunks[chunk_id]
    window = expand_context(
        index, chunk_id, before=request.before, after=request.after, budget=request.budget
    )
    text = window.text or chunk.text
    if len(text) > request.budget:
        text = text[: request.budget] + ELLIPSIS
    preview = highlight(text, request.query)
    page = window.page if window.page is not None else chunk.page
    return Snippet(chunk_id=chunk_id, score=score, page=page, preview=preview)


def format_outcome(outcome: SearchOutcome) -> str:
    """Render an outcome as the text returned to the caller."""
    if outcome.status is not SearchStatus.OK:
        return outcome.message or ""
    lines = [s.render() for s in outcome.snippets]
    if outcome.stale:
        lines.insert(0, "(index is out of date with its PDF; re-run `pdfsearch index`)")
    return "\n".join(lines)


class SearchService:
    """Serves queries against per-source indexes.

    Each source's Index is an immutable value. Reloading publishes a new
    mapping in a single assignment, so concurrent queries see either the
    old or the new Index, never a partial one. Writers serialize on a lock;
    readers never wait.
    """

    def __init__(self, config: AppConfig):
        self.config = config
        self._indexes: Mapping[str, Index] = {}
        self._lock = threading.Lock()
        self._freshness: dict[tuple, Optional[bool]] = {}

    def _key(self, source: Optional[str]) -> str:
        if not source:
            return DEFAULT_SOURCE
        path = Path(source)
        if path.suffix.lower() == ".json":
            return str(path.resolve())
        return source_name(path) if path.suffix.lower() == ".pdf" else source

    def index_path(self, source: Optional[str] = None) -> Path:
        """Location of the index file for ``source``."""
        key = self._key(source)
        if key == DEFAULT_SOURCE:
            return default_index_path(self.config.index_dir)
        if key.endswith(".json"):
            return Path(key)
        return source_index_path(self.config.index_dir, key)

    def source_path(self, index: Index, source: Optional[str] = None) -> Optional[Path]:
        """The PDF an index was built from, if it can be located."""
        if source and Path(source).suffix.lower() == ".pdf":
            path = Path(source)
            return path if path.is_absolute() else self.config.pdf_dir / path
        if index.meta and index.meta.source:
            return self.config.pdf_dir / f"{index.meta.source}.pdf"
        return None

    def get_index(self, source: Optional[str] = None) -> Index:
        """The loaded Index for ``source``, loading it on first use."""
        key = self._key(source)
        index = self._indexes.get(key)
        if index is None:
            with self._lock:
                index = self._indexes.get(key)
                if index is None:
                    index = IndexStore(self.index_path(source)).load()
                    self._indexes = {**self._indexes, key: index}
        return index

    def reload(self, source: Optional[str] = None) -> Index:
        """Load ``source`` from disk again and publish it."""
        index = IndexStore(self.index_path(source)).load()
        self.publish(source, index)
        return index

    def publish(self, source: Optional[str], index: Index) -> None:
        """Replace the Index served for ``source``."""
        key = self._key(source)
        with self._lock:
            self._indexes = {**self._indexes, key: index}
        logger.info(f"Loaded index for {key or 'default'}: {len(index)} chunks")

    def on_indexed(self, result: IndexBuildResult) -> None:
        """Publish a freshly built index for its source and as the default."""
        self.publish(result.source, result.index)
        self.publish(None, result.index)

    def search(self, request: SearchRequest | Mapping[str, Any]) -> SearchOutcome:
        """Run a search; raw mappings are validated into a SearchRequest first."""
        if not isinstance(request, SearchRequest):
            request = SearchRequest.model_validate(request)

        if not request.query:
            return SearchOutcome(status=SearchStatus.EMPTY_QUERY)

        index = self.get_index(request.source)
        if index.is_empty:
            return SearchOutcome(status=SearchStatus.EMPTY_INDEX)

        ranked = score_chunks(
            request.query,
            index,
            phrase_boost=request.phrase_boost,
            phrase_only=request.phrase_only,
        )[: request.limit]
        if not ranked:
            return SearchOutcome(status=SearchStatus.NO_MATCHES)

        snippets = tuple(
            make_snippet(index, r.chunk.id, r.score, request) for r in ranked
        )
        return SearchOutcome(
            status=SearchStatus.OK, snippets=snippets, stale=self._stale(index, request.source)
        )

    def _stale(self, index: Index, source: Optional[str]) -> Optional[bool]:
        pdf = self.source_path(index, source)
        if pdf is None or not pdf.is_file():
            return None
        # Hashing is only redone when the file's size or mtime moves
        stat = pdf.stat()
        key = (pdf, stat.st_size, stat.st_mtime_ns, index.meta.pdf_hash if index.meta else None)
        if key not in self._freshness:
            self._freshness[key] = is_fresh(index, pdf)
        fresh = self._freshness[key]
        return None if fresh is None else not fresh

    def summary(self, source: Optional[str] = None) -> IndexSummary:
        index = self.get_index(source)
        meta = index.meta
        return IndexSummary(
            source=meta.source if meta else None,
            chunks=len(index),
            created_at=meta.created_at if meta else None,
            pdf_path=self.source_path(index, source),
            stale=self._stale(index, source),
        )
