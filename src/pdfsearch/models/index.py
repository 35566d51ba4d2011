"""Core data models for chunks, indexes and query results."""

from dataclasses import dataclass, field
from typing import Mapping, Optional


@dataclass(frozen=True)
class Paragraph:
    """A paragraph of extracted text and the page it started on."""

    text: str
    page: Optional[int] = None


@dataclass(frozen=True)
class Chunk:
    """A bounded-size unit of document text, the unit of retrieval."""

    id: int
    text: str
    page: Optional[int] = None


@dataclass(frozen=True)
class IndexMeta:
    """Provenance of an index: where it came from and when."""

    source: Optional[str] = None
    created_at: Optional[int] = None  # epoch millis
    pdf_size: Optional[int] = None
    pdf_mtime: Optional[float] = None  # epoch millis
    pdf_hash: Optional[str] = None  # hex sha256 of the source bytes


@dataclass(frozen=True)
class Index:
    """Chunks plus the token -> chunk id inverted index built over them.

    Chunk ids equal their position in ``chunks``, so postings are used as
    direct lookups. An Index is never mutated; rebuilding produces a new one.
    """

    chunks: tuple[Chunk, ...] = ()
    inverted: Mapping[str, tuple[int, ...]] = field(default_factory=dict)
    meta: Optional[IndexMeta] = None

    @classmethod
    def empty(cls) -> "Index":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.chunks

    def postings(self, token: str) -> tuple[int, ...]:
        """Chunk ids containing ``token``; unknown tokens have none."""
        return self.inverted.get(token, ())

    def __len__(self) -> int:
        return len(self.chunks)


@dataclass(frozen=True)
class ScoredChunk:
    """A chunk matched by a query."""

    chunk: Chunk
    score: float


@dataclass(frozen=True)
class ContextWindow:
    """Display text assembled from a contiguous run of chunks."""

    text: str
    page: Optional[int] = None
