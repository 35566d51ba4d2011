"""Data models for pdfsearch."""

from pdfsearch.models.index import (
    Chunk,
    ContextWindow,
    Index,
    IndexMeta,
    Paragraph,
    ScoredChunk,
)

__all__ = ["Chunk", "ContextWindow", "Index", "IndexMeta", "Paragraph", "ScoredChunk"]
