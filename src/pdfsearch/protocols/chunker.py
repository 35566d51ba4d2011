"""Protocol for text chunking strategies."""

from typing import Protocol, runtime_checkable

from pdfsearch.models import Chunk


@runtime_checkable
class ChunkingStrategy(Protocol):
    """Protocol for text chunking strategies.

    Implementations receive page-marked text and must number chunks 0..n-1.
    """

    def chunk(self, text: str) -> list[Chunk]:
        """Split text into chunks with page metadata."""
        ...
