"""Protocol definitions for extensible components."""

from pdfsearch.protocols.chunker import ChunkingStrategy
from pdfsearch.protocols.extractor import TextExtractor

__all__ = ["ChunkingStrategy", "TextExtractor"]
