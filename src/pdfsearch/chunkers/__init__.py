"""Text segmentation and chunking."""

from pdfsearch.chunkers.page_chunker import PageChunker, chunk_paragraphs, split_sentences
from pdfsearch.chunkers.segmenter import PAGE_MARKER, page_marker, segment

__all__ = [
    "PAGE_MARKER",
    "PageChunker",
    "chunk_paragraphs",
    "page_marker",
    "segment",
    "split_sentences",
]
