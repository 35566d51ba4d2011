"""Indexing and retrieval over chunked document text."""

from pdfsearch.search.context import expand_context
from pdfsearch.search.highlight import highlight
from pdfsearch.search.index_builder import build_index, build_inverted
from pdfsearch.search.scorer import score_chunks
from pdfsearch.search.tokenizer import tokenize, unique_tokens

__all__ = [
    "build_index",
    "build_inverted",
    "expand_context",
    "highlight",
    "score_chunks",
    "tokenize",
    "unique_tokens",
]
