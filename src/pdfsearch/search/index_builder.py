"""Inverted index construction."""

from typing import Iterable, Optional, Sequence

from pdfsearch.models import Chunk, Index, IndexMeta
from pdfsearch.search.tokenizer import unique_tokens


def build_inverted(chunks: Iterable[Chunk]) -> dict[str, list[int]]:
    """Map each token to the ids of the chunks that contain it.

    Chunks are visited in id order, so every posting list is ascending.
    A token repeated within a chunk is recorded once.
    """
    inverted: dict[str, list[int]] = {}
    for chunk in chunks:
        for token in unique_tokens(chunk.text):
            inverted.setdefault(token, []).append(chunk.id)
    return inverted


def build_index(chunks: Sequence[Chunk], meta: Optional[IndexMeta] = None) -> Index:
    """Build an immutable Index over ``chunks``."""
    inverted = build_inverted(chunks)
    return Index(
        chunks=tuple(chunks),
        inverted={token: tuple(ids) for token, ids in inverted.items()},
        meta=meta,
    )
