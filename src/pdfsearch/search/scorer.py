"""Token-overlap scoring with an exact-phrase boost."""

from pdfsearch.models import Index, ScoredChunk
from pdfsearch.search.tokenizer import unique_tokens

DEFAULT_PHRASE_BOOST = 2.0
MIN_PHRASE_LENGTH = 3


def score_chunks(
    query: str,
    index: Index,
    phrase_boost: float = DEFAULT_PHRASE_BOOST,
    phrase_only: bool = False,
) -> list[ScoredChunk]:
    """Rank the chunks of ``index`` against ``query``.

    Each distinct query token adds one point to every chunk containing it.
    When the trimmed query is at least three characters long, chunks whose
    text contains it verbatim (case-insensitively) gain ``phrase_boost``, and
    with ``phrase_only`` all other chunks are dropped.

    Args:
        query: Free-text query
        index: Index to search
        phrase_boost: Points added for a literal phrase match (0 disables)
        phrase_only: Keep only chunks containing the literal phrase

    Returns:
        Matches sorted by descending score, ties by ascending chunk id
    """
    scores: dict[int, float] = {}
    for token in unique_tokens(query):
        for chunk_id in index.postings(token):
            scores[chunk_id] = scores.get(chunk_id, 0) + 1

    phrase = query.strip().lower()
    if len(phrase) >= MIN_PHRASE_LENGTH and (phrase_boost > 0 or phrase_only):
        containing = {c.id for c in index.chunks if phrase in c.text.lower()}
        if phrase_boost > 0:
            for chunk_id in containing:
                scores[chunk_id] = scores.get(chunk_id, 0) + phrase_boost
        if phrase_only:
            scores = {cid: s for cid, s in scores.items() if cid in containing}

    results = [
        ScoredChunk(chunk=index.chunks[chunk_id], score=score)
        for chunk_id, score in scores.items()
        if 0 <= chunk_id < len(index.chunks)
    ]
    results.sort(key=lambda r: (-r.score, r.chunk.id))
    return results
