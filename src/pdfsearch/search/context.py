"""Assemble display context around a matched chunk."""

from pdfsearch.models import ContextWindow, Index

SEPARATOR = "\n\n"


def expand_context(
    index: Index,
    center_id: int,
    before: int = 1,
    after: int = 2,
    budget: int = 1200,
) -> ContextWindow:
    """Join the chunks around ``center_id`` without exceeding ``budget``.

    Chunks ``center_id - before`` to ``center_id + after`` are taken in order
    until the next one would push the joined text past ``budget``
    characters. If the first candidate alone is too long the window is
    empty.

    Returns:
        The joined text and the centre chunk's page (or the first known page)
    """
    chunks = index.chunks
    start = max(0, center_id - before)
    end = min(len(chunks) - 1, center_id + after)

    page = chunks[center_id].page if 0 <= center_id < len(chunks) else None
    parts: list[str] = []
    length = 0
    for chunk in chunks[start : end + 1]:
        if not chunk.text:
            continue
        added = len(chunk.text) + (len(SEPARATOR) if parts else 0)
        if length + added > budget:
            break
        parts.append(chunk.text)
        length += added
        if page is None:
            page = chunk.page

    return ContextWindow(text=SEPARATOR.join(parts), page=page)
