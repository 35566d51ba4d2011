"""Page-aware chunking strategy."""

import re
from typing import Iterable, Iterator, Optional

from pdfsearch.chunkers.segmenter import segment
from pdfsearch.models import Chunk, Paragraph

_SENTENCE_END = re.compile(r"[.!?]\s+")


def split_sentences(text: str) -> list[str]:
    """Split ``text`` after every ``.``, ``!`` or ``?`` followed by whitespace.

    The terminator stays with its sentence; the whitespace run is dropped.
    """
    sentences = []
    start = 0
    for match in _SENTENCE_END.finditer(text):
        sentences.append(text[start : match.start() + 1])
        start = match.end()
    if start < len(text):
        sentences.append(text[start:])
    return [s for s in sentences if s]


def pack_sentences(sentences: Iterable[str], max_len: int) -> Iterator[str]:
    """Greedily join sentences into pieces of at most ``max_len`` characters.

    A single sentence longer than ``max_len`` is yielded on its own.
    """
    current = ""
    for sentence in sentences:
        candidate = f"{current} {sentence}" if current else sentence
        if len(candidate) > max_len and current:
            yield current
            current = sentence
        else:
            current = candidate
    if current:
        yield current


class _Accumulator:
    """Coalesces paragraphs into chunks, assigning sequential ids."""

    def __init__(self, max_len: int, sentence_split: bool):
        self.max_len = max_len
        self.sentence_split = sentence_split
        self.chunks: list[Chunk] = []
        self.text = ""
        self.page: Optional[int] = None

    def emit(self, text: str, page: Optional[int]) -> None:
        text = text.strip()
        if text:
            self.chunks.append(Chunk(id=len(self.chunks), text=text, page=page))

    def flush(self) -> None:
        self.emit(self.text, self.page)
        self.text = ""
        self.page = None

    def push(self, para: Paragraph) -> None:
        # Never mix text from two pages in one chunk
        if self.text and para.page is not None and para.page != self.page:
            self.flush()

        candidate = f"{self.text} {para.text}" if self.text else para.text
        if len(candidate) <= self.max_len:
            if not self.text:
                self.page = para.page
            self.text = candidate
            return

        if not self.text:
            self._push_oversized(para)
            return

        # Full: close the current chunk and reconsider the paragraph alone
        self.flush()
        self.push(para)

    def _push_oversized(self, para: Paragraph) -> None:
        if not self.sentence_split:
            self.emit(para.text, para.page)
            return
        for piece in pack_sentences(split_sentences(para.text), self.max_len):
            self.emit(piece, para.page)


def chunk_paragraphs(
    paragraphs: Iterable[Paragraph],
    max_len: int = 1000,
    sentence_split: bool = True,
) -> list[Chunk]:
    """Coalesce paragraphs into chunks of at most ``max_len`` characters.

    Adjacent paragraphs from the same page are joined so headings stay with
    their body text. A paragraph too long to fit on its own is split at
    sentence boundaries (or kept whole when ``sentence_split`` is off).

    Args:
        paragraphs: Paragraphs in document order
        max_len: Maximum chunk length in characters
        sentence_split: Whether to split oversized paragraphs by sentence

    Returns:
        Chunks with ids ``0..n-1`` in emission order
    """
    if max_len <= 0:
        raise ValueError("max_len must be a positive integer")

    acc = _Accumulator(max_len, sentence_split)
    for para in paragraphs:
        acc.push(para)
    acc.flush()
    return acc.chunks


class PageChunker:
    """Default chunking: segment on page markers and blank lines, pack to 1000.

    - Paragraph boundaries are blank lines and ``<<<PAGE:N>>>`` markers
    - Paragraphs of one page are coalesced up to ``max_len`` characters
    - Oversized paragraphs are split on sentence boundaries
    """

    MAX_CHUNK_SIZE = 1000

    def __init__(self, max_len: int = MAX_CHUNK_SIZE, sentence_split: bool = True):
        self.max_len = max_len
        self.sentence_split = sentence_split

    def chunk(self, text: str) -> list[Chunk]:
        """Split page-marked text into chunks."""
        if not text or not text.strip():
            return []
        return chunk_paragraphs(segment(text), self.max_len, self.sentence_split)
