"""Split page-marked text into paragraphs."""

import re
from typing import Optional

from pdfsearch.models import Paragraph

PAGE_MARKER = re.compile(r"^<<<PAGE:(\d+)>>>$")
_WHITESPACE = re.compile(r"\s+")
_LINE_BREAK = re.compile(r"\r?\n")


def page_marker(page: int) -> str:
    """Return the sentinel line that opens ``page``."""
    return f"<<<PAGE:{page}>>>"


def segment(text: str) -> list[Paragraph]:
    """Split ``text`` into paragraphs, each tagged with its page.

    Paragraphs end at blank lines and at page markers, so a paragraph never
    spans two pages. A paragraph takes the page in effect when its first
    line was read.

    Args:
        text: Extracted text, optionally containing ``<<<PAGE:N>>>`` lines

    Returns:
        Non-empty paragraphs in document order
    """
    paragraphs: list[Paragraph] = []
    current_page: Optional[int] = None
    buffer: list[str] = []
    buffer_page: Optional[int] = None

    def flush() -> None:
        nonlocal buffer, buffer_page
        joined = _WHITESPACE.sub(" ", " ".join(buffer)).strip()
        if joined:
            paragraphs.append(Paragraph(text=joined, page=buffer_page))
        buffer = []
        buffer_page = None

    for raw_line in _LINE_BREAK.split(text):
        line = raw_line.strip()

        marker = PAGE_MARKER.match(line)
        if marker:
            flush()
            current_page = int(marker.group(1))
            continue

        if not line:
            flush()
            continue

        if not buffer:
            buffer_page = current_page
        buffer.append(line)

    flush()
    return paragraphs
