"""Source document extractors for pdfsearch."""

from pathlib import Path
from typing import Optional

from pdfsearch.extractors.ocr import needs_ocr, ocr_pdf
from pdfsearch.extractors.pdf_extractor import PdfExtractor
from pdfsearch.extractors.text_extractor import PlainTextExtractor
from pdfsearch.protocols import TextExtractor

# Registry of available extractors
_EXTRACTORS: list[TextExtractor] = [
    PdfExtractor(),
    PlainTextExtractor(),
]


def get_extractor(source: Path | str) -> Optional[TextExtractor]:
    """Find an extractor that can handle the given source.

    Args:
        source: Path to the source document

    Returns:
        A TextExtractor instance that can handle the source, or None
    """
    source_path = Path(source)
    for extractor in _EXTRACTORS:
        if extractor.can_handle(source_path):
            return extractor
    return None


def register_extractor(extractor: TextExtractor) -> None:
    """Register a custom extractor (for plugins/extensions).

    Args:
        extractor: An object implementing the TextExtractor protocol
    """
    _EXTRACTORS.append(extractor)


__all__ = [
    "PdfExtractor",
    "PlainTextExtractor",
    "get_extractor",
    "needs_ocr",
    "ocr_pdf",
    "register_extractor",
]
