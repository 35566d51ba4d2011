"""Extractor for PDF documents."""

import logging
from pathlib import Path

import pdfplumber

from pdfsearch.chunkers.segmenter import page_marker
from pdfsearch.errors import ExtractionError

logger = logging.getLogger(__name__)


class PdfExtractor:
    """Extract page-marked text from PDFs with pdfplumber."""

    source_type = "pdf"

    def can_handle(self, source: Path) -> bool:
        """Check if this is an existing .pdf file."""
        return source.suffix.lower() == ".pdf" and source.is_file()

    def extract(self, source: Path) -> str:
        """Return the text of every page, each preceded by its page marker.

        Args:
            source: Path to the PDF

        Returns:
            Text with a ``<<<PAGE:N>>>`` line (1-based) before each page
        """
        parts: list[str] = []
        try:
            with pdfplumber.open(source) as pdf:
                for page_num, page in enumerate(pdf.pages, start=1):
                    parts.append(page_marker(page_num))
                    parts.append(page.extract_text() or "")
        except Exception as e:
            raise ExtractionError(source, str(e)) from e

        logger.debug(f"Extracted {len(parts) // 2} pages from {source}")
        return "\n".join(parts)
