"""Exceptions raised by pdfsearch."""

from pathlib import Path


class PdfSearchError(RuntimeError):
    """Base class for pdfsearch failures."""


class IndexLoadError(PdfSearchError):
    """Raised when a persisted index exists but cannot be read."""

    def __init__(self, path: Path | str, reason: str):
        super().__init__(f"Failed to load index {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


class ExtractionError(PdfSearchError):
    """Raised when text cannot be extracted from a source document."""

    def __init__(self, path: Path | str, reason: str):
        super().__init__(f"Failed to extract text from {path}: {reason}")
        self.path = Path(path)
        self.reason = reason


class OcrError(PdfSearchError):
    """Raised when the external OCR tool is missing or fails."""
