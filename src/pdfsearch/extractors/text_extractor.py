"""Extractor for plain text files."""

from pathlib import Path

from pdfsearch.errors import ExtractionError


class PlainTextExtractor:
    """Reads UTF-8 text files, which may already carry page markers."""

    source_type = "text"
    EXTENSIONS = {".txt", ".md"}

    def can_handle(self, source: Path) -> bool:
        """Check if this is an existing text file."""
        return source.suffix.lower() in self.EXTENSIONS and source.is_file()

    def extract(self, source: Path) -> str:
        try:
            return source.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise ExtractionError(source, str(e)) from e
