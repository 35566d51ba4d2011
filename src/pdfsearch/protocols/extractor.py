"""Protocol for source document text extractors."""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class TextExtractor(Protocol):
    """Protocol for source document handlers.

    Implementations turn a document into page-marked text.
    Uses structural subtyping - no inheritance required.
    """

    @property
    def source_type(self) -> str:
        """Return identifier for this source type (e.g., 'pdf', 'text')."""
        ...

    def can_handle(self, source: Path) -> bool:
        """Check if this extractor can process the given source."""
        ...

    def extract(self, source: Path) -> str:
        """Return the document text with a ``<<<PAGE:N>>>`` line per page."""
        ...
