"""Source file fingerprints used to detect stale indexes."""

import hashlib
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pdfsearch.models import Index, IndexMeta


def file_sha256(path: Path | str, block_size: int = 1 << 20) -> str:
    """Hex SHA-256 digest of a file's bytes."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for block in iter(lambda: f.read(block_size), b""):
            digest.update(block)
    return digest.hexdigest()


@dataclass(frozen=True)
class SourceFingerprint:
    """Size, modification time and content hash of a source document."""

    size: int
    mtime_ms: float
    sha256: str

    @classmethod
    def of(cls, path: Path | str) -> "SourceFingerprint":
        stat = Path(path).stat()
        return cls(size=stat.st_size, mtime_ms=stat.st_mtime * 1000, sha256=file_sha256(path))

    def to_meta(self, source: str, created_at: Optional[int] = None) -> IndexMeta:
        """Index metadata recording this fingerprint."""
        return IndexMeta(
            source=source,
            created_at=created_at if created_at is not None else int(time.time() * 1000),
            pdf_size=self.size,
            pdf_mtime=self.mtime_ms,
            pdf_hash=self.sha256,
        )


def is_fresh(index: Index, source: Path | str) -> Optional[bool]:
    """Whether ``index`` was built from the current bytes of ``source``.

    Returns None when freshness cannot be decided: the index records no hash
    or the source file is gone.
    """
    if index.meta is None or not index.meta.pdf_hash:
        return None
    try:
        return file_sha256(source) == index.meta.pdf_hash
    except FileNotFoundError:
        return None
