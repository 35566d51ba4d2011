"""Index build pipeline: extract, chunk, index, persist."""

import json
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from pdfsearch.chunkers import PageChunker
from pdfsearch.config import AppConfig
from pdfsearch.errors import ExtractionError, PdfSearchError
from pdfsearch.extractors import get_extractor, needs_ocr, ocr_pdf
from pdfsearch.models import Index, IndexMeta
from pdfsearch.protocols import ChunkingStrategy
from pdfsearch.search import build_index
from pdfsearch.storage import INDEX_FILENAME, IndexStore
from pdfsearch.utils import SourceFingerprint, file_sha256

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexBuildResult:
    """A freshly built index and where it was written."""

    source: str
    index: Index
    paths: tuple[Path, ...]


def source_name(path: Path | str) -> str:
    """Index name of a source document: its file name without extension."""
    return Path(path).stem


def source_index_path(index_dir: Path, source: str) -> Path:
    return index_dir / source / INDEX_FILENAME


def default_index_path(index_dir: Path) -> Path:
    return index_dir / INDEX_FILENAME


def build_index_from_text(
    text: str,
    max_len: int = PageChunker.MAX_CHUNK_SIZE,
    sentence_split: bool = True,
    meta: Optional[IndexMeta] = None,
    chunker: Optional[ChunkingStrategy] = None,
) -> Index:
    """Chunk page-marked text and index the chunks.

    ``chunker`` replaces the default PageChunker built from ``max_len`` and
    ``sentence_split``.
    """
    chunker = chunker or PageChunker(max_len=max_len, sentence_split=sentence_split)
    return build_index(chunker.chunk(text), meta=meta)


def read_source(source: Path, config: AppConfig) -> str:
    """Extract page-marked text, falling back to OCR for scanned PDFs.

    Raises:
        ExtractionError: If no extractor supports the source
        OcrError: If OCR is needed but ocrmypdf fails
    """
    extractor = get_extractor(source)
    if extractor is None:
        raise ExtractionError(source, "unsupported source type (use .pdf or .txt)")

    logger.info(f"Reading {source}...")
    text = extractor.extract(source)
    if extractor.source_type == "pdf" and (config.ocr_force or needs_ocr(text)):
        ocr_output = source.with_name(f"{source_name(source)}.ocr.pdf")
        logger.info("PDF appears non-text or very short; running OCR...")
        ocr_pdf(source, ocr_output, language=config.ocr_language, force=config.ocr_force)
        logger.info("OCR complete. Re-reading OCR'd PDF...")
        text = extractor.extract(ocr_output)
    return text


def index_source(source: Path | str, config: AppConfig) -> IndexBuildResult:
    """Build and persist the index for one source document.

    The index is written to ``<index_dir>/<name>/index.json`` and to the
    default ``<index_dir>/index.json`` used when no source is requested.

    Args:
        source: Path to the document (relative paths resolve against pdf_dir)
        config: Application configuration

    Returns:
        The built index and the paths it was written to
    """
    source_path = Path(source)
    if not source_path.is_absolute():
        source_path = config.pdf_dir / source_path
    if not source_path.is_file():
        raise ExtractionError(source_path, "file not found")

    text = read_source(source_path, config)

    logger.info("Chunking...")
    name = source_name(source_path)
    meta = SourceFingerprint.of(source_path).to_meta(name)
    index = build_index_from_text(text, max_len=config.max_chunk_len, meta=meta)
    logger.info(f"Chunks: {len(index)}")

    paths = (
        source_index_path(config.index_dir, name),
        default_index_path(config.index_dir),
    )
    for path in paths:
        IndexStore(path).save(index)
    logger.info(f"Wrote index to {paths[0]} and {paths[1]}")
    return IndexBuildResult(source=name, index=index, paths=paths)


def index_outdated(source: Path, index_path: Path) -> bool:
    """True if the index is missing, unreadable or built from other bytes."""
    if not index_path.exists():
        return True
    try:
        data = json.loads(index_path.read_text(encoding="utf-8"))
        recorded = (data.get("meta") or {}).get("pdfHash")
        if not recorded:
            return True
        return file_sha256(source) != recorded
    except (OSError, ValueError, AttributeError):
        return True


def find_sources(pdf_dir: Path) -> list[Path]:
    if not pdf_dir.is_dir():
        return []
    return sorted(p for p in pdf_dir.iterdir() if p.suffix.lower() == ".pdf" and p.is_file())


def auto_index_all(config: AppConfig) -> list[IndexBuildResult]:
    """Index every PDF in ``pdf_dir`` whose index is missing or stale."""
    results = []
    for pdf in find_sources(config.pdf_dir):
        if pdf.name.endswith(".ocr.pdf"):
            continue
        if index_outdated(pdf, source_index_path(config.index_dir, source_name(pdf))):
            logger.info(f"Indexing {pdf}...")
            results.append(index_source(pdf, config))
    return results


class DirectoryWatcher:
    """Polls ``pdf_dir`` and re-indexes PDFs that changed.

    A file is indexed once its size and mtime are unchanged across two
    polls, so partially copied files are not picked up. Each new index is
    passed to ``on_indexed``.
    """

    def __init__(
        self,
        config: AppConfig,
        on_indexed: Optional[Callable[[IndexBuildResult], None]] = None,
    ):
        self.config = config
        self.on_indexed = on_indexed
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._seen: dict[Path, tuple[int, float]] = {}
        self._pending: dict[Path, tuple[int, float]] = {}

    def start(self) -> None:
        logger.info(f"Watching {self.config.pdf_dir} for new/changed PDFs...")
        self._seen = self._snapshot()
        self._thread = threading.Thread(target=self._run, name="pdfsearch-watch", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()

    def _snapshot(self) -> dict[Path, tuple[int, float]]:
        snapshot = {}
        for pdf in find_sources(self.config.pdf_dir):
            if pdf.name.endswith(".ocr.pdf"):
                continue
            try:
                stat = pdf.stat()
            except FileNotFoundError:
                continue
            snapshot[pdf] = (stat.st_size, stat.st_mtime)
        return snapshot

    def _run(self) -> None:
        while not self._stop.wait(self.config.watch_interval):
            try:
                self.poll()
            except Exception:
                logger.exception("Auto-index watch error")

    def poll(self) -> list[IndexBuildResult]:
        """Check the directory once; index files that have settled."""
        current = self._snapshot()
        settled = [
            path for path, state in self._pending.items() if current.get(path) == state
        ]
        self._pending = {
            path: state
            for path, state in current.items()
            if self._seen.get(path) != state and path not in settled
        }
        self._seen = current

        results = []
        for pdf in settled:
            index_path = source_index_path(self.config.index_dir, source_name(pdf))
            if not index_outdated(pdf, index_path):
                continue
            logger.info(f"Detected change: indexing {pdf}...")
            try:
                result = index_source(pdf, self.config)
                if self.on_indexed is not None:
                    self.on_indexed(result)
            except (PdfSearchError, OSError):
                logger.exception(f"Auto-index failed for {pdf}")
                # Forget the file so the next polls pick it up again
                self._seen.pop(pdf, None)
                continue
            results.append(result)
        return results
