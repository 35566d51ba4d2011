"""OCR fallback through the external ``ocrmypdf`` tool."""

import logging
import subprocess
import sys
from pathlib import Path

from pdfsearch.errors import OcrError

logger = logging.getLogger(__name__)

# Extracted text shorter than this is treated as a scanned document
MIN_TEXT_LENGTH = 1000


def needs_ocr(text: str) -> bool:
    """Whether extraction yielded too little text to be useful."""
    return len(text.strip()) < MIN_TEXT_LENGTH


def _install_hint() -> str:
    if sys.platform == "darwin":
        return "Install with: brew install ocrmypdf tesseract"
    return "Install with: apt-get install -y ocrmypdf tesseract-ocr (Debian/Ubuntu)"


def ocr_pdf(source: Path, output: Path, language: str = "eng", force: bool = False) -> Path:
    """Write an OCR'd copy of ``source`` to ``output``.

    Pages that already carry text are skipped unless ``force`` is set.

    Raises:
        OcrError: If ocrmypdf is not installed or fails
    """
    cmd = [
        "ocrmypdf",
        "--force-ocr" if force else "--skip-text",
        "--language",
        language,
        str(source),
        str(output),
    ]
    logger.debug(f"Running OCR command: {' '.join(cmd)}")
    try:
        result = subprocess.run(cmd, check=False, capture_output=True)
    except FileNotFoundError as e:
        raise OcrError(f"ocrmypdf is not installed. {_install_hint()}.") from e

    if result.returncode != 0:
        raise OcrError(
            f"ocrmypdf exited with code {result.returncode} for {source}. "
            f"{_install_hint()}.\n{result.stderr.decode(errors='ignore')}"
        )
    return output
