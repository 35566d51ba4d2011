"""Shared fixtures for pdfsearch tests."""

from pathlib import Path
from typing import Optional, Sequence

import pytest

from pdfsearch.config import AppConfig
from pdfsearch.models import Chunk, Index
from pdfsearch.search import build_index

LAW_REPORT_TEXT = "\n".join(
    [
        "<<<PAGE:5>>>",
        "2.2.2 Law Report Series",
        "Rule",
        "",
        "The authorised version of the report should always be used where available.",
        "",
        "Examples",
        "CLR, FCR, VR, NSWLR",
    ]
)


def make_index(texts: Sequence[str], pages: Optional[Sequence[Optional[int]]] = None) -> Index:
    """Index over one chunk per text, ids in order."""
    pages = pages if pages is not None else [None] * len(texts)
    chunks = [Chunk(id=i, text=t, page=p) for i, (t, p) in enumerate(zip(texts, pages))]
    return build_index(chunks)


@pytest.fixture
def config(tmp_path: Path) -> AppConfig:
    pdf_dir = tmp_path / "pdfs"
    index_dir = tmp_path / "index"
    pdf_dir.mkdir()
    return AppConfig(pdf_dir=pdf_dir, index_dir=index_dir, auto_index=False, watch=False)


def make_pdf(pages: Sequence[str]) -> bytes:
    """A minimal PDF with one line of Helvetica text per page."""
    kids = " ".join(f"{4 + 2 * i} 0 R" for i in range(len(pages)))
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {len(pages)} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for i, text in enumerate(pages):
        content = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode()
        objects.append(
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Resources << /Font << /F1 3 0 R >> >> /Contents {5 + 2 * i} 0 R >>".encode()
        )
        objects.append(b"<< /Length %d >>\nstream\n%s\nendstream" % (len(content), content))

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n%s\nendobj\n" % (number, body)
    xref = len(out)
    out += b"xref\n0 %d\n0000000000 65535 f \n" % (len(objects) + 1)
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref)
    return bytes(out)
