"""JSON layout of persisted index files.

{
  "chunks":   [{"id": 0, "text": "...", "page": 3}, ...],   -- ascending id
  "inverted": {"token": [0, 4, 9], ...},                    -- chunk ids
  "meta":     {"source": "AGLC4", "createdAt": 1700000000000,
               "pdfSize": 123, "pdfMtime": 1700000000000.0,
               "pdfHash": "<sha256 hex>"}                    -- optional
}
"""

from typing import Any, Optional

from pdfsearch.models import Chunk, Index, IndexMeta

# Python attribute -> JSON key
META_FIELDS = {
    "source": "source",
    "created_at": "createdAt",
    "pdf_size": "pdfSize",
    "pdf_mtime": "pdfMtime",
    "pdf_hash": "pdfHash",
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_META_CHECKS = {
    "source": lambda v: isinstance(v, str),
    "created_at": _is_int,
    "pdf_size": _is_int,
    "pdf_mtime": lambda v: _is_int(v) or isinstance(v, float),
    "pdf_hash": lambda v: isinstance(v, str),
}


def encode_index(index: Index) -> dict[str, Any]:
    """Convert an Index to its JSON-ready form."""
    chunks = []
    for chunk in index.chunks:
        item: dict[str, Any] = {"id": chunk.id, "text": chunk.text}
        if chunk.page is not None:
            item["page"] = chunk.page
        chunks.append(item)

    data: dict[str, Any] = {
        "chunks": chunks,
        "inverted": {token: list(ids) for token, ids in index.inverted.items()},
    }
    if index.meta is not None:
        data["meta"] = {
            key: getattr(index.meta, attr)
            for attr, key in META_FIELDS.items()
            if getattr(index.meta, attr) is not None
        }
    return data


def decode_index(data: Any) -> Index:
    """Build an Index from its JSON form, checking its invariants.

    Raises:
        ValueError: If the data does not describe a consistent index
    """
    if not isinstance(data, dict):
        raise ValueError("index must be a JSON object")

    raw_chunks = data.get("chunks", [])
    raw_inverted = data.get("inverted", {})
    if not isinstance(raw_chunks, list):
        raise ValueError("'chunks' must be an array")
    if not isinstance(raw_inverted, dict):
        raise ValueError("'inverted' must be an object")

    chunks = []
    for position, item in enumerate(raw_chunks):
        if not isinstance(item, dict) or not isinstance(item.get("text"), str):
            raise ValueError(f"chunk {position} is not an object with a 'text' string")
        if not _is_int(item.get("id")) or item["id"] != position:
            raise ValueError(f"chunk {position} has id {item.get('id')!r}")
        page = item.get("page")
        if page is not None and not _is_int(page):
            raise ValueError(f"chunk {position} has a non-integer page")
        chunks.append(Chunk(id=position, text=item["text"], page=page))

    inverted: dict[str, tuple[int, ...]] = {}
    for token, ids in raw_inverted.items():
        if not isinstance(ids, list) or not all(
            _is_int(i) and 0 <= i < len(chunks) for i in ids
        ):
            raise ValueError(f"postings for {token!r} reference unknown chunks")
        inverted[token] = tuple(ids)

    return Index(chunks=tuple(chunks), inverted=inverted, meta=_decode_meta(data.get("meta")))


def _decode_meta(raw: Any) -> Optional[IndexMeta]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValueError("'meta' must be an object")

    values = {}
    for attr, key in META_FIELDS.items():
        value = raw.get(key)
        if value is not None and not _META_CHECKS[attr](value):
            raise ValueError(f"meta.{key} has the wrong type: {value!r}")
        values[attr] = value
    return IndexMeta(**values)
