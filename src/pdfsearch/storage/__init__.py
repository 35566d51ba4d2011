"""Persistence for search indexes."""

from pdfsearch.storage.schema import decode_index, encode_index
from pdfsearch.storage.store import INDEX_FILENAME, IndexStore

__all__ = ["INDEX_FILENAME", "IndexStore", "decode_index", "encode_index"]
