"""JSON file storage for search indexes."""

import json
import logging
import os
import tempfile
from pathlib import Path

from pdfsearch.errors import IndexLoadError
from pdfsearch.models import Index
from pdfsearch.storage.schema import decode_index, encode_index

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.json"


class IndexStore:
    """Reads and writes one index file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def load(self) -> Index:
        """Load the index, or an empty one if the file does not exist.

        Raises:
            IndexLoadError: If the file exists but is not a valid index
        """
        if not self.exists():
            logger.warning(
                f"Search index not found at {self.path}. "
                "Run `pdfsearch index` to build it."
            )
            return Index.empty()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise IndexLoadError(self.path, str(e)) from e

        try:
            return decode_index(data)
        except ValueError as e:
            raise IndexLoadError(self.path, str(e)) from e

    def save(self, index: Index) -> None:
        """Write the index atomically: readers see the old file or the new one."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=".index-", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(encode_index(index), f, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
