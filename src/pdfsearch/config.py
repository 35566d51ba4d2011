"""Application configuration: defaults, config.json and environment."""

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveFloat,
    PositiveInt,
    ValidationError,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"


@dataclass(frozen=True)
class AppConfig:
    """Where PDFs and indexes live and how indexing behaves."""

    pdf_dir: Path = Path("data")  # directory containing source PDFs
    index_dir: Path = Path("data/index")  # root for built indexes
    auto_index: bool = True  # build missing/stale indexes on startup
    watch: bool = True  # watch pdf_dir and re-index on change
    ocr_language: str = "eng"
    ocr_force: bool = False
    max_chunk_len: int = 1000
    watch_interval: float = 2.0  # seconds between directory polls


class ConfigFile(BaseModel):
    """Schema of ``config.json``; keys may be camelCase or snake_case."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    pdf_dir: Optional[Path] = Field(default=None, alias="pdfDir")
    index_dir: Optional[Path] = Field(default=None, alias="indexDir")
    auto_index: Optional[bool] = Field(default=None, alias="autoIndex")
    watch: Optional[bool] = None
    ocr_language: Optional[str] = Field(default=None, alias="ocrLanguage")
    ocr_force: Optional[bool] = Field(default=None, alias="ocrForce")
    max_chunk_len: Optional[PositiveInt] = Field(default=None, alias="maxChunkLen")
    watch_interval: Optional[PositiveFloat] = Field(default=None, alias="watchInterval")

    @classmethod
    def known_keys(cls) -> set[str]:
        keys = set(cls.model_fields)
        keys.update(f.alias for f in cls.model_fields.values() if f.alias)
        return keys


class EnvOverrides(BaseSettings):
    """Environment variables that override ``config.json``.

    ``AUTO_INDEX=0`` and ``WATCH_INDEX=0`` disable those features (any other
    value enables them); ``OCR_FORCE=1`` forces OCR.
    """

    model_config = SettingsConfigDict(extra="ignore")

    pdf_dir: Optional[Path] = Field(default=None, alias="PDF_DIR")
    index_dir: Optional[Path] = Field(default=None, alias="INDEX_DIR")
    auto_index: Optional[bool] = Field(default=None, alias="AUTO_INDEX")
    watch: Optional[bool] = Field(default=None, alias="WATCH_INDEX")
    ocr_language: Optional[str] = Field(default=None, alias="OCR_LANG")
    ocr_force: Optional[bool] = Field(default=None, alias="OCR_FORCE")

    @field_validator("auto_index", "watch", mode="before")
    @classmethod
    def _zero_disables(cls, value: Any) -> Any:
        return value != "0" if isinstance(value, str) else value

    @field_validator("ocr_force", mode="before")
    @classmethod
    def _one_enables(cls, value: Any) -> Any:
        return value == "1" if isinstance(value, str) else value


def load_config(cwd: Path | str | None = None) -> AppConfig:
    """Merge defaults, ``config.json`` in ``cwd`` and environment overrides.

    An unreadable or invalid config file is reported and ignored. Relative
    directories are resolved against ``cwd``.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()

    values = _read_config_file(base / CONFIG_FILENAME)
    values.update(_read_environment())
    config = AppConfig(**values)

    return replace(
        config,
        pdf_dir=(base / config.pdf_dir).resolve(),
        index_dir=(base / config.index_dir).resolve(),
    )


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to parse {path}: {e}")
        return {}
    if not isinstance(raw, dict):
        logger.warning(f"Ignoring {path}: expected a JSON object")
        return {}

    unknown = sorted(set(raw) - ConfigFile.known_keys())
    if unknown:
        logger.warning(f"Ignoring unknown config.json keys: {', '.join(unknown)}")

    try:
        settings = ConfigFile.model_validate(raw)
    except ValidationError as e:
        logger.warning(f"Ignoring invalid {path}; using defaults:\n{e}")
        return {}
    return settings.model_dump(exclude_none=True)


def _read_environment() -> dict[str, Any]:
    try:
        overrides = EnvOverrides()
    except ValidationError as e:
        logger.warning(f"Ignoring invalid environment overrides:\n{e}")
        return {}
    return overrides.model_dump(exclude_none=True)
