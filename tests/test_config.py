"""Tests for configuration loading."""

import dataclasses
import json
import logging
from pathlib import Path

import pytest

from pdfsearch.config import AppConfig, load_config

ENV_VARS = ("PDF_DIR", "INDEX_DIR", "AUTO_INDEX", "WATCH_INDEX", "OCR_LANG", "OCR_FORCE")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def defaults_for(cwd: Path) -> AppConfig:
    return AppConfig(
        pdf_dir=(cwd / "data").resolve(),
        index_dir=(cwd / "data" / "index").resolve(),
    )


def write_config(cwd: Path, data) -> None:
    (cwd / "config.json").write_text(json.dumps(data))


def test_defaults_resolve_against_cwd(tmp_path):
    config = load_config(cwd=tmp_path)

    assert config == defaults_for(tmp_path)
    assert config.auto_index is True
    assert config.watch is True
    assert config.ocr_language == "eng"
    assert config.max_chunk_len == 1000


def test_config_file_accepts_camel_case(tmp_path):
    write_config(
        tmp_path,
        {
            "pdfDir": "pdfs",
            "indexDir": "/srv/index",
            "autoIndex": False,
            "watch": False,
            "maxChunkLen": 400,
        },
    )

    config = load_config(cwd=tmp_path)

    assert config.pdf_dir == (tmp_path / "pdfs").resolve()
    assert config.index_dir == Path("/srv/index").resolve()
    assert config.auto_index is False
    assert config.watch is False
    assert config.max_chunk_len == 400


def test_boolean_strings_are_parsed(tmp_path):
    write_config(tmp_path, {"autoIndex": "false", "watch": "no", "ocr_force": "true"})

    config = load_config(cwd=tmp_path)

    assert config.auto_index is False
    assert config.watch is False
    assert config.ocr_force is True


@pytest.mark.parametrize(
    "data",
    [
        {"maxChunkLen": "big"},
        {"maxChunkLen": 0},
        {"watchInterval": -1},
        {"autoIndex": "sometimes"},
        {"pdfDir": "pdfs", "ocrLanguage": ["eng"]},
    ],
)
def test_invalid_values_keep_defaults(tmp_path, caplog, data):
    write_config(tmp_path, data)

    with caplog.at_level(logging.WARNING):
        config = load_config(cwd=tmp_path)

    assert config == defaults_for(tmp_path)
    assert "Ignoring invalid" in caplog.text


def test_environment_overrides_file(tmp_path, monkeypatch):
    write_config(tmp_path, {"pdf_dir": "pdfs", "auto_index": True, "watch": False})
    monkeypatch.setenv("PDF_DIR", "elsewhere")
    monkeypatch.setenv("AUTO_INDEX", "0")
    monkeypatch.setenv("WATCH_INDEX", "yes please")
    monkeypatch.setenv("OCR_LANG", "eng+deu")
    monkeypatch.setenv("OCR_FORCE", "1")

    config = load_config(cwd=tmp_path)

    assert config.pdf_dir == (tmp_path / "elsewhere").resolve()
    assert config.auto_index is False
    assert config.watch is True
    assert config.ocr_language == "eng+deu"
    assert config.ocr_force is True


def test_ocr_force_needs_exactly_one(tmp_path, monkeypatch):
    monkeypatch.setenv("OCR_FORCE", "true")
    assert load_config(cwd=tmp_path).ocr_force is False


def test_bad_config_file_keeps_defaults(tmp_path, caplog):
    (tmp_path / "config.json").write_text("{not json")

    with caplog.at_level(logging.WARNING):
        config = load_config(cwd=tmp_path)

    assert config == defaults_for(tmp_path)
    assert "Failed to parse" in caplog.text


def test_unknown_keys_are_ignored(tmp_path, caplog):
    write_config(tmp_path, {"pdfDir": "pdfs", "embeddings": True})

    with caplog.at_level(logging.WARNING):
        config = load_config(cwd=tmp_path)

    assert config.pdf_dir == (tmp_path / "pdfs").resolve()
    assert "embeddings" in caplog.text
    assert not hasattr(config, "embeddings")


def test_config_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        AppConfig().auto_index = False
