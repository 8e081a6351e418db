"""Unit tests for session logger setup and the provenance header."""

import sys

import pytest
from loguru import logger

from vitae import __version__
from vitae.contexts.rendering.logger import setup_rendering_logger
from vitae.utils.logger import provenance_lines, setup_logger


@pytest.fixture
def restore_loguru():
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.mark.unit
def test_provenance_names_version_and_context():
    lines = provenance_lines("store", {"Database": "data/vitae.db"})
    assert lines["VITAE"] == f"{__version__} (store)"
    assert lines["Database"] == "data/vitae.db"
    assert "Command" in lines


@pytest.mark.unit
def test_provenance_records_tracked_settings(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "anthropic")
    monkeypatch.delenv("VITAE_DB_PATH", raising=False)
    lines = provenance_lines("draft")
    assert lines["LLM_PROVIDER"] == "anthropic"
    assert "VITAE_DB_PATH" not in lines


@pytest.mark.unit
def test_setup_logger_writes_header_to_context_file(tmp_path, restore_loguru):
    log_file = setup_logger("store", tmp_path / "session", {"Database": "x.db"})

    assert log_file == tmp_path / "session" / "store.log"
    content = log_file.read_text()
    assert f"VITAE: {__version__} (store)" in content
    assert "Database: x.db" in content


@pytest.mark.unit
def test_rendering_header_carries_page_geometry(tmp_path, layout_config, restore_loguru):
    log_file = setup_rendering_logger(tmp_path, layout_config, ["ats_dense"])

    content = log_file.read_text()
    assert "Page size: A4 (210 x 297 mm)" in content
    assert "Margin: 15 mm" in content
    assert "Layout presets: ats_dense" in content
