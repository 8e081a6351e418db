"""
Unit tests for layout configuration loading and presets.
"""

import pytest

from vitae.contexts.rendering.config import (
    LayoutConfig,
    available_presets,
    load_layout_config,
)


@pytest.fixture(autouse=True)
def no_user_layout(monkeypatch):
    monkeypatch.delenv("VITAE_LAYOUT_CONFIG", raising=False)


@pytest.mark.unit
def test_bundled_defaults_match_dataclass_defaults():
    config = load_layout_config()
    assert config == LayoutConfig()
    assert config.content_width == 180
    assert config.bottom_limit == 277


@pytest.mark.unit
def test_available_presets():
    assert available_presets() == [
        "ats_dense",
        "interests_center",
        "interests_justified",
        "interests_right",
        "page_letter",
    ]


@pytest.mark.unit
def test_presets_apply_in_order():
    config = load_layout_config(presets=["interests_center", "interests_right"])
    assert config.interests.alignment == "right"


@pytest.mark.unit
def test_page_letter_preset():
    config = load_layout_config(presets=["page_letter"])
    assert config.page_size == "letter"
    assert config.page_width == pytest.approx(215.9)
    assert config.bottom_limit == pytest.approx(259.4)
    # Untouched settings keep their defaults
    assert config.ats.chunk_size == 500


@pytest.mark.unit
def test_unknown_preset():
    with pytest.raises(ValueError, match="not found"):
        load_layout_config(presets=["nonexistent"])


@pytest.mark.unit
def test_user_file_overrides_defaults(tmp_path):
    user_file = tmp_path / "layout.yaml"
    user_file.write_text(
        "layout:\n"
        "  margin: 20\n"
        "  colors:\n"
        "    primary: [0, 0, 0]\n"
        "presets:\n"
        "  skills:\n"
        "    wide:\n"
        "      skills:\n"
        "        column_gap: 30\n",
        encoding="utf-8",
    )

    config = load_layout_config(user_file, presets=["skills_wide"])

    assert config.margin == 20
    assert config.colors.primary == (0, 0, 0)
    assert config.colors.accent == (156, 39, 6)
    assert config.skills.column_gap == 30
    assert "skills_wide" in available_presets(user_file)


@pytest.mark.unit
def test_environment_layout_file(tmp_path, monkeypatch):
    user_file = tmp_path / "layout.yaml"
    user_file.write_text("layout:\n  font_family: Helvetica\n", encoding="utf-8")
    monkeypatch.setenv("VITAE_LAYOUT_CONFIG", str(user_file))

    assert load_layout_config().font_family == "Helvetica"


@pytest.mark.unit
def test_invalid_alignment(tmp_path):
    user_file = tmp_path / "layout.yaml"
    user_file.write_text("layout:\n  interests:\n    alignment: diagonal\n", encoding="utf-8")
    with pytest.raises(ValueError, match="alignment"):
        load_layout_config(user_file)
