"""
Layout Configuration for PDF Export

Loads layout.yaml with OmegaConf and applies named presets. Presets are
composable and can override each other.

Examples:
    # Defaults
    >>> config = load_layout_config()

    # Apply multiple presets (later overrides earlier)
    >>> config = load_layout_config(presets=["page_letter", "interests_justified"])
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf

load_dotenv()

DEFAULT_LAYOUT_PATH = Path(__file__).parent / "layout.yaml"

ALIGNMENTS = ("left", "center", "right", "justified")

RGB = Tuple[int, int, int]


@dataclass
class Palette:
    primary: RGB = (31, 73, 125)
    secondary: RGB = (79, 98, 114)
    accent: RGB = (156, 39, 6)
    text: RGB = (33, 37, 41)
    light_gray: RGB = (108, 117, 125)
    black: RGB = (0, 0, 0)
    bullet: RGB = (51, 51, 51)
    link_background: RGB = (248, 249, 250)


@dataclass
class SkillsLayout:
    font_size: float = 10
    line_height: float = 4.5
    indent: float = 6
    spacing_after: float = 4
    bullet: str = "• "
    column_gap: float = 20
    min_for_columns: int = 4


@dataclass
class LanguagesLayout:
    font_size: float = 10
    line_height: float = 4
    indent: float = 6
    spacing_after: float = 3
    bullet_radius: float = 0.8
    column_gap: float = 20
    min_for_columns: int = 4
    columns: int = 3


@dataclass
class InterestsLayout:
    font_size: float = 10
    line_height: float = 4
    indent: float = 6
    spacing_after: float = 5
    alignment: str = "left"
    separator: str = " • "
    decoration_width: float = 30


@dataclass
class CoursesLayout:
    font_size: float = 8.5
    line_height: float = 4
    indent: float = 8
    column_gap: float = 20


@dataclass
class AtsLayout:
    """Placement of the hidden job-description text on page one."""

    font_size: float = 0.1
    chunk_size: int = 500
    columns: int = 3
    column_offset: float = 50
    top_offset: float = 5
    row_step: float = 2
    color: RGB = (255, 255, 255)


@dataclass
class LayoutConfig:
    """
    Page geometry, palette and per-section settings for one export.

    All lengths are millimetres; font sizes are points.
    """

    page_size: str = "A4"
    page_width: float = 210
    page_height: float = 297
    margin: float = 15
    bottom_reserve: float = 20
    font_family: str = "Times"
    debug: bool = False
    colors: Palette = field(default_factory=Palette)
    skills: SkillsLayout = field(default_factory=SkillsLayout)
    languages: LanguagesLayout = field(default_factory=LanguagesLayout)
    interests: InterestsLayout = field(default_factory=InterestsLayout)
    courses: CoursesLayout = field(default_factory=CoursesLayout)
    ats: AtsLayout = field(default_factory=AtsLayout)

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def bottom_limit(self) -> float:
        """Lowest y a line may reach before a page break."""
        return self.page_height - self.bottom_reserve

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutConfig":
        """Build from the `layout` mapping of layout.yaml."""
        page = data.get("page", {})
        interests = _section(InterestsLayout, data.get("interests"))
        if interests.alignment not in ALIGNMENTS:
            raise ValueError(
                f"Unknown interests alignment '{interests.alignment}'. Use one of {ALIGNMENTS}"
            )

        return cls(
            page_size=page.get("size", "A4"),
            page_width=page.get("width", 210),
            page_height=page.get("height", 297),
            margin=data.get("margin", 15),
            bottom_reserve=data.get("bottom_reserve", 20),
            font_family=data.get("font_family", "Times"),
            debug=bool(data.get("debug", False)),
            colors=_section(Palette, data.get("colors")),
            skills=_section(SkillsLayout, data.get("skills")),
            languages=_section(LanguagesLayout, data.get("languages")),
            interests=interests,
            courses=_section(CoursesLayout, data.get("courses")),
            ats=_section(AtsLayout, data.get("ats")),
        )


def _section(cls, data: Optional[Dict[str, Any]]):
    """Instantiate a settings dataclass from a mapping, ignoring unknown keys."""
    data = data or {}
    known = {f.name for f in fields(cls)}
    values = {}
    for key, value in data.items():
        if key not in known:
            continue
        # YAML lists -> RGB tuples
        values[key] = tuple(value) if isinstance(value, list) else value
    return cls(**values)


def flatten_presets(presets: Optional[DictConfig]) -> Dict[str, DictConfig]:
    """
    Collapse nested presets to a single-level dict.

    Collapses nested structure: interests.justified -> interests_justified
    """
    flattened = {}
    if presets is None:
        return flattened
    for category, group in presets.items():
        for name, config in group.items():
            flattened[f"{category}_{name}"] = config
    return flattened


def load_layout_config(
    config_path: Optional[Path] = None,
    presets: Iterable[str] = (),
) -> LayoutConfig:
    """
    Load layout settings and apply named presets.

    The bundled layout.yaml is always the base. A user file (config_path, or
    $VITAE_LAYOUT_CONFIG when not given) is merged on top and may define
    further presets.

    Args:
        config_path: Optional YAML override file
        presets: Preset names to apply in order (e.g., ["page_letter", "ats_dense"])

    Returns:
        LayoutConfig

    Raises:
        ValueError: If a preset is not found or a setting is invalid
    """
    base = OmegaConf.load(DEFAULT_LAYOUT_PATH)

    if config_path is None and os.getenv("VITAE_LAYOUT_CONFIG"):
        config_path = Path(os.getenv("VITAE_LAYOUT_CONFIG"))
    if config_path is not None:
        base = OmegaConf.merge(base, OmegaConf.load(config_path))

    layout = base.layout
    available = flatten_presets(base.get("presets"))

    for preset_name in presets:
        if preset_name not in available:
            raise ValueError(
                f"Preset '{preset_name}' not found. Available presets: {sorted(available)}"
            )
        # Later presets override earlier ones
        layout = OmegaConf.merge(layout, available[preset_name])

    return LayoutConfig.from_dict(OmegaConf.to_container(layout, resolve=True))


def available_presets(config_path: Optional[Path] = None) -> list[str]:
    base = OmegaConf.load(DEFAULT_LAYOUT_PATH)
    if config_path is not None:
        base = OmegaConf.merge(base, OmegaConf.load(config_path))
    return sorted(flatten_presets(base.get("presets")))
