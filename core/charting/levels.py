"""Per-level configuration for the measure-map charts.

Every difference between the three taxonomy levels lives in one `LevelConfig`
record, looked up once per chart. Layer builders read from the record instead
of branching on the level number.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from analysis.schema_contract import BRUSH_LEVELS, LEVELS, LevelFields, level_fields, upstream_brush_levels

# Glyph paths live in the unit square [-1, 1]; y grows downwards. Each glyph is
# a full-width bar occupying a slice of the row so phases never overlap.
QUARTER_GLYPHS: Final[dict[str, str]] = {
    "demand": "M-1,-1H1V-0.5H-1Z",
    "supply": "M-1,-0.5H1V0H-1Z",
    "operate": "M-1,0H1V0.5H-1Z",
    "outcome": "M-1,0.5H1V1H-1Z",
}

# At level 2 no node mixes all four phases, so two halves are enough.
HALF_GLYPHS: Final[dict[str, str]] = {
    "demand": "M-1,-1H1V0H-1Z",
    "supply": "M-1,-1H1V0H-1Z",
    "operate": "M-1,0H1V1H-1Z",
    "outcome": "M-1,0H1V1H-1Z",
}

# Each level-3 row holds a single phase.
CENTERED_GLYPHS: Final[dict[str, str]] = {
    "demand": "M-1,-0.5H1V0.5H-1Z",
    "supply": "M-1,-0.5H1V0.5H-1Z",
    "operate": "M-1,-0.5H1V0.5H-1Z",
    "outcome": "M-1,-0.5H1V0.5H-1Z",
}

COUNT_TITLE: Final[str] = "Measures mapped"
OVERLAP_COUNT_TITLE: Final[str] = "Measures mapped (same-phase measures may overlap)"


@dataclass(frozen=True, slots=True)
class LevelConfig:
    """Everything a layer builder needs to know about one level.

    Args:
        fields: Field names bound to the level.
        title: Vertical axis title.
        glyphs: Phase to SVG path used by the point layer.
        point_size: Point mark area in square pixels.
        row_step: Row height when the chart sizes itself.
        coverage_stroke: Whether coverage rectangles get a separating stroke.
        count_title: Tooltip title for the mapped-measure count.
        tooltip_name_fields: Domain name fields shown in point tooltips.
        upstream_brushes: Levels whose brushes filter this chart.
        has_brush: Whether this chart declares its own brush.
    """

    fields: LevelFields
    title: str
    glyphs: dict[str, str]
    point_size: int
    row_step: int
    coverage_stroke: bool
    count_title: str
    tooltip_name_fields: tuple[str, ...]
    upstream_brushes: tuple[int, ...]
    has_brush: bool

    @property
    def level(self) -> int:
        """Taxonomy level number."""

        return self.fields.level

    def view_name(self, layer: str) -> str:
        """Return the stable Vega-Lite view name for one layer of this chart."""

        return f"level_{self.level}_{layer}"


def _build(level: int, *, title: str, glyphs: dict[str, str], point_size: int, row_step: int) -> LevelConfig:
    return LevelConfig(
        fields=level_fields(level),
        title=title,
        glyphs=glyphs,
        point_size=point_size,
        row_step=row_step,
        coverage_stroke=level != 1,
        count_title=OVERLAP_COUNT_TITLE if level in (1, 2) else COUNT_TITLE,
        tooltip_name_fields=tuple(level_fields(upper).name for upper in LEVELS if upper <= level),
        upstream_brushes=upstream_brush_levels(level),
        has_brush=level in BRUSH_LEVELS,
    )


LEVEL_CONFIGS: Final[dict[int, LevelConfig]] = {
    1: _build(1, title="Dimension", glyphs=QUARTER_GLYPHS, point_size=120, row_step=48),
    2: _build(2, title="Sub-dimension", glyphs=HALF_GLYPHS, point_size=60, row_step=16),
    3: _build(3, title="Topic", glyphs=CENTERED_GLYPHS, point_size=30, row_step=11),
}


def level_config(level: int) -> LevelConfig:
    """Return the LevelConfig for a taxonomy level.

    Raises:
        ValueError: When `level` is not 1, 2 or 3.
    """

    try:
        return LEVEL_CONFIGS[level]
    except KeyError:
        raise ValueError(f"Unsupported taxonomy level: {level!r} (expected one of {LEVELS}).") from None
