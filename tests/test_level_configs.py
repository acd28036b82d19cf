"""Tests for the per-level chart configuration."""

from __future__ import annotations

import altair as alt
import pytest

from core.charting.layers import coverage_layer, phase_point_layer
from core.charting.levels import CENTERED_GLYPHS, HALF_GLYPHS, QUARTER_GLYPHS, level_config
from core.charting.selections import declare_selections

pytestmark = pytest.mark.unit


def test_only_levels_with_a_downstream_chart_own_a_brush() -> None:
    """Levels 1 and 2 brush the charts below them; level 3 is terminal."""

    assert [level_config(level).has_brush for level in (1, 2, 3)] == [True, True, False]
    assert level_config(3).upstream_brushes == (2, 1)


def test_level_3_layers_declare_no_brush_even_when_one_is_available() -> None:
    """A brush handle for level 3 is ignored because the level owns none."""

    selections = declare_selections()
    selections.brushes[3] = alt.selection_interval(name="brush_level_3", encodings=["y"])
    config = level_config(3)
    base = alt.Chart(alt.UrlData(url="data/measure_map.csv"))

    coverage = coverage_layer(base, config, selections).to_dict()
    points = phase_point_layer(base, config, selections).to_dict()

    assert "brush_level_3" not in {param["name"] for param in coverage.get("params", [])}
    assert "condition" not in points["encoding"]["color"]


def test_level_configs_pick_glyphs_and_row_steps() -> None:
    """Glyph sets and row heights shrink as the taxonomy deepens."""

    assert [level_config(level).glyphs for level in (1, 2, 3)] == [QUARTER_GLYPHS, HALF_GLYPHS, CENTERED_GLYPHS]
    assert [level_config(level).row_step for level in (1, 2, 3)] == [48, 16, 11]
    assert level_config(2).view_name("points") == "level_2_points"


def test_level_config_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unsupported taxonomy level"):
        level_config(0)
