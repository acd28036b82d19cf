"""Level chart builder: one layered chart per taxonomy level."""

from __future__ import annotations

from typing import Any

import altair as alt

from .layers import coverage_layer, measure_line_layer, phase_point_layer
from .levels import level_config
from .scales import resolve_level_chart
from .selections import SelectionHandles
from .transforms import propagate_brushes

DEFAULT_WIDTH = 900


def build_level_chart(
    level: int,
    fixed_height: int | None,
    *,
    data: Any,
    selections: SelectionHandles,
    width: int = DEFAULT_WIDTH,
) -> alt.LayerChart:
    """Build the coverage, line and point layers for one level.

    Args:
        level: Taxonomy level (1, 2 or 3).
        fixed_height: Concrete chart height in pixels, or None to size the chart
            from the number of rows.
        data: Prepared DataFrame or an `alt.UrlData` reference.
        selections: Selection handles shared by the whole document.
        width: Chart width in pixels.

    Returns:
        Layered chart with independent colour/shape and shared x/y scales.
    """

    config = level_config(level)
    base = propagate_brushes(alt.Chart(data), config, selections)
    chart = alt.layer(
        coverage_layer(base, config, selections),
        measure_line_layer(base, config, selections),
        phase_point_layer(base, config, selections),
    ).properties(
        width=width,
        height=fixed_height if fixed_height is not None else alt.Step(config.row_step),
        title=f"Level {level}",
    )
    return resolve_level_chart(chart)
