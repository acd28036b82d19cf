"""Layer builders shared by every level chart.

All three layers start from the same base chart (already brush-filtered for
the level) and share the vertical domain axis, so they align row for row.
"""

from __future__ import annotations

import altair as alt

from analysis.schema_contract import (
    MEASURE_ID,
    MEASURE_NAME,
    PHASE,
    SORT_VALUE,
    SOURCE_NAME,
    SOURCE_ORGANISATION,
    STRENGTH,
    UNBRUSHED_FILL,
)

from .levels import LevelConfig
from .scales import count_color_scale, phase_color_scale, phase_shape_scale, strength_opacity_scale
from .selections import SelectionHandles
from .transforms import apply_sort_key, drop_gap_rows, filter_legend, keep_mapped_measures

COVERAGE_STROKE = "black"
COVERAGE_STROKE_WIDTH = 0.5
COVERAGE_STROKE_OPACITY = 0.2

NAME_TITLES = {
    "level_1_name": "Dimension",
    "level_2_name": "Sub-dimension",
    "level_3_name": "Topic",
}


def domain_axis(config: LevelConfig) -> alt.Y:
    """Vertical domain-node encoding, highest sort key on top."""

    return alt.Y(
        f"{config.fields.name}:N",
        sort=alt.EncodingSortField(field=config.fields.sort, op="max", order="descending"),
        title=config.title,
        axis=alt.Axis(labelLimit=240),
    )


def measure_axis() -> alt.X:
    """Horizontal measure encoding ordered by the active sort value."""

    return alt.X(
        f"{MEASURE_ID}:N",
        sort=alt.EncodingSortField(field=SORT_VALUE, op="max", order="descending"),
        title="Measures",
        axis=alt.Axis(labels=False, ticks=False, domain=False),
    )


def coverage_layer(base: alt.Chart, config: LevelConfig, selections: SelectionHandles) -> alt.Chart:
    """One rectangle per domain node, filled by its mapped-measure count.

    The level's own brush (when it has one) is declared on this layer.
    """

    # Level 1 rows are tall enough to need no separators.
    mark: dict[str, object] = {"strokeWidth": 0}
    if config.coverage_stroke:
        mark = {
            "stroke": COVERAGE_STROKE,
            "strokeWidth": COVERAGE_STROKE_WIDTH,
            "strokeOpacity": COVERAGE_STROKE_OPACITY,
        }

    layer = (
        base.mark_rect(**mark)
        .encode(
            y=domain_axis(config),
            color=alt.Color(
                f"valid({MEASURE_ID}):Q",
                scale=count_color_scale(),
                title=config.count_title,
            ),
            tooltip=[
                alt.Tooltip(f"{config.fields.name}:N", title=NAME_TITLES[config.fields.name]),
                alt.Tooltip(f"valid({MEASURE_ID}):Q", title=config.count_title),
            ],
        )
        .properties(name=config.view_name("coverage"))
    )
    brush = selections.brush(config.level) if config.has_brush else None
    if brush is not None:
        layer = layer.add_params(brush)
    return layer


def measure_line_layer(base: alt.Chart, config: LevelConfig, selections: SelectionHandles) -> alt.Chart:
    """One vertical line per measure spanning the rows it maps to."""

    chart = keep_mapped_measures(base)
    chart = apply_sort_key(chart, selections)
    return (
        chart.mark_line(color="gray", strokeWidth=1, opacity=0.6)
        .encode(
            x=measure_axis(),
            y=domain_axis(config),
            detail=f"{MEASURE_ID}:N",
        )
        .properties(name=config.view_name("lines"))
    )


def phase_point_layer(base: alt.Chart, config: LevelConfig, selections: SelectionHandles) -> alt.Chart:
    """One glyph per (domain node, measure) mapping, shaped and coloured by phase.

    The sort-order and legend selections are declared on this layer.
    """

    chart = keep_mapped_measures(base)
    chart = drop_gap_rows(chart, config)
    chart = filter_legend(chart, selections)
    chart = apply_sort_key(chart, selections)

    phase_color = alt.Color(f"{PHASE}:N", scale=phase_color_scale(), title="Phase")
    brush = selections.brush(config.level) if config.has_brush else None
    color: alt.Color | dict = phase_color
    if brush is not None:
        color = alt.condition(brush, phase_color, alt.value(UNBRUSHED_FILL))

    tooltip = [
        alt.Tooltip(f"{SOURCE_ORGANISATION}:N", title="Organisation"),
        alt.Tooltip(f"{SOURCE_NAME}:N", title="Source"),
        alt.Tooltip(f"{MEASURE_NAME}:N", title="Measure"),
        alt.Tooltip(f"{STRENGTH}:Q", title="Strength", format=".2f"),
    ]
    tooltip.extend(alt.Tooltip(f"{name}:N", title=NAME_TITLES[name]) for name in config.tooltip_name_fields)
    tooltip.extend(
        [
            alt.Tooltip(f"{PHASE}:N", title="Phase"),
            alt.Tooltip(f"{MEASURE_ID}:N", title="Measure id"),
        ]
    )

    return (
        chart.mark_point(filled=True, size=config.point_size)
        .encode(
            x=measure_axis(),
            y=domain_axis(config),
            shape=alt.Shape(f"{PHASE}:N", scale=phase_shape_scale(config.glyphs), legend=None),
            color=color,
            opacity=alt.Opacity(f"{STRENGTH}:Q", scale=strength_opacity_scale(), legend=None),
            tooltip=tooltip,
        )
        .properties(name=config.view_name("points"))
        .add_params(selections.sort_order, selections.phase_legend)
    )
