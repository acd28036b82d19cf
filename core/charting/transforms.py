"""Filter and derivation chain applied by the measure-map layers.

Each helper takes a chart and returns it with transforms appended, so a layer
reads as a pipeline:

    chart = propagate_brushes(chart, config, selections)
    chart = keep_mapped_measures(chart)
    chart = drop_gap_rows(chart, config)
    chart = filter_legend(chart, selections)
    chart = apply_sort_key(chart, selections)
"""

from __future__ import annotations

import altair as alt

from analysis.schema_contract import MEASURE_ID, SORT_KEY, SORT_KEYS, SORT_VALUE

from .levels import LevelConfig
from .selections import SelectionHandles


def propagate_brushes(chart: alt.Chart, config: LevelConfig, selections: SelectionHandles) -> alt.Chart:
    """AND together every upstream brush; an unset brush keeps every row."""

    for brush in selections.upstream(config.upstream_brushes):
        chart = chart.transform_filter(brush, empty=True)
    return chart


def keep_mapped_measures(chart: alt.Chart) -> alt.Chart:
    """Drop rows whose domain node has no mapped measure."""

    return chart.transform_filter(alt.expr.isValid(alt.datum[MEASURE_ID]))


def drop_gap_rows(chart: alt.Chart, config: LevelConfig) -> alt.Chart:
    """Exclude synthetic zero-strength gap rows at levels that have them."""

    field = config.fields.fixed_strength
    if field is None:
        return chart
    return chart.transform_filter(alt.datum[field] != 0)


def filter_legend(chart: alt.Chart, selections: SelectionHandles) -> alt.Chart:
    """Keep rows whose phase is selected in the legend; an empty set keeps none."""

    return chart.transform_filter(selections.phase_legend, empty=False)


def apply_sort_key(chart: alt.Chart, selections: SelectionHandles) -> alt.Chart:
    """Duplicate each row per sort key, then keep the active key's duplicate."""

    return chart.transform_fold(list(SORT_KEYS), as_=[SORT_KEY, SORT_VALUE]).transform_filter(
        selections.sort_order,
        empty=False,
    )
