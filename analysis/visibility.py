"""Reference evaluation of the measure map's runtime filters.

The compiled document only declares filters; the browser evaluates them. This
module applies the same filters to a pandas frame so the visible row set for a
given selection state can be inspected (and tested) without a renderer.

Semantics mirrored here:

- the sort-order selection keeps exactly one duplicate per source row;
- an unset brush filters nothing, and upstream brushes combine with AND;
- the legend filter hides points whose phase is not selected, and an empty
  legend set hides every point;
- gap rows (zero fixed strength) never reach the point layer at levels 1-2.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd

from .schema_contract import (
    MEASURE_ID,
    PHASE,
    PHASES,
    SORT_KEY,
    SORT_KEYS,
    SORT_VALUE,
    STRENGTH,
    STRENGTH_OPACITY_DOMAIN,
    STRENGTH_OPACITY_RANGE,
    UNBRUSHED_FILL,
    SortKey,
    level_fields,
    upstream_brush_levels,
)


@dataclass(frozen=True, slots=True)
class SelectionState:
    """Current values of the document's three selection bindings.

    Args:
        sort_order: Active horizontal sort key.
        legend: Phases currently selected in the legend.
        brushes: Level-1/level-2 brush extents as sets of domain node names.
            A level absent from the mapping is unset.
    """

    sort_order: SortKey = "strength"
    legend: frozenset[str] = frozenset(PHASES)
    brushes: dict[int, frozenset[str]] = field(default_factory=dict)


INITIAL_STATE = SelectionState()


def fold_sort_keys(frame: pd.DataFrame) -> pd.DataFrame:
    """Duplicate every row once per candidate sort key.

    Each duplicate carries the key name in `sort_key` and that key's numeric
    value in `sort_value`.
    """

    copies = [frame.assign(**{SORT_KEY: key, SORT_VALUE: frame[key]}) for key in SORT_KEYS]
    return pd.concat(copies, ignore_index=True)


def apply_sort_order(frame: pd.DataFrame, state: SelectionState) -> pd.DataFrame:
    """Fold sort keys and keep only the duplicates for the active key."""

    folded = fold_sort_keys(frame)
    return folded[folded[SORT_KEY] == state.sort_order].reset_index(drop=True)


def brush_mask(frame: pd.DataFrame, level: int, state: SelectionState) -> pd.Series:
    """Return rows passing every upstream brush for a chart at `level`."""

    mask = pd.Series(True, index=frame.index)
    for source in upstream_brush_levels(level):
        selected = state.brushes.get(source)
        if selected is None:
            continue
        mask &= frame[level_fields(source).name].isin(selected)
    return mask


def coverage_rows(frame: pd.DataFrame, level: int, state: SelectionState = INITIAL_STATE) -> pd.DataFrame:
    """Return one row per visible domain node with its mapped-measure count.

    The count ignores the legend and sort-order selections.
    """

    fields = level_fields(level)
    visible = frame[brush_mask(frame, level, state)]
    grouped = visible.groupby([fields.name, fields.sort], sort=False, dropna=False)[MEASURE_ID].count()
    rows = grouped.rename("measure_count").reset_index()
    return rows.sort_values(fields.sort, ascending=False, kind="stable").reset_index(drop=True)


def line_rows(frame: pd.DataFrame, level: int, state: SelectionState = INITIAL_STATE) -> pd.DataFrame:
    """Return the rows feeding the measure-extent line layer."""

    visible = frame[brush_mask(frame, level, state) & frame[MEASURE_ID].notna()]
    return apply_sort_order(visible, state)


def point_rows(frame: pd.DataFrame, level: int, state: SelectionState = INITIAL_STATE) -> pd.DataFrame:
    """Return the rows feeding the domain-phase point layer.

    The result carries a `fill` column: the phase when the row lies inside the
    chart's own brush (or the level has none), otherwise the unbrushed grey.
    """

    fields = level_fields(level)
    mask = brush_mask(frame, level, state) & frame[MEASURE_ID].notna()
    if fields.fixed_strength is not None:
        mask &= frame[fields.fixed_strength] != 0
    mask &= frame[PHASE].isin(state.legend)
    visible = apply_sort_order(frame[mask], state)

    own_brush = state.brushes.get(level)
    if own_brush is None:
        fill = visible[PHASE]
    else:
        fill = visible[PHASE].where(visible[fields.name].isin(own_brush), UNBRUSHED_FILL)
    return visible.assign(fill=fill, opacity=visible[STRENGTH].map(strength_opacity))


def measure_order(frame: pd.DataFrame, level: int, state: SelectionState = INITIAL_STATE) -> list[object]:
    """Return visible measure ids in horizontal (left-to-right) order.

    Measures are ordered by the maximum active sort value, descending; ties keep
    first-seen order.
    """

    rows = line_rows(frame, level, state)
    ranked = rows.groupby(MEASURE_ID, sort=False)[SORT_VALUE].max()
    return ranked.sort_values(ascending=False, kind="stable").index.tolist()


def strength_opacity(strength: float) -> float:
    """Map a strength score onto point opacity, clamped to the opacity range."""

    low, high = STRENGTH_OPACITY_DOMAIN
    out_low, out_high = STRENGTH_OPACITY_RANGE
    if pd.isna(strength):
        return out_low
    ratio = (float(strength) - low) / (high - low)
    ratio = min(max(ratio, 0.0), 1.0)
    return out_low + ratio * (out_high - out_low)
