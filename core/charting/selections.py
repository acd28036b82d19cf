"""Selection declarations shared by every chart in a measure-map document.

Selections are created once per document and handed to the layer builders as
explicit handles. Names are level-qualified so two charts never share a brush
by accident.
"""

from __future__ import annotations

from dataclasses import dataclass

import altair as alt

from analysis.schema_contract import BRUSH_LEVELS, DEFAULT_SORT_KEY, PHASE, PHASES, SORT_KEY, SORT_KEYS

SORT_ORDER_NAME = "sort_order"
PHASE_LEGEND_NAME = "phase_legend"
SORT_KEY_LABELS = {"strength": "Strength", "phase_bitmap": "Phase"}


def brush_name(level: int) -> str:
    """Return the selection name of the brush drawn on a level's chart."""

    return f"brush_level_{level}"


@dataclass(frozen=True, slots=True)
class SelectionHandles:
    """The three selection primitives of a document.

    Args:
        sort_order: Single-valued selection over `sort_key` (radio bound).
        phase_legend: Multi-valued selection over `phase` (legend bound).
        brushes: Interval selection per brushable level.
    """

    sort_order: alt.Parameter
    phase_legend: alt.Parameter
    brushes: dict[int, alt.Parameter]

    def brush(self, level: int) -> alt.Parameter | None:
        """Return the brush declared on `level`'s chart, if any."""

        return self.brushes.get(level)

    def upstream(self, levels: tuple[int, ...]) -> tuple[alt.Parameter, ...]:
        """Return the brushes for `levels`, skipping levels without one."""

        return tuple(self.brushes[level] for level in levels if level in self.brushes)


def declare_selections() -> SelectionHandles:
    """Declare the document's selections in their initial state.

    - sort order: `strength`;
    - legend: all four phases selected;
    - brushes: unset (no filtering).
    """

    sort_order = alt.selection_point(
        name=SORT_ORDER_NAME,
        fields=[SORT_KEY],
        value=[{SORT_KEY: DEFAULT_SORT_KEY}],
        bind=alt.binding_radio(
            options=list(SORT_KEYS),
            labels=[SORT_KEY_LABELS[key] for key in SORT_KEYS],
            name="Sort measures by ",
        ),
        clear=False,
    )
    phase_legend = alt.selection_point(
        name=PHASE_LEGEND_NAME,
        fields=[PHASE],
        value=[{PHASE: phase} for phase in PHASES],
        bind="legend",
        toggle="true",
    )
    brushes = {level: alt.selection_interval(name=brush_name(level), encodings=["y"]) for level in BRUSH_LEVELS}
    return SelectionHandles(sort_order=sort_order, phase_legend=phase_legend, brushes=brushes)
