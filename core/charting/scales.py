"""Scale definitions and resolution rules for measure-map charts."""

from __future__ import annotations

from typing import Final, TypeVar

import altair as alt

from analysis.schema_contract import PHASES, STRENGTH_OPACITY_DOMAIN, STRENGTH_OPACITY_RANGE

PHASE_COLORS: Final[dict[str, str]] = {
    "demand": "red",
    "supply": "orange",
    "operate": "blue",
    "outcome": "green",
}

COUNT_SCHEME: Final[str] = "blues"

_ChartT = TypeVar("_ChartT", alt.LayerChart, alt.VConcatChart)


def phase_color_scale() -> alt.Scale:
    """Fixed categorical phase palette."""

    return alt.Scale(domain=list(PHASES), range=[PHASE_COLORS[phase] for phase in PHASES])


def count_color_scale() -> alt.Scale:
    """Light-to-dark ramp, reversed so that fewer mappings render darker."""

    return alt.Scale(scheme=COUNT_SCHEME, reverse=True)


def strength_opacity_scale() -> alt.Scale:
    """Linear strength-to-opacity scale replacing the default [0.3, 0.8] range."""

    return alt.Scale(
        type="linear",
        domain=list(STRENGTH_OPACITY_DOMAIN),
        range=list(STRENGTH_OPACITY_RANGE),
        clamp=True,
    )


def phase_shape_scale(glyphs: dict[str, str]) -> alt.Scale:
    """Map each phase onto its sub-row glyph path."""

    return alt.Scale(domain=list(PHASES), range=[glyphs[phase] for phase in PHASES])


def resolve_level_chart(chart: alt.LayerChart) -> alt.LayerChart:
    """Colour and shape stay local to each layer; positions align across layers."""

    return chart.resolve_scale(color="independent", shape="independent", x="shared", y="shared")


def resolve_document(document: _ChartT) -> _ChartT:
    """Each level's colour legend is computed from its own rows."""

    return document.resolve_scale(color="independent")
