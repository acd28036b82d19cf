"""Root assembler for the measure-map visualization document.

This is the only place a complete document is produced. The dataset is fully
validated before any chart is built, so a failing build never yields a partial
document.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import altair as alt
import pandas as pd

from analysis.dataset import prepare_dataset, validate_fields
from analysis.errors import MissingFieldError
from analysis.schema_contract import LEVELS, PHASE_BITMAP

from .builder import DEFAULT_WIDTH, build_level_chart
from .scales import resolve_document
from .selections import declare_selections

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Adult social care: publicly available measures by data dimension"
DEFAULT_LEVEL_1_HEIGHT = 300


def build_measure_map_document(
    frame: pd.DataFrame,
    *,
    title: str = DEFAULT_TITLE,
    level_1_height: int = DEFAULT_LEVEL_1_HEIGHT,
    width: int = DEFAULT_WIDTH,
    data_url: str | None = None,
) -> alt.VConcatChart:
    """Compile the joined dataset into the three-level linked document.

    Args:
        frame: Joined rows, raw or already prepared.
        title: Document title.
        level_1_height: Fixed pixel height reserved for the level-1 chart.
        width: Width shared by all three charts.
        data_url: When set, the document loads its rows from this URL instead
            of embedding them. The referenced file must already carry
            `phase_bitmap`.

    Returns:
        Vertically concatenated level charts (level 1 first).

    Raises:
        MeasureMapBuildError: When the dataset fails validation.
    """

    validate_fields(frame.columns)
    if data_url is not None and PHASE_BITMAP not in frame.columns:
        raise MissingFieldError([PHASE_BITMAP])
    prepared = prepare_dataset(frame)

    data: Any = alt.UrlData(url=data_url) if data_url is not None else prepared
    selections = declare_selections()
    charts = [
        build_level_chart(
            level,
            level_1_height if level == 1 else None,
            data=data,
            selections=selections,
            width=width,
        )
        for level in LEVELS
    ]
    document = resolve_document(alt.vconcat(*charts, title=title))
    logger.info("Built measure-map document from %d rows (%s)", len(prepared), data_url or "inline data")
    return document


def document_to_dict(document: alt.VConcatChart) -> dict[str, Any]:
    """Return the validated Vega-Lite dictionary for a document.

    Inline datasets are never truncated.
    """

    with alt.data_transformers.disable_max_rows():
        return document.to_dict()


def render_document_json(document: alt.VConcatChart) -> str:
    """Serialise a document deterministically (sorted keys, fixed indent)."""

    return json.dumps(document_to_dict(document), indent=2, sort_keys=True, ensure_ascii=False)
