"""Service-layer functions for the core app.

Services bridge Django settings and the settings-free compiler in
`core.charting` / `analysis`.
"""

from __future__ import annotations

from pathlib import Path

import altair as alt
import pandas as pd
from django.conf import settings

from analysis.dataset import read_dataset
from core.charting.document import build_measure_map_document


def load_configured_dataset(path: str | Path | None = None) -> pd.DataFrame:
    """Read the raw dataset named by `path` or MEASURE_MAP_DATA_PATH.

    Validation happens when the document is compiled.
    """

    return read_dataset(path if path is not None else settings.MEASURE_MAP_DATA_PATH)


def compile_measure_map(
    frame: pd.DataFrame | None = None,
    *,
    path: str | Path | None = None,
) -> alt.VConcatChart:
    """Compile the measure-map document using project settings.

    Args:
        frame: Already loaded joined rows. When omitted the configured dataset
            (or `path`) is loaded.
        path: Optional dataset path overriding MEASURE_MAP_DATA_PATH.

    Returns:
        The assembled document.

    Raises:
        MeasureMapBuildError: When the dataset cannot be read or fails validation.
    """

    if frame is None:
        frame = load_configured_dataset(path)
    return build_measure_map_document(
        frame,
        title=settings.MEASURE_MAP_TITLE,
        level_1_height=settings.MEASURE_MAP_LEVEL_1_HEIGHT,
        width=settings.MEASURE_MAP_WIDTH,
        data_url=settings.MEASURE_MAP_DATA_URL,
    )
