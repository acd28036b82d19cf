"""Load, validate and prepare the joined measure-map dataset.

The dataset is a frozen snapshot produced by the upstream join. This module
never mutates its input frame; every helper returns a new frame or a summary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from .errors import MissingDatasetError, MissingFieldError, StrengthQualityError, UnknownPhaseError
from .schema_contract import (
    FIXED_STRENGTH_LEVELS,
    LEVELS,
    MEASURE_ID,
    PHASE,
    PHASE_BITMAP,
    PHASE_BITS,
    PHASES,
    REQUIRED_FIELDS,
    STRENGTH,
    level_fields,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DatasetSummary:
    """Counts describing a prepared dataset.

    Args:
        rows: Total number of joined rows.
        nodes_per_level: Distinct domain node count keyed by level.
        gap_nodes: Level-3 domain nodes with no mapped measure.
        measures: Distinct mapped measures.
    """

    rows: int
    nodes_per_level: dict[int, int]
    gap_nodes: int
    measures: int


def read_dataset(path: str | Path) -> pd.DataFrame:
    """Read the joined CSV file as-is.

    Raises:
        MissingDatasetError: When the file cannot be read.
    """

    try:
        frame = pd.read_csv(path)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise MissingDatasetError(path=str(path), reason=str(exc)) from exc
    logger.info("Loaded %d joined rows from %s", len(frame), path)
    return frame


def load_dataset(path: str | Path) -> pd.DataFrame:
    """Read the joined CSV file and return a validated, prepared frame.

    Raises:
        MissingDatasetError: When the file cannot be read.
        MeasureMapBuildError: When the contents fail validation.
    """

    return prepare_dataset(read_dataset(path))


def prepare_dataset(frame: pd.DataFrame) -> pd.DataFrame:
    """Validate a joined frame and add derived sort fields.

    Args:
        frame: Raw joined rows.

    Returns:
        A copy of `frame` with a `phase_bitmap` column. An upstream
        `phase_bitmap` column is kept as-is.
    """

    validate_dataset(frame)
    prepared = frame.copy()
    if PHASE_BITMAP not in prepared.columns:
        prepared[PHASE_BITMAP] = derive_phase_bitmap(prepared)
    return prepared


def validate_dataset(frame: pd.DataFrame) -> None:
    """Fail fast when a frame cannot be compiled into a measure map.

    Checks run in order: required fields, phase vocabulary, then strength of
    genuine mappings.

    Raises:
        MissingFieldError: When required fields are absent.
        UnknownPhaseError: When a phase is null or outside the vocabulary.
        StrengthQualityError: When a mapped measure has null/zero strength.
    """

    validate_fields(frame.columns)

    phases = frame[PHASE]
    unknown_mask = ~phases.isin(PHASES)
    if unknown_mask.any():
        offending = {None if pd.isna(value) else value for value in phases[unknown_mask]}
        raise UnknownPhaseError(sorted(offending, key=lambda value: "" if value is None else str(value)))

    genuine = frame[MEASURE_ID].notna()
    strength = pd.to_numeric(frame[STRENGTH], errors="coerce")
    weak = genuine & (strength.isna() | (strength <= 0))
    if weak.any():
        raise StrengthQualityError(field=STRENGTH, measure_ids=_distinct(frame.loc[weak, MEASURE_ID]))

    for level in FIXED_STRENGTH_LEVELS:
        fixed_field = level_fields(level).fixed_strength
        assert fixed_field is not None
        fixed = pd.to_numeric(frame[fixed_field], errors="coerce")
        collides = genuine & (fixed == 0)
        if collides.any():
            raise StrengthQualityError(field=fixed_field, measure_ids=_distinct(frame.loc[collides, MEASURE_ID]))


def validate_fields(columns: pd.Index | list[str]) -> None:
    """Raise MissingFieldError naming every required field absent from `columns`."""

    present = set(columns)
    missing = [field for field in REQUIRED_FIELDS if field not in present]
    if missing:
        raise MissingFieldError(missing)


def derive_phase_bitmap(frame: pd.DataFrame) -> pd.Series:
    """Compute the phase bitmap sort value for every row.

    Each measure's bitmap is the OR of the bits of every phase it is mapped to.
    Gap rows (no measure) get 0.
    """

    genuine = frame[MEASURE_ID].notna()
    pairs = frame.loc[genuine, [MEASURE_ID, PHASE]].drop_duplicates()
    bits = pairs[PHASE].map(PHASE_BITS)
    per_measure = bits.groupby(pairs[MEASURE_ID]).sum()
    return frame[MEASURE_ID].map(per_measure).fillna(0).astype(int)


def summarize_dataset(frame: pd.DataFrame) -> DatasetSummary:
    """Summarise node and measure counts for a prepared frame."""

    nodes_per_level = {level: int(frame[level_fields(level).name].nunique()) for level in LEVELS}
    mapped_per_node = frame.groupby(level_fields(3).name)[MEASURE_ID].count()
    logger.debug("Distinct nodes per level: %s", nodes_per_level)
    return DatasetSummary(
        rows=len(frame),
        nodes_per_level=nodes_per_level,
        gap_nodes=int((mapped_per_node == 0).sum()),
        measures=int(frame[MEASURE_ID].nunique()),
    )


def _distinct(values: pd.Series) -> list[object]:
    """Return distinct values in first-seen order."""

    return list(dict.fromkeys(values.tolist()))
