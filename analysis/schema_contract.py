"""Schema contract for the joined measure-map dataset.

The upstream join produces one flat row per (domain node at all three levels,
measure, source). The compiler only relies on the field names declared here;
everything else in the file is carried along untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal

Level = Literal[1, 2, 3]
Phase = Literal["demand", "supply", "operate", "outcome"]
SortKey = Literal["strength", "phase_bitmap"]

LEVELS: Final[tuple[Level, ...]] = (1, 2, 3)

MEASURE_ID: Final[str] = "measure_id"
MEASURE_NAME: Final[str] = "measure_name"
PHASE: Final[str] = "phase"
STRENGTH: Final[str] = "strength"
SOURCE_ORGANISATION: Final[str] = "source_organisation"
SOURCE_NAME: Final[str] = "source_name"

PHASE_BITMAP: Final[str] = "phase_bitmap"
SORT_KEY: Final[str] = "sort_key"
SORT_VALUE: Final[str] = "sort_value"

PHASES: Final[tuple[Phase, ...]] = ("demand", "supply", "operate", "outcome")

# Bit weights used to build the phase bitmap. Sorted descending, a measure that
# touches `demand` always precedes one that does not.
PHASE_BITS: Final[dict[str, int]] = {
    "demand": 8,
    "supply": 4,
    "operate": 2,
    "outcome": 1,
}

SORT_KEYS: Final[tuple[SortKey, ...]] = ("strength", "phase_bitmap")
DEFAULT_SORT_KEY: Final[SortKey] = "strength"

# Levels that carry a synthetic zero-strength gap row sentinel.
FIXED_STRENGTH_LEVELS: Final[tuple[Level, ...]] = (1, 2)

# Level 3 is terminal: nothing below it consumes a brush.
BRUSH_LEVELS: Final[tuple[Level, ...]] = (1, 2)

# Strength-to-opacity mapping shared by the compiled scale and the evaluator.
STRENGTH_OPACITY_DOMAIN: Final[tuple[float, float]] = (0.1, 1.0)
STRENGTH_OPACITY_RANGE: Final[tuple[float, float]] = (0.0, 1.0)

UNBRUSHED_FILL: Final[str] = "lightgray"


@dataclass(frozen=True, slots=True)
class LevelFields:
    """Field names bound to one taxonomy level.

    Args:
        level: Taxonomy level (1 = broadest, 3 = most granular).
        name: Domain node display-name field at this level.
        sort: Domain node sort-key field at this level.
        fixed_strength: Zero-sentinel strength field, or None when the level has
            no synthetic gap rows.
    """

    level: Level
    name: str
    sort: str
    fixed_strength: str | None


def level_fields(level: int) -> LevelFields:
    """Return the field names bound to a taxonomy level.

    Raises:
        ValueError: When `level` is not 1, 2 or 3.
    """

    if level not in LEVELS:
        raise ValueError(f"Unsupported taxonomy level: {level!r} (expected one of {LEVELS}).")
    return LevelFields(
        level=level,  # type: ignore[arg-type]
        name=f"level_{level}_name",
        sort=f"level_{level}_sort",
        fixed_strength=f"level_{level}_fixed_strength" if level in FIXED_STRENGTH_LEVELS else None,
    )


def upstream_brush_levels(level: int) -> tuple[Level, ...]:
    """Return the levels whose brushes filter charts at `level`.

    Level N is filtered by the brushes of levels N-1 and N-2 where they exist;
    all of them apply conjunctively.
    """

    return tuple(source for source in (level - 1, level - 2) if source in BRUSH_LEVELS)  # type: ignore[misc]


def required_fields() -> tuple[str, ...]:
    """Return every field the compiler requires, in a stable order."""

    fields: list[str] = [MEASURE_ID]
    for level in LEVELS:
        fields_for_level = level_fields(level)
        fields.extend([fields_for_level.name, fields_for_level.sort])
    fields.append(PHASE)
    for level in FIXED_STRENGTH_LEVELS:
        fixed = level_fields(level).fixed_strength
        assert fixed is not None
        fields.append(fixed)
    fields.extend([STRENGTH, SOURCE_ORGANISATION, SOURCE_NAME, MEASURE_NAME])
    return tuple(fields)


REQUIRED_FIELDS: Final[tuple[str, ...]] = required_fields()
