"""Tests for the joined-dataset schema contract."""

from __future__ import annotations

import pytest

from analysis.schema_contract import REQUIRED_FIELDS, level_fields, upstream_brush_levels

pytestmark = pytest.mark.unit


def test_level_fields_bind_name_sort_and_fixed_strength() -> None:
    """Each level resolves its own name/sort fields; only levels 1-2 carry a gap sentinel."""

    level_1 = level_fields(1)
    assert (level_1.name, level_1.sort, level_1.fixed_strength) == (
        "level_1_name",
        "level_1_sort",
        "level_1_fixed_strength",
    )
    assert level_fields(2).fixed_strength == "level_2_fixed_strength"
    assert level_fields(3).fixed_strength is None
    assert level_fields(3).name == "level_3_name"


def test_level_fields_rejects_unknown_level() -> None:
    """Only levels 1, 2 and 3 exist."""

    with pytest.raises(ValueError, match="Unsupported taxonomy level"):
        level_fields(4)


def test_upstream_brushes_skip_terminal_and_missing_levels() -> None:
    """Level N is filtered by the brushes on N-1 and N-2 only."""

    assert upstream_brush_levels(1) == ()
    assert upstream_brush_levels(2) == (1,)
    assert upstream_brush_levels(3) == (2, 1)


def test_required_fields_cover_every_documented_field() -> None:
    """The contract names measure, node, phase, strength and source fields."""

    expected = {
        "measure_id",
        "level_1_name",
        "level_2_name",
        "level_3_name",
        "level_1_sort",
        "level_2_sort",
        "level_3_sort",
        "phase",
        "level_1_fixed_strength",
        "level_2_fixed_strength",
        "strength",
        "source_organisation",
        "source_name",
        "measure_name",
    }
    assert set(REQUIRED_FIELDS) == expected
    assert len(REQUIRED_FIELDS) == len(expected)
