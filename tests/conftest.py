"""Pytest fixtures shared across measure-map tests."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pandas as pd
import pytest

LEVEL_1_SORT = {
    "Users": 6,
    "Unpaid Carers": 5,
    "Workforce": 4,
    "Services": 3,
    "Providers": 2,
    "Funders": 1,
}

# (measure, level 1, level 2, level 2 sort, level 3, level 3 sort, phase, strength)
ROWS: tuple[tuple[str | None, str, str, int, str, int, str, float | None], ...] = (
    ("M1", "Users", "User needs", 12, "Care needs", 30, "demand", 0.9),
    ("M2", "Users", "User needs", 12, "Care needs", 30, "demand", 0.5),
    ("M3", "Users", "User needs", 12, "Satisfaction", 29, "outcome", 0.7),
    ("M1", "Users", "User experience", 11, "Quality of life", 28, "outcome", 0.9),
    ("M4", "Unpaid Carers", "Carer support", 10, "Carer assessments", 27, "supply", 0.4),
    ("M5", "Workforce", "Staffing", 9, "Vacancies", 26, "operate", 0.8),
    ("M2", "Services", "Provision", 8, "Care home beds", 25, "supply", 0.5),
    ("M6", "Providers", "Market", 7, "Provider quality", 24, "operate", 0.2),
    (None, "Providers", "Market", 7, "Provider closures", 23, "operate", None),
    (None, "Funders", "Spending", 6, "Local authority spend", 22, "demand", None),
)


def make_measure_frame() -> pd.DataFrame:
    """Build a small joined dataset: 6 dimensions, `Funders` with no measures."""

    records = []
    for measure, level_1, level_2, level_2_sort, level_3, level_3_sort, phase, strength in ROWS:
        fixed = strength if strength is not None else 0.0
        records.append(
            {
                "measure_id": measure,
                "level_1_name": level_1,
                "level_1_sort": LEVEL_1_SORT[level_1],
                "level_2_name": level_2,
                "level_2_sort": level_2_sort,
                "level_3_name": level_3,
                "level_3_sort": level_3_sort,
                "phase": phase,
                "level_1_fixed_strength": fixed,
                "level_2_fixed_strength": fixed,
                "strength": strength,
                "source_organisation": None if measure is None else "NHS England",
                "source_name": None if measure is None else f"Source for {measure}",
                "measure_name": None if measure is None else f"Measure {measure}",
            }
        )
    return pd.DataFrame.from_records(records)


@pytest.fixture
def measure_frame() -> pd.DataFrame:
    """Return the raw joined test dataset."""

    return make_measure_frame()


@pytest.fixture
def measure_csv(tmp_path: Path, measure_frame: pd.DataFrame) -> Path:
    """Write the joined test dataset to a CSV file and return its path."""

    path = tmp_path / "measure_map.csv"
    measure_frame.to_csv(path, index=False)
    return path


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no Django request/command machinery.
    - `integration`: tests touching Django settings, views, commands, or IO.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
