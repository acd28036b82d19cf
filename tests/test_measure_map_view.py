"""Integration tests for the measure-map JSON endpoint."""

from __future__ import annotations

from pathlib import Path

import pytest
from django.test import override_settings
from django.urls import reverse

pytestmark = pytest.mark.integration


def test_measure_map_spec_returns_document(client, measure_csv: Path) -> None:
    """The endpoint serves the compiled document for the configured dataset."""

    with override_settings(MEASURE_MAP_DATA_PATH=measure_csv, MEASURE_MAP_TITLE="Configured title"):
        response = client.get(reverse("core:measure_map_spec"))

    assert response.status_code == 200
    payload = response.json()
    assert payload["title"] == "Configured title"
    assert len(payload["vconcat"]) == 3


def test_measure_map_spec_honours_configured_height(client, measure_csv: Path) -> None:
    """The level-1 height follows MEASURE_MAP_LEVEL_1_HEIGHT."""

    with override_settings(MEASURE_MAP_DATA_PATH=measure_csv, MEASURE_MAP_LEVEL_1_HEIGHT=420):
        payload = client.get("/measure-map.json").json()

    assert payload["vconcat"][0]["height"] == 420


def test_measure_map_spec_reports_build_errors(client, tmp_path: Path) -> None:
    """A missing dataset yields HTTP 500 with the error and no document."""

    with override_settings(MEASURE_MAP_DATA_PATH=tmp_path / "missing.csv"):
        response = client.get("/measure-map.json")

    assert response.status_code == 500
    payload = response.json()
    assert "missing.csv" in payload["error"]
    assert "vconcat" not in payload


def test_measure_map_spec_rejects_post(client) -> None:
    """Only GET is allowed."""

    response = client.post("/measure-map.json")
    assert response.status_code == 405
