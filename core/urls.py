"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("measure-map.json", views.measure_map_spec, name="measure_map_spec"),
]
