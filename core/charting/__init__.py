"""Declarative measure-map chart construction.

The measure map is compiled into a single Vega-Lite document with altair: three
layered level charts (coverage counts, measure extents, phase points) stacked
vertically and linked through named selections.
"""

from .document import build_measure_map_document, render_document_json

__all__ = ["build_measure_map_document", "render_document_json"]
