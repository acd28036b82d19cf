"""Views for the core app."""

from __future__ import annotations

from django.http import HttpRequest, JsonResponse
from django.views.decorators.http import require_GET

from analysis.errors import MeasureMapBuildError
from core.charting.document import document_to_dict
from core.services import compile_measure_map


@require_GET
def measure_map_spec(request: HttpRequest) -> JsonResponse:
    """Return the compiled measure-map document as Vega-Lite JSON.

    Build failures return HTTP 500 with the error message; no partial document
    is ever served.
    """

    try:
        document = compile_measure_map()
    except MeasureMapBuildError as exc:
        return JsonResponse({"error": str(exc)}, status=500)
    return JsonResponse(document_to_dict(document), json_dumps_params={"sort_keys": True})
