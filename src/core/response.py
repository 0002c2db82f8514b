"""Response helpers and base classes for the ``{data, errors}`` envelope."""

from typing import Any

from django.http import JsonResponse
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.viewsets import ModelViewSet


def api_response(data: Any, status: int = 200) -> Response:
    """Return data wrapped in the standard envelope."""

    return Response({"data": data, "errors": []}, status=status)


def error_payload(*errors: Any) -> dict[str, Any]:
    return {"data": None, "errors": list(errors)}


def json_error(message: str, status: int) -> JsonResponse:
    """Envelope error for code paths that run before DRF (middleware)."""

    return JsonResponse(error_payload(message), status=status)


def _is_enveloped(payload: Any) -> bool:
    return isinstance(payload, dict) and "data" in payload and "errors" in payload


class EnvelopeMixin:
    """Wrap successful DRF responses in the envelope unless already wrapped."""

    def finalize_response(self, request, response, *args, **kwargs):  # type: ignore[override]
        if hasattr(response, "data") and response.status_code and response.status_code < 400:
            if response.status_code != 204 and not _is_enveloped(response.data):
                response.data = {"data": response.data, "errors": []}
        return super().finalize_response(request, response, *args, **kwargs)  # type: ignore[attr-defined]


class BaseAPIView(EnvelopeMixin, APIView):
    """APIView with enveloped success responses."""


class BaseViewSet(EnvelopeMixin, ModelViewSet):
    """ModelViewSet with enveloped success responses."""
