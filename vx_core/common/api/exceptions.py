# backend/vx_core/common/api/exceptions.py

from __future__ import annotations

import logging
import uuid
from typing import Any

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    NotAuthenticated,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MSG = "Internal server error."


def ensure_request_id(request) -> str:
    """
    Ensures request has a stable request_id attribute and returns it.
    Safe to call from middleware and DRF exception handler.
    """
    rid = getattr(request, "request_id", None) if request is not None else None
    if not rid:
        rid = uuid.uuid4().hex
        if request is not None:
            setattr(request, "request_id", rid)
    return rid


def build_error_envelope(*, request=None, code: str, message: str, details: Any = None) -> dict[str, Any]:
    """
    Canonical error envelope.
    Reusable from Django middleware (JsonResponse) and DRF (Response).
    """
    rid = ensure_request_id(request)
    return {
        "success": False,
        "error": message,
        "details": details,
        "code": code,
        "request_id": rid,
    }


class ConflictError(APIException):
    """
    409 Conflict that still flows through the global exception handler.
    Use when a uniqueness/business rule blocks the action (taken subdomain,
    duplicate member, patient with recorded doses...).
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"

    def __init__(self, detail=None, code=None):
        super().__init__(detail=detail or self.default_detail, code=code or self.default_code)


class GoneError(APIException):
    """410 for one-time tokens that existed but can no longer be used."""
    status_code = status.HTTP_410_GONE
    default_detail = "This resource is no longer available."
    default_code = "gone"

    def __init__(self, detail=None, code=None):
        super().__init__(detail=detail or self.default_detail, code=code or self.default_code)


def _code_for(exc: Exception, http_status: int) -> str:
    if isinstance(exc, ValidationError):
        return "validation_error"
    if isinstance(exc, (NotAuthenticated, AuthenticationFailed)):
        return "not_authenticated"
    if isinstance(exc, PermissionDenied):
        return "permission_denied"
    if isinstance(exc, (Http404, NotFound)):
        return "not_found"
    if isinstance(exc, APIException):
        return getattr(exc, "default_code", "api_error") or "api_error"
    if http_status >= 500:
        return "server_error"
    return "error"


def _validation_message(data: Any) -> str:
    # {"full_name": [...], "date_of_birth": [...]} -> names the offending fields
    if isinstance(data, dict) and data:
        fields = ", ".join(str(k) for k in data.keys() if k != "non_field_errors")
        if fields:
            return f"Missing or invalid fields: {fields}."
        first = data.get("non_field_errors")
        if isinstance(first, list) and first:
            return str(first[0])
    if isinstance(data, list) and data:
        return str(data[0])
    return "Invalid input."


def _details_text(data: Any) -> str | None:
    """
    Flattens DRF error data into one line:
    {"full_name": ["This field is required."]} -> "full_name: This field is required."
    """
    if data is None or data == {} or data == []:
        return None
    if isinstance(data, dict):
        parts = []
        for key, value in data.items():
            text = _details_text(value)
            if text:
                parts.append(text if key == "non_field_errors" else f"{key}: {text}")
        return "; ".join(parts) or None
    if isinstance(data, (list, tuple)):
        return " ".join(t for t in (_details_text(v) for v in data) if t) or None
    return str(data)


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    request = context.get("request")
    response = drf_exception_handler(exc, context)

    # Truly unhandled error: log it, never echo internals to the caller
    if response is None:
        view = context.get("view")
        logger.exception(
            "Unhandled API error in %s", view.__class__.__name__ if view is not None else "?", exc_info=exc
        )
        return Response(
            build_error_envelope(
                request=request,
                code="server_error",
                message=INTERNAL_ERROR_MSG,
                details=None,
            ),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    http_status = response.status_code
    code = _code_for(exc, http_status)
    data = response.data

    # Message + details rules:
    # 1) {"detail": "..."} -> message=detail, details=rest or None
    # 2) ValidationError field map -> message names the fields
    # 3) Otherwise -> message="Request failed."
    # details is always a flat string (or None)
    message = "Request failed."
    details = data

    if isinstance(data, dict) and "detail" in data:
        message = str(data.get("detail"))
        rest = {k: v for k, v in data.items() if k != "detail"}
        details = rest or None
    elif isinstance(exc, ValidationError):
        message = _validation_message(data)

    return Response(
        build_error_envelope(
            request=request,
            code=code,
            message=message,
            details=_details_text(details),
        ),
        status=http_status,
        headers=response.headers,
    )
