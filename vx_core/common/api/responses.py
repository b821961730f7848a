# backend/vx_core/common/api/responses.py
from __future__ import annotations

from typing import Any

from rest_framework import status
from rest_framework.response import Response


def success(data: Any = None, *, message: str | None = None, status_code: int = status.HTTP_200_OK) -> Response:
    """Success envelope: {"success": true, "data": ..., "message"?}."""
    body: dict[str, Any] = {"success": True, "data": data}
    if message:
        body["message"] = message
    return Response(body, status=status_code)
