# backend/vx_core/common/api/params.py
from __future__ import annotations

from typing import Any
from uuid import UUID

from rest_framework.exceptions import NotFound, ValidationError


def parse_uuid(value: Any, field_name: str) -> UUID:
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise ValidationError({field_name: "Invalid UUID"})


def route_uuid(value: Any, message: str = "Resource not found") -> UUID:
    """Malformed ids in the URL behave like unknown ids."""
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise NotFound(message)


def int_param(value: Any, *, default: int, minimum: int, maximum: int) -> int:
    try:
        n = int(value) if value not in (None, "") else default
    except (TypeError, ValueError):
        n = default
    return max(minimum, min(n, maximum))
