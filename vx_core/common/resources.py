# backend/vx_core/common/resources.py
from __future__ import annotations

from typing import Optional

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import models
from rest_framework.exceptions import NotFound, PermissionDenied

RESOURCE_NOT_FOUND_MSG = "Resource not found"
RESOURCE_ACCESS_DENIED_MSG = "Access denied to this resource"

API_ROOTS = ("/api/v1",)

# "/patients" -> Patient ; filled by AppConfig.ready() of the owning app
_TENANT_RESOURCES: dict[str, type[models.Model]] = {}


def register_tenant_resource(prefix: str, model: type[models.Model]) -> None:
    """
    Declare that detail routes under `prefix` address rows of `model`
    (which must carry a `tenant_id` column).
    """
    prefix = "/" + prefix.strip("/")
    if not any(f.name == "tenant_id" for f in model._meta.fields):
        raise ValueError(f"{model.__name__} has no tenant_id column")
    _TENANT_RESOURCES[prefix] = model


def registered_tenant_resources() -> dict[str, type[models.Model]]:
    return dict(_TENANT_RESOURCES)


def model_for_path(path: str) -> Optional[type[models.Model]]:
    rel = path or ""
    for root in API_ROOTS:
        if rel.startswith(root + "/"):
            rel = rel[len(root):]
            break

    # longest prefix wins ("/patients/notes" before "/patients")
    for prefix in sorted(_TENANT_RESOURCES, key=len, reverse=True):
        if rel == prefix or rel.startswith(prefix + "/"):
            return _TENANT_RESOURCES[prefix]
    return None


def validate_tenant_resource(*, model: type[models.Model], resource_id, tenant_id) -> None:
    """
    404 when the row does not exist, 403 when it belongs to another tenant.
    Never returns the row itself.
    """
    try:
        owner = model.objects.filter(pk=resource_id).values_list("tenant_id", flat=True).first()
    except (DjangoValidationError, ValueError):
        owner = None

    if owner is None:
        raise NotFound(RESOURCE_NOT_FOUND_MSG)
    if str(owner) != str(tenant_id):
        raise PermissionDenied(RESOURCE_ACCESS_DENIED_MSG)
