# backend/vx_core/common/middleware.py
from __future__ import annotations

import ipaddress
import logging
from typing import Iterable, Optional

from django.conf import settings
from django.db import DatabaseError
from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin

from vx_core.common.api.exceptions import build_error_envelope
from vx_core.common.context import ANONYMOUS_CONTEXT, CONTEXT_ATTR, RequestContext

logger = logging.getLogger(__name__)

TENANT_NOT_FOUND_MSG = "Tenant not found or inactive"
TENANT_EXTRACTION_FAILED_MSG = "Failed to extract tenant information"


def _is_ip_literal(host: str) -> bool:
    try:
        ipaddress.ip_address(host.strip("[]"))
    except ValueError:
        return False
    return True


def resolve_subdomain(host: str, reserved: Iterable[str] = ("www", "api")) -> Optional[str]:
    """
    First DNS label of `host` when it can name a tenant, else None.

    "acme.vaxclinic.com:8000", "acme.localhost:8000" -> "acme"
    "vaxclinic.com", "localhost", "127.0.0.1", "www.vaxclinic.com" -> None
    """
    host = (host or "").strip().lower()
    if not host:
        return None

    if host.startswith("["):
        # bracketed IPv6, optional port
        return None
    host = host.rsplit(":", 1)[0] if host.count(":") == 1 else host

    if _is_ip_literal(host):
        return None

    labels = [p for p in host.split(".") if p]
    # "acme.localhost" for local development, otherwise sub.domain.tld
    min_labels = 2 if labels and labels[-1] == "localhost" else 3
    if len(labels) < min_labels:
        return None

    label = labels[0]
    if label in {r.lower() for r in reserved}:
        return None
    return label


class TenantContextMiddleware(MiddlewareMixin):
    """
    Resolves the request context once per request.

    Behavior:
      - Only /api/* paths are resolved; docs/schema/admin/parent portal are skipped.
      - Host subdomain -> tenant. Unknown or non-active tenant -> 404.
      - Reserved or missing subdomain -> no tenant (not an error here).
      - Bearer token -> user + role via membership. Invalid token -> stays
        unauthenticated; rejection is the job of the permission gates.
      - Store failure during resolution -> 500.
      - On success -> attaches request.vx_context (RequestContext)
    """

    ENFORCED_PREFIXES = ("/api/",)

    def _starts_with_any(self, path: str, prefixes: Iterable[str]) -> bool:
        return any(path.startswith(p) for p in prefixes)

    def _json_error(self, request, *, status_code: int, code: str, message: str, details=None) -> JsonResponse:
        return JsonResponse(
            build_error_envelope(
                request=request,
                code=code,
                message=message,
                details=details,
            ),
            status=status_code,
        )

    def process_request(self, request):
        setattr(request, CONTEXT_ATTR, ANONYMOUS_CONTEXT)

        path = getattr(request, "path", "") or ""

        if self._starts_with_any(path, getattr(settings, "TENANT_UNSCOPED_PATH_PREFIXES", ())):
            return None
        if not self._starts_with_any(path, self.ENFORCED_PREFIXES):
            return None

        from vx_core.iam.auth import resolve_bearer_context
        from vx_core.tenants.selectors import get_active_tenant_by_subdomain

        subdomain = resolve_subdomain(
            request.get_host(),
            reserved=getattr(settings, "TENANT_RESERVED_SUBDOMAINS", ("www", "api")),
        )

        try:
            host_tenant = None
            if subdomain:
                host_tenant = get_active_tenant_by_subdomain(subdomain=subdomain)
                if host_tenant is None:
                    return self._json_error(
                        request,
                        status_code=404,
                        code="not_found",
                        message=TENANT_NOT_FOUND_MSG,
                    )

            context = resolve_bearer_context(request, host_tenant=host_tenant)
        except DatabaseError:
            logger.exception("Tenant extraction failed (host=%s path=%s)", request.get_host(), path)
            return self._json_error(
                request,
                status_code=500,
                code="server_error",
                message=TENANT_EXTRACTION_FAILED_MSG,
            )

        setattr(request, CONTEXT_ATTR, context or RequestContext(tenant=host_tenant))
        return None
