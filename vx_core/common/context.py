# backend/vx_core/common/context.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
from uuid import UUID

ROLE_SUPER_ADMIN = "super_admin"

# Attribute set on the Django request by TenantContextMiddleware
CONTEXT_ATTR = "vx_context"


@dataclass(frozen=True)
class RequestContext:
    """
    Who is calling and on behalf of which tenant.

    Built once per request (middleware) and handed to views explicitly via
    `request.auth`. Never mutated after construction.
    """
    tenant: Optional[Any] = None
    user: Optional[Any] = None
    role: Optional[str] = None

    @property
    def tenant_id(self) -> Optional[UUID]:
        return self.tenant.id if self.tenant is not None else None

    @property
    def is_authenticated(self) -> bool:
        return self.tenant is not None and self.user is not None

    @property
    def is_super_admin(self) -> bool:
        return self.user is not None and self.role == ROLE_SUPER_ADMIN


ANONYMOUS_CONTEXT = RequestContext()


def get_request_context(request) -> RequestContext:
    """
    Works for both Django HttpRequest and DRF Request (which proxies
    unknown attributes to the wrapped HttpRequest).
    """
    if request is None:
        return ANONYMOUS_CONTEXT
    ctx = getattr(request, CONTEXT_ATTR, None)
    return ctx if isinstance(ctx, RequestContext) else ANONYMOUS_CONTEXT
