# backend/vx_core/iam/auth.py

from __future__ import annotations

import logging
from typing import Optional

from rest_framework.authentication import BaseAuthentication
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication

from vx_core.common.context import ROLE_SUPER_ADMIN, RequestContext, get_request_context
from vx_core.iam.services.membership import get_active_membership, is_active_super_admin

logger = logging.getLogger(__name__)


def resolve_bearer_context(request, *, host_tenant=None) -> Optional[RequestContext]:
    """
    Resolve user + role from `Authorization: Bearer <access>`.

    Returns None when there is no usable token (missing, malformed, expired,
    unknown user); the caller keeps the host-only context in that case.
    The membership tenant wins over the host tenant.
    """
    jwt_auth = JWTAuthentication()

    header = jwt_auth.get_header(request)
    if not header:
        return None

    try:
        raw_token = jwt_auth.get_raw_token(header)
        if raw_token is None:
            return None
        validated = jwt_auth.get_validated_token(raw_token)
        user = jwt_auth.get_user(validated)
    except AuthenticationFailed as exc:
        logger.debug("Bearer token rejected: %s", exc.detail)
        return None

    if is_active_super_admin(user_id=user.id):
        return RequestContext(tenant=host_tenant, user=user, role=ROLE_SUPER_ADMIN)

    membership = get_active_membership(user_id=user.id)
    if membership is None or not membership.tenant.is_active:
        return None

    return RequestContext(tenant=membership.tenant, user=membership.user, role=membership.role)


class TenantContextAuthentication(BaseAuthentication):
    """
    DRF side of TenantContextMiddleware.

    The middleware already resolved everything; this only exposes it as
    (request.user, request.auth) = (user, RequestContext).
    """

    www_authenticate_realm = "api"

    def authenticate(self, request):
        ctx = get_request_context(request)
        if ctx.user is None:
            return None
        return ctx.user, ctx

    def authenticate_header(self, request):
        return f'Bearer realm="{self.www_authenticate_realm}"'
