# backend/vx_core/parents/auth.py
from __future__ import annotations

import logging
from uuid import UUID

import jwt
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.exceptions import AuthenticationFailed, NotAuthenticated, PermissionDenied
from rest_framework.permissions import BasePermission

from vx_core.parents.models import Parent
from vx_core.parents.tokens import USER_TYPE_PARENT, decode_parent_token

logger = logging.getLogger(__name__)


class ParentTokenAuthentication(BaseAuthentication):
    """
    Parent-portal bearer token (PyJWT, separate secret from clinic tokens).

    Sets (request.user, request.auth) = (auth user, Parent).
    """
    keyword = "Bearer"

    def authenticate(self, request):
        parts = get_authorization_header(request).split()
        if not parts or parts[0].lower() != self.keyword.lower().encode():
            return None
        if len(parts) != 2:
            raise AuthenticationFailed("Invalid token header.")

        try:
            claims = decode_parent_token(parts[1].decode("utf-8"))
        except (jwt.InvalidTokenError, UnicodeDecodeError) as exc:
            logger.debug("Parent token rejected: %s", exc)
            raise AuthenticationFailed("Invalid or expired token.")

        if claims.get("userType") != USER_TYPE_PARENT:
            raise PermissionDenied("Parent access required.")

        try:
            parent_id = UUID(str(claims.get("userId")))
        except ValueError:
            raise AuthenticationFailed("Invalid or expired token.")

        parent = Parent.objects.select_related("user").filter(id=parent_id, is_active=True).first()
        if parent is None or not parent.user.is_active:
            raise AuthenticationFailed("Parent not found.")
        return parent.user, parent

    def authenticate_header(self, request):
        return f'{self.keyword} realm="parent"'


class IsParent(BasePermission):
    def has_permission(self, request, view) -> bool:
        if not isinstance(request.auth, Parent):
            raise NotAuthenticated("Authentication required")
        return True
