# backend/vx_core/common/permissions.py

from __future__ import annotations

from rest_framework import status
from rest_framework.exceptions import APIException, NotAuthenticated, PermissionDenied
from rest_framework.permissions import SAFE_METHODS, BasePermission

from vx_core.common.context import get_request_context
from vx_core.common.resources import model_for_path, validate_tenant_resource

# Role names (TenantUser.role values)
ROLE_ADMIN = "admin"
ROLE_DOCTOR = "doctor"
ROLE_NURSE = "nurse"
ROLE_RECEPTIONIST = "receptionist"
ROLE_PATIENT = "patient"

TENANT_ROLES = frozenset({ROLE_ADMIN, ROLE_DOCTOR, ROLE_NURSE, ROLE_RECEPTIONIST, ROLE_PATIENT})

AUTH_REQUIRED_MSG = "Authentication required"
INSUFFICIENT_PERMISSIONS_MSG = "Insufficient permissions"
SUPER_ADMIN_REQUIRED_MSG = "Super admin privileges required"


class TenantRequired(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Tenant context is required for this operation"
    default_code = "tenant_required"


# Gates raise instead of returning False so the envelope carries the exact
# status (DRF would otherwise collapse everything into 401/403).

class RequireTenant(BasePermission):
    def has_permission(self, request, view) -> bool:
        if get_request_context(request).tenant is None:
            raise TenantRequired()
        return True


class RequireAuth(BasePermission):
    def has_permission(self, request, view) -> bool:
        if not get_request_context(request).is_authenticated:
            raise NotAuthenticated(AUTH_REQUIRED_MSG)
        return True


class RequireSuperAdmin(BasePermission):
    def has_permission(self, request, view) -> bool:
        if not get_request_context(request).is_super_admin:
            raise PermissionDenied(SUPER_ADMIN_REQUIRED_MSG)
        return True


class TenantRolePermission(BasePermission):
    """
    Role gate keyed by view action.

    - 401 when the context is not authenticated (tenant AND user).
    - Uses allowed_roles_per_action for strict RBAC.
    - Unknown action on a SAFE method falls back to list/retrieve.
    - Unknown action otherwise => deny.
    """
    message = INSUFFICIENT_PERMISSIONS_MSG

    # Override in subclasses: dict of action -> set of allowed roles
    allowed_roles_per_action: dict[str, frozenset[str] | set[str]] = {}

    def _infer_action(self, request, view) -> str | None:
        action = getattr(view, "action", None)
        if action:
            return action

        kwargs = getattr(view, "kwargs", {}) or {}
        is_detail = "pk" in kwargs or "id" in kwargs

        method = request.method.upper()
        if method in ("GET", "HEAD", "OPTIONS"):
            return "retrieve" if is_detail else "list"
        if method == "POST":
            return "create"
        if method == "PUT":
            return "update"
        if method == "PATCH":
            return "partial_update"
        if method == "DELETE":
            return "destroy"
        return None

    def allowed_roles(self, request, view):
        action = self._infer_action(request, view)
        allowed = self.allowed_roles_per_action.get(action)

        if allowed is None and request.method in SAFE_METHODS:
            kwargs = getattr(view, "kwargs", {}) or {}
            read_action = "retrieve" if ("pk" in kwargs or "id" in kwargs) else "list"
            allowed = self.allowed_roles_per_action.get(read_action)
        return allowed

    def has_permission(self, request, view) -> bool:
        ctx = get_request_context(request)
        if not ctx.is_authenticated:
            raise NotAuthenticated(AUTH_REQUIRED_MSG)

        allowed = self.allowed_roles(request, view)
        if not allowed or ctx.role not in allowed:
            raise PermissionDenied(self.message)
        return True


def require_roles(*roles: str) -> type[TenantRolePermission]:
    """
    Same gate for every action:

        permission_classes = [require_roles(ROLE_ADMIN, ROLE_DOCTOR)]
    """
    allowed = frozenset(roles)

    class _RequireRoles(TenantRolePermission):
        def allowed_roles(self, request, view):
            return allowed

    _RequireRoles.__name__ = "RequireRoles_" + "_".join(sorted(allowed))
    return _RequireRoles


class TenantResourcePermission(BasePermission):
    """
    Cross-tenant guard for detail routes.

    The model comes from the resource registry (prefix of the request path);
    the id from the route kwargs or an `id` field in the body.
    Unregistered paths and routes without an id pass through.
    """

    def _resource_id(self, request, view):
        kwargs = getattr(view, "kwargs", {}) or {}
        rid = kwargs.get("pk") or kwargs.get("id")
        if rid:
            return rid
        if request.method not in SAFE_METHODS:
            data = request.data
            if hasattr(data, "get"):
                return data.get("id")
        return None

    def has_permission(self, request, view) -> bool:
        ctx = get_request_context(request)
        if not ctx.is_authenticated:
            raise NotAuthenticated(AUTH_REQUIRED_MSG)

        resource_id = self._resource_id(request, view)
        if not resource_id:
            return True

        model = model_for_path(request.path)
        if model is None:
            return True

        validate_tenant_resource(model=model, resource_id=resource_id, tenant_id=ctx.tenant_id)
        return True


# Specific permission classes for each module

class PatientPermission(TenantRolePermission):
    """Permissions for clinic patient records"""
    allowed_roles_per_action = {
        "list": TENANT_ROLES,
        "retrieve": TENANT_ROLES,
        "create": {ROLE_ADMIN, ROLE_DOCTOR},
        "update": {ROLE_ADMIN, ROLE_DOCTOR, ROLE_NURSE},
        "partial_update": {ROLE_ADMIN, ROLE_DOCTOR, ROLE_NURSE},
        "destroy": {ROLE_ADMIN, ROLE_DOCTOR},
    }


class PatientVaccinationPermission(TenantRolePermission):
    """Permissions for doses administered at the clinic"""
    allowed_roles_per_action = {
        "list": {ROLE_ADMIN, ROLE_DOCTOR, ROLE_NURSE},
        "retrieve": {ROLE_ADMIN, ROLE_DOCTOR, ROLE_NURSE},
        "create": {ROLE_ADMIN, ROLE_DOCTOR, ROLE_NURSE},
    }


class AuditPermission(TenantRolePermission):
    """Permissions for audit log access"""
    allowed_roles_per_action = {
        "list": {ROLE_ADMIN},
    }


class TenantSettingsPermission(TenantRolePermission):
    """Every member reads the clinic profile; only admins change it"""
    allowed_roles_per_action = {
        "list": TENANT_ROLES,
        "update": {ROLE_ADMIN},
    }


class TenantFeaturePermission(TenantRolePermission):
    """Feature flags are visible to staff, not to patients"""
    allowed_roles_per_action = {
        "list": {ROLE_ADMIN, ROLE_DOCTOR, ROLE_NURSE, ROLE_RECEPTIONIST},
    }
