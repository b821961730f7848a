# backend/vx_core/iam/services/membership.py
from __future__ import annotations

from typing import Optional
from uuid import UUID

from django.db.models import QuerySet

from vx_core.iam.models import SuperAdmin, TenantUser


def get_active_membership(*, user_id: int) -> Optional[TenantUser]:
    """
    The single source of truth for user -> (tenant, role).
    """
    return (
        TenantUser.objects.select_related("tenant", "user")
        .filter(user_id=user_id, is_active=True, user__is_active=True)
        .first()
    )


def is_active_super_admin(*, user_id: int) -> bool:
    return SuperAdmin.objects.filter(user_id=user_id, is_active=True, user__is_active=True).exists()


def super_admin_exists() -> bool:
    return SuperAdmin.objects.exists()


def list_tenant_users(*, tenant_id: UUID) -> QuerySet[TenantUser]:
    return (
        TenantUser.objects.select_related("user")
        .filter(tenant_id=tenant_id)
        .order_by("role", "full_name")
    )


def is_member_of_tenant(*, email: str, tenant_id: UUID) -> bool:
    return TenantUser.objects.filter(tenant_id=tenant_id, user__email__iexact=email).exists()
