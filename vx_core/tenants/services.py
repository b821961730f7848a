# backend/vx_core/tenants/services.py
from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from django.db import IntegrityError, transaction
from rest_framework.exceptions import NotFound, ValidationError

from vx_core.audit.services import AuditService, EventCode
from vx_core.common.api.exceptions import ConflictError
from vx_core.tenants.features import FEATURES_BY_CODE
from vx_core.tenants.models import Tenant, TenantFeature, TenantStatus
from vx_core.tenants.selectors import subdomain_taken

logger = logging.getLogger(__name__)

SUBDOMAIN_TAKEN_MSG = "Subdomain already taken"

# What a tenant admin may change about their own clinic
SETTINGS_FIELDS = (
    "name",
    "business_name",
    "business_email",
    "business_phone",
    "business_address",
    "timezone",
    "locale",
    "metadata",
)


class TenantService:
    """
    All Tenant mutations live here (write-model boundary).
    """

    @staticmethod
    @transaction.atomic
    def create_with_admin(
        *,
        name: str,
        subdomain: str,
        admin_email: str,
        admin_password: str,
        admin_name: str,
        business_name: str = "",
        business_email: str = "",
        business_phone: str = "",
        business_address: str = "",
        timezone: str = "UTC",
        locale: str = "en",
        metadata: Optional[dict] = None,
        actor_user_id: int | None = None,
    ) -> Tenant:
        """
        Tenant + its first admin user + admin membership, all or nothing.
        """
        from vx_core.iam.models import TenantRole
        from vx_core.iam.services.accounts import AccountService

        name = (name or "").strip()
        subdomain = (subdomain or "").strip().lower()

        missing = [
            field
            for field, value in (
                ("name", name),
                ("subdomain", subdomain),
                ("admin_email", admin_email),
                ("admin_password", admin_password),
                ("admin_name", admin_name),
            )
            if not value
        ]
        if missing:
            raise ValidationError({field: "This field is required." for field in missing})

        if subdomain_taken(subdomain=subdomain):
            raise ConflictError(SUBDOMAIN_TAKEN_MSG)

        try:
            with transaction.atomic():
                tenant = Tenant.objects.create(
                    name=name,
                    subdomain=subdomain,
                    status=TenantStatus.ACTIVE,
                    business_name=business_name or name,
                    business_email=business_email or admin_email,
                    business_phone=business_phone,
                    business_address=business_address,
                    timezone=timezone or "UTC",
                    locale=locale or "en",
                    metadata=metadata or {},
                )
        except IntegrityError:
            raise ConflictError(SUBDOMAIN_TAKEN_MSG)

        membership = AccountService.register_tenant_user(
            tenant=tenant,
            email=admin_email,
            password=admin_password,
            full_name=admin_name,
            role=TenantRole.ADMIN,
        )

        AuditService.log(
            event_code=EventCode.TENANT_CREATED,
            entity_type="Tenant",
            entity_id=tenant.id,
            tenant_id=tenant.id,
            actor_user_id=actor_user_id,
            metadata={"subdomain": subdomain, "admin_user_id": membership.user_id},
        )
        logger.info("Tenant created subdomain=%s id=%s", subdomain, tenant.id)
        return tenant

    @staticmethod
    @transaction.atomic
    def set_status(*, tenant_id: UUID, status: str, actor_user_id: int | None = None) -> Tenant:
        if status not in TenantStatus.values:
            raise ValidationError({"status": f"Invalid status. Allowed: {list(TenantStatus.values)}"})

        t = Tenant.objects.select_for_update().filter(id=tenant_id).first()
        if t is None:
            raise NotFound("Tenant not found")

        # idempotent no-op
        if t.status == status:
            return t

        previous = t.status
        t.status = status
        t.save(update_fields=["status", "updated_at"])

        AuditService.log(
            event_code=EventCode.TENANT_STATUS_CHANGED,
            entity_type="Tenant",
            entity_id=t.id,
            tenant_id=t.id,
            actor_user_id=actor_user_id,
            metadata={"from": previous, "to": status},
        )
        logger.info("Tenant status changed id=%s %s -> %s", t.id, previous, status)
        return t

    @staticmethod
    @transaction.atomic
    def update_settings(*, tenant_id: UUID, data: dict, actor_user_id: int | None = None) -> Tenant:
        t = Tenant.objects.select_for_update().filter(id=tenant_id).first()
        if t is None:
            raise NotFound("Tenant not found")

        updates = {k: v for k, v in (data or {}).items() if k in SETTINGS_FIELDS}
        if not updates:
            return t

        for k, v in updates.items():
            setattr(t, k, v)
        t.save(update_fields=[*updates.keys(), "updated_at"])

        AuditService.log(
            event_code=EventCode.TENANT_SETTINGS_UPDATED,
            entity_type="Tenant",
            entity_id=t.id,
            tenant_id=t.id,
            actor_user_id=actor_user_id,
            metadata={"updated_fields": sorted(updates)},
        )
        return t


class FeatureService:
    @staticmethod
    @transaction.atomic
    def set_features(*, tenant_id: UUID, flags: dict[str, bool], actor_user_id: int | None = None) -> None:
        """
        Upserts overrides for the given catalogue codes; codes not mentioned keep their state.
        """
        unknown = sorted(code for code in flags if code not in FEATURES_BY_CODE)
        if unknown:
            raise ValidationError({"features": f"Unknown feature codes: {', '.join(unknown)}"})
        if not Tenant.objects.filter(id=tenant_id).exists():
            raise NotFound("Tenant not found")

        for code, enabled in flags.items():
            TenantFeature.objects.update_or_create(tenant_id=tenant_id, code=code, defaults={"is_enabled": bool(enabled)})

        AuditService.log(
            event_code=EventCode.TENANT_FEATURES_UPDATED,
            entity_type="Tenant",
            entity_id=tenant_id,
            tenant_id=tenant_id,
            actor_user_id=actor_user_id,
            metadata={"features": flags},
        )
        logger.info("Tenant features updated id=%s %s", tenant_id, flags)
