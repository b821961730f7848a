# backend/vx_core/tenants/models.py
import uuid
from django.db import models


class TenantStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    SUSPENDED = "suspended", "Suspended"
    CANCELLED = "cancelled", "Cancelled"


class Tenant(models.Model):
    """
    A clinic organization, addressed by its subdomain.
    Root of all scoping in the system. Never hard-deleted.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255)
    subdomain = models.SlugField(max_length=63, unique=True)

    status = models.CharField(
        max_length=16,
        choices=TenantStatus.choices,
        default=TenantStatus.ACTIVE,
        db_index=True,
    )

    business_name = models.CharField(max_length=255, blank=True)
    business_email = models.EmailField(blank=True)
    business_phone = models.CharField(max_length=32, blank=True)
    business_address = models.TextField(blank=True)

    timezone = models.CharField(max_length=64, default="UTC")
    locale = models.CharField(max_length=16, default="en")

    # flexible, avoids schema churn (branding, onboarding notes, etc.)
    metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "tenants_tenant"
        indexes = [
            models.Index(fields=["status"], name="tenants_status_idx"),
            models.Index(fields=["created_at"], name="tenants_created_at_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.subdomain})"

    @property
    def is_active(self) -> bool:
        return self.status == TenantStatus.ACTIVE


class TenantFeature(models.Model):
    """
    Per-tenant override of a catalogue feature (vx_core.tenants.features).
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE, related_name="feature_flags")
    code = models.CharField(max_length=64)
    is_enabled = models.BooleanField(default=True)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "tenants_tenant_feature"
        constraints = [
            models.UniqueConstraint(fields=["tenant", "code"], name="uniq_tenant_feature_code"),
        ]

    def __str__(self) -> str:
        return f"{self.tenant_id}:{self.code}={'on' if self.is_enabled else 'off'}"
