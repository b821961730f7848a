# backend/vx_core/iam/models.py
import uuid
from django.conf import settings
from django.db import models
from vx_core.tenants.models import Tenant


class TenantRole(models.TextChoices):
    ADMIN = "admin", "Admin"
    DOCTOR = "doctor", "Doctor"
    NURSE = "nurse", "Nurse"
    RECEPTIONIST = "receptionist", "Receptionist"
    PATIENT = "patient", "Patient"


class TenantUser(models.Model):
    """
    Links a Django auth user to exactly one tenant with a role.
    This is the RBAC source for every tenant-scoped request.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="tenant_membership")
    tenant = models.ForeignKey(Tenant, on_delete=models.PROTECT, related_name="members")

    role = models.CharField(max_length=32, choices=TenantRole.choices, default=TenantRole.PATIENT)
    full_name = models.CharField(max_length=255, blank=True)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "iam_tenant_user"
        indexes = [
            models.Index(fields=["tenant", "role"], name="iam_tu_tenant_role_idx"),
            models.Index(fields=["tenant", "is_active"], name="iam_tu_tenant_active_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.user.email} ({self.tenant.subdomain}:{self.role})"


class SuperAdmin(models.Model):
    """
    Platform operator. Not tied to any tenant.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="super_admin")
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "iam_super_admin"

    def __str__(self) -> str:
        return f"{self.user.email} (super admin)"


class InvitationStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    ACCEPTED = "accepted", "Accepted"
    REVOKED = "revoked", "Revoked"


class TenantInvitation(models.Model):
    """
    One-time token an admin hands to a new staff member.
    Accepting it creates the login user and the TenantUser row.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE, related_name="invitations")
    email = models.EmailField()
    full_name = models.CharField(max_length=255)
    role = models.CharField(max_length=32, choices=TenantRole.choices, default=TenantRole.PATIENT)

    token = models.CharField(max_length=64, unique=True)
    status = models.CharField(max_length=16, choices=InvitationStatus.choices, default=InvitationStatus.PENDING)
    invited_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="sent_invitations",
        null=True,
        blank=True,
    )

    expires_at = models.DateTimeField()
    accepted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = "iam_tenant_invitation"
        indexes = [
            models.Index(fields=["tenant", "email", "status"], name="iam_inv_tenant_email_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.email} -> {self.tenant_id} ({self.status})"
