# backend/vx_core/iam/services/invitations.py
from __future__ import annotations

import logging
import secrets

from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound

from vx_core.audit.services import AuditService, EventCode
from vx_core.common.api.exceptions import ConflictError, GoneError
from vx_core.iam.models import InvitationStatus, TenantInvitation, TenantRole, TenantUser
from vx_core.iam.services.accounts import AccountService
from vx_core.iam.services.membership import is_member_of_tenant

logger = logging.getLogger(__name__)

INVALID_INVITATION_MSG = "Invalid or expired invitation"
EXPIRED_INVITATION_MSG = "Invitation has expired"


class InvitationService:
    """
    Admin-issued staff invitations.
    A new invitation for the same email supersedes any pending one.
    """

    @staticmethod
    @transaction.atomic
    def invite(
        *,
        tenant,
        email: str,
        full_name: str,
        role: str = TenantRole.PATIENT,
        invited_by=None,
    ) -> TenantInvitation:
        email = email.strip().lower()
        if is_member_of_tenant(email=email, tenant_id=tenant.id):
            raise ConflictError("User already exists in this tenant")

        TenantInvitation.objects.filter(
            tenant=tenant, email=email, status=InvitationStatus.PENDING
        ).update(status=InvitationStatus.REVOKED)

        invitation = TenantInvitation.objects.create(
            tenant=tenant,
            email=email,
            full_name=full_name.strip(),
            role=role,
            token=secrets.token_urlsafe(32),
            invited_by=invited_by,
            expires_at=timezone.now() + settings.TENANT_INVITATION_TTL,
        )

        AuditService.log_for(
            invitation,
            EventCode.INVITATION_CREATED,
            actor_user_id=getattr(invited_by, "id", None),
            metadata={"email": email, "role": role},
        )
        logger.info("Invitation created tenant=%s role=%s", tenant.subdomain, role)
        return invitation

    @staticmethod
    @transaction.atomic
    def accept(*, tenant, token: str, password: str) -> TenantUser:
        invitation = (
            TenantInvitation.objects.select_for_update()
            .filter(tenant=tenant, token=token, status=InvitationStatus.PENDING)
            .first()
        )
        if invitation is None:
            raise NotFound(INVALID_INVITATION_MSG)

        now = timezone.now()
        if invitation.expires_at <= now:
            raise GoneError(EXPIRED_INVITATION_MSG)

        membership = AccountService.register_tenant_user(
            tenant=tenant,
            email=invitation.email,
            password=password,
            full_name=invitation.full_name,
            role=invitation.role,
        )

        invitation.status = InvitationStatus.ACCEPTED
        invitation.accepted_at = now
        invitation.save(update_fields=["status", "accepted_at"])

        AuditService.log_for(
            invitation,
            EventCode.INVITATION_ACCEPTED,
            actor_user_id=membership.user_id,
            metadata={"tenant_user_id": membership.id},
        )
        return membership
