# backend/vx_core/iam/tests/test_invitations_api.py
from datetime import timedelta

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from vx_core.audit.models import AuditEvent
from vx_core.conftest import PASSWORD, host_for
from vx_core.iam.models import InvitationStatus, TenantInvitation, TenantRole, TenantUser

pytestmark = pytest.mark.django_db

INVITE_URL = "/api/v1/tenant/users/invite/"
ACCEPT_URL = "/api/v1/tenant/users/accept-invitation/"
LOGIN_URL = "/api/v1/auth/login/"


def _invite(client, **overrides):
    payload = {"email": "Nina@Sunrise.test", "full_name": "Nina Nurse", "role": "nurse"}
    payload.update(overrides)
    return client.post(INVITE_URL, payload, format="json")


def _accept(tenant, token, password=PASSWORD):
    return APIClient().post(
        ACCEPT_URL, {"invitation_token": token, "password": password}, format="json", **host_for(tenant)
    )


def test_admin_invites_staff_member(api_client, tenant, admin_user):
    res = _invite(api_client)

    assert res.status_code == 201, res.content
    data = res.json()["data"]
    assert data["email"] == "nina@sunrise.test"
    assert data["role"] == TenantRole.NURSE
    assert len(data["invitation_token"]) >= 32

    invitation = TenantInvitation.objects.get(token=data["invitation_token"])
    assert invitation.tenant_id == tenant.id
    assert invitation.invited_by_id == admin_user.id
    assert invitation.status == InvitationStatus.PENDING
    assert AuditEvent.objects.filter(event_code="invitation.created", tenant_id=tenant.id).exists()


def test_reinviting_revokes_the_pending_invitation(api_client):
    first = _invite(api_client).json()["data"]["invitation_token"]
    second = _invite(api_client, role="doctor").json()["data"]["invitation_token"]

    assert TenantInvitation.objects.get(token=first).status == InvitationStatus.REVOKED
    assert TenantInvitation.objects.get(token=second).status == InvitationStatus.PENDING


def test_inviting_existing_member_is_409(api_client, doctor_user):
    res = _invite(api_client, email=doctor_user.email)

    assert res.status_code == 409
    assert res.json()["error"] == "User already exists in this tenant"


def test_doctor_cannot_invite(tenant, doctor_user, client_for):
    res = _invite(client_for(doctor_user, tenant))

    assert res.status_code == 403


def test_accepted_invitation_can_log_in(api_client, tenant):
    token = _invite(api_client).json()["data"]["invitation_token"]

    res = _accept(tenant, token)

    assert res.status_code == 201, res.content
    assert res.json()["data"]["user"]["role"] == TenantRole.NURSE
    membership = TenantUser.objects.get(user__email="nina@sunrise.test")
    assert membership.tenant_id == tenant.id
    assert membership.full_name == "Nina Nurse"

    invitation = TenantInvitation.objects.get(token=token)
    assert invitation.status == InvitationStatus.ACCEPTED
    assert invitation.accepted_at is not None

    login = APIClient().post(
        LOGIN_URL, {"email": "nina@sunrise.test", "password": PASSWORD}, format="json", **host_for(tenant)
    )
    assert login.status_code == 200


def test_invitation_is_single_use(api_client, tenant):
    token = _invite(api_client).json()["data"]["invitation_token"]
    _accept(tenant, token)

    again = _accept(tenant, token)

    assert again.status_code == 404
    assert again.json()["error"] == "Invalid or expired invitation"


def test_unknown_token_is_404(tenant):
    res = _accept(tenant, "nope")

    assert res.status_code == 404


def test_token_from_another_clinic_is_404(api_client, other_tenant):
    token = _invite(api_client).json()["data"]["invitation_token"]

    res = _accept(other_tenant, token)

    assert res.status_code == 404


def test_expired_invitation_is_410(api_client, tenant):
    token = _invite(api_client).json()["data"]["invitation_token"]
    TenantInvitation.objects.filter(token=token).update(expires_at=timezone.now() - timedelta(minutes=1))

    res = _accept(tenant, token)

    assert res.status_code == 410
    assert res.json()["error"] == "Invitation has expired"
    assert res.json()["code"] == "gone"
    assert not TenantUser.objects.filter(user__email="nina@sunrise.test").exists()
