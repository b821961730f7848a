# backend/vx_core/tenants/tests/test_super_admin_tenants_api.py
import pytest
from rest_framework.test import APIClient

from vx_core.audit.models import AuditEvent
from vx_core.conftest import PASSWORD, host_for
from vx_core.iam.models import TenantRole, TenantUser
from vx_core.tenants.models import Tenant, TenantStatus

pytestmark = pytest.mark.django_db

URL = "/api/v1/super-admin/tenants/"


def _payload(**overrides):
    payload = {
        "name": "Maple Kids Clinic",
        "subdomain": "maple",
        "admin_email": "owner@maple.test",
        "admin_password": PASSWORD,
        "admin_name": "Olive Owner",
    }
    payload.update(overrides)
    return payload


def test_create_tenant_with_admin(super_admin_client):
    res = super_admin_client.post(URL, _payload(), format="json")

    assert res.status_code == 201, res.content
    data = res.json()["data"]
    assert data["subdomain"] == "maple"
    assert data["status"] == TenantStatus.ACTIVE

    membership = TenantUser.objects.select_related("user").get(tenant_id=data["id"])
    assert membership.role == TenantRole.ADMIN
    assert membership.user.email == "owner@maple.test"
    assert AuditEvent.objects.filter(event_code="tenant.created", entity_id=data["id"]).exists()


def test_new_admin_can_log_in_on_new_subdomain(super_admin_client):
    super_admin_client.post(URL, _payload(), format="json")
    tenant = Tenant.objects.get(subdomain="maple")

    res = APIClient().post(
        "/api/v1/auth/login/",
        {"email": "owner@maple.test", "password": PASSWORD},
        format="json",
        **host_for(tenant),
    )

    assert res.status_code == 200, res.content
    assert res.json()["data"]["user"]["role"] == TenantRole.ADMIN


def test_taken_subdomain_is_409(super_admin_client, tenant):
    res = super_admin_client.post(URL, _payload(subdomain="sunrise"), format="json")

    assert res.status_code == 409
    assert res.json()["error"] == "Subdomain already taken"


def test_missing_fields_is_400(super_admin_client):
    res = super_admin_client.post(URL, {"name": "Half"}, format="json")

    assert res.status_code == 400
    assert "subdomain" in res.json()["error"]
    assert "admin_email" in res.json()["error"]


def test_admin_creation_failure_leaves_no_tenant(super_admin_client, admin_user):
    res = super_admin_client.post(URL, _payload(admin_email=admin_user.email), format="json")

    assert res.status_code == 409
    assert not Tenant.objects.filter(subdomain="maple").exists()


def test_list_filters_and_paginates(super_admin_client, tenant, other_tenant):
    other_tenant.status = TenantStatus.SUSPENDED
    other_tenant.save()

    everything = super_admin_client.get(URL).json()["data"]
    suspended = super_admin_client.get(URL, {"status": "suspended"}).json()["data"]
    searched = super_admin_client.get(URL, {"search": "SUNR"}).json()["data"]

    assert everything["pagination"]["total"] == 2
    assert [t["subdomain"] for t in suspended["results"]] == ["harbor"]
    assert [t["subdomain"] for t in searched["results"]] == ["sunrise"]


def test_retrieve_includes_users(super_admin_client, tenant, admin_user):
    res = super_admin_client.get(f"{URL}{tenant.id}/")

    assert res.status_code == 200
    assert [u["email"] for u in res.json()["data"]["users"]] == [admin_user.email]


def test_retrieve_unknown_is_404(super_admin_client):
    assert super_admin_client.get(f"{URL}00000000-0000-0000-0000-000000000000/").status_code == 404
    assert super_admin_client.get(f"{URL}garbage/").status_code == 404


def test_suspend_blocks_subdomain(super_admin_client, tenant):
    res = super_admin_client.put(f"{URL}{tenant.id}/status/", {"status": "suspended"}, format="json")

    assert res.status_code == 200, res.content
    assert res.json()["data"]["status"] == TenantStatus.SUSPENDED

    blocked = APIClient().get("/api/v1/patients/", **host_for(tenant))
    assert blocked.status_code == 404
    assert blocked.json()["error"] == "Tenant not found or inactive"


def test_status_change_is_idempotent(super_admin_client, tenant):
    super_admin_client.put(f"{URL}{tenant.id}/status/", {"status": "active"}, format="json")

    assert not AuditEvent.objects.filter(event_code="tenant.status_changed").exists()


def test_invalid_status_is_400(super_admin_client, tenant):
    res = super_admin_client.put(f"{URL}{tenant.id}/status/", {"status": "deleted"}, format="json")

    assert res.status_code == 400


def test_stats(super_admin_client, tenant, other_tenant, admin_user):
    res = super_admin_client.get("/api/v1/super-admin/stats/")

    assert res.status_code == 200
    data = res.json()["data"]
    assert data["tenants"] == {"total": 2, "active": 2, "suspended": 0, "cancelled": 0}
    assert data["tenant_users"] == 1
    assert data["patients"] == 0


def test_tenant_admin_is_forbidden(api_client):
    res = api_client.get(URL)

    assert res.status_code == 403
    assert res.json()["error"] == "Super admin privileges required"


def test_anonymous_is_forbidden(db):
    res = APIClient().get(URL)

    assert res.status_code == 403
    assert res.json()["error"] == "Super admin privileges required"


def test_super_admin_sets_feature_flags(super_admin_client, tenant):
    res = super_admin_client.put(
        f"{URL}{tenant.id}/features/",
        {"features": {"sms_reminders": True, "audit_log": False}},
        format="json",
    )

    assert res.status_code == 200, res.content
    flags = {f["code"]: f["enabled"] for f in res.json()["data"]}
    assert flags["sms_reminders"] is True
    assert flags["audit_log"] is False
    assert AuditEvent.objects.filter(event_code="tenant.features_updated", tenant_id=tenant.id).exists()

    listed = super_admin_client.get(f"{URL}{tenant.id}/features/")
    assert {f["code"]: f["enabled"] for f in listed.json()["data"]} == flags


def test_unknown_feature_code_is_400(super_admin_client, tenant):
    res = super_admin_client.put(f"{URL}{tenant.id}/features/", {"features": {"warp": True}}, format="json")

    assert res.status_code == 400
    assert res.json()["details"] == "features: Unknown feature codes: warp"


def test_features_of_unknown_tenant_is_404(super_admin_client):
    res = super_admin_client.get(f"{URL}00000000-0000-0000-0000-000000000000/features/")

    assert res.status_code == 404
