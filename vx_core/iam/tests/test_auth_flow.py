# backend/vx_core/iam/tests/test_auth_flow.py
import pytest
from rest_framework.test import APIClient

from vx_core.conftest import PASSWORD, host_for
from vx_core.iam.models import TenantRole, TenantUser

pytestmark = pytest.mark.django_db


def test_register_creates_patient_member(tenant):
    c = APIClient()
    res = c.post(
        "/api/v1/auth/register/",
        {"email": "Jo@Example.com", "password": PASSWORD, "full_name": "Jo Park"},
        format="json",
        **host_for(tenant),
    )

    assert res.status_code == 201, res.content
    data = res.json()["data"]
    assert data["user"]["role"] == TenantRole.PATIENT
    assert data["tenant"]["subdomain"] == "sunrise"
    assert TenantUser.objects.get(user__email="jo@example.com").tenant_id == tenant.id


def test_register_cannot_pick_a_staff_role(tenant):
    res = APIClient().post(
        "/api/v1/auth/register/",
        {"email": "sneaky@example.com", "password": PASSWORD, "full_name": "Sneaky", "role": "admin"},
        format="json",
        **host_for(tenant),
    )

    assert res.status_code == 201
    assert res.json()["data"]["user"]["role"] == TenantRole.PATIENT


def test_register_existing_member_is_409(tenant, admin_user):
    res = APIClient().post(
        "/api/v1/auth/register/",
        {"email": admin_user.email, "password": PASSWORD, "full_name": "Again"},
        format="json",
        **host_for(tenant),
    )

    assert res.status_code == 409
    assert res.json()["error"] == "User already exists in this tenant"


def test_register_without_tenant_host_is_400(db):
    res = APIClient().post(
        "/api/v1/auth/register/",
        {"email": "jo@example.com", "password": PASSWORD, "full_name": "Jo Park"},
        format="json",
    )

    assert res.status_code == 400
    assert res.json()["code"] == "tenant_required"


def test_login_returns_tokens_and_context(tenant, doctor_user):
    res = APIClient().post(
        "/api/v1/auth/login/",
        {"email": doctor_user.email, "password": PASSWORD},
        format="json",
        **host_for(tenant),
    )

    assert res.status_code == 200, res.content
    data = res.json()["data"]
    assert data["user"]["role"] == TenantRole.DOCTOR
    assert data["tenant"]["id"] == str(tenant.id)
    assert data["session"]["access"]
    assert data["session"]["refresh"]


def test_login_bad_password_is_401(tenant, doctor_user):
    res = APIClient().post(
        "/api/v1/auth/login/",
        {"email": doctor_user.email, "password": "nope-nope"},
        format="json",
        **host_for(tenant),
    )

    assert res.status_code == 401
    assert res.json()["error"] == "Invalid credentials"


def test_login_on_foreign_tenant_is_401(other_tenant, doctor_user):
    res = APIClient().post(
        "/api/v1/auth/login/",
        {"email": doctor_user.email, "password": PASSWORD},
        format="json",
        **host_for(other_tenant),
    )

    assert res.status_code == 401


def test_access_token_works_for_me_and_refresh(tenant, nurse_user):
    c = APIClient()
    login = c.post(
        "/api/v1/auth/login/",
        {"email": nurse_user.email, "password": PASSWORD},
        format="json",
        **host_for(tenant),
    ).json()["data"]

    c.credentials(HTTP_AUTHORIZATION=f"Bearer {login['session']['access']}")
    me = c.get("/api/v1/auth/me/", **host_for(tenant))
    assert me.status_code == 200, me.content
    assert me.json()["data"]["user"]["role"] == TenantRole.NURSE
    assert me.json()["data"]["tenant"]["subdomain"] == "sunrise"

    refreshed = APIClient().post("/api/v1/auth/refresh/", {"refresh": login["session"]["refresh"]}, format="json")
    assert refreshed.status_code == 200, refreshed.content
    assert refreshed.json()["data"]["access"]


def test_refresh_with_garbage_is_401(db):
    res = APIClient().post("/api/v1/auth/refresh/", {"refresh": "garbage"}, format="json")

    assert res.status_code == 401


def test_me_requires_auth(tenant):
    res = APIClient().get("/api/v1/auth/me/", **host_for(tenant))

    assert res.status_code == 401
    assert res.json()["error"] == "Authentication required"


def test_invalid_bearer_token_is_treated_as_anonymous(tenant):
    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION="Bearer not.a.jwt")

    res = c.get("/api/v1/auth/me/", **host_for(tenant))

    assert res.status_code == 401


def test_logout(api_client):
    res = api_client.post("/api/v1/auth/logout/")

    assert res.status_code == 200
    assert res.json()["message"] == "Logged out successfully"


def test_suspended_tenant_member_is_unauthenticated(tenant, admin_user, client_for):
    tenant.status = "suspended"
    tenant.save()

    res = client_for(admin_user).get("/api/v1/auth/me/")

    assert res.status_code == 401
