# backend/vx_core/iam/tests/test_super_admin_auth.py
import pytest
from rest_framework.test import APIClient

from vx_core.conftest import PASSWORD
from vx_core.iam.models import SuperAdmin

pytestmark = pytest.mark.django_db


def test_init_creates_first_super_admin():
    res = APIClient().post(
        "/api/v1/super-admin/init/",
        {"email": "ops@vaxclinic.test", "password": PASSWORD, "full_name": "Ops"},
        format="json",
    )

    assert res.status_code == 201, res.content
    assert res.json()["data"]["user"]["role"] == "super_admin"
    assert SuperAdmin.objects.count() == 1


def test_init_twice_is_409(super_admin_user):
    res = APIClient().post(
        "/api/v1/super-admin/init/",
        {"email": "second@vaxclinic.test", "password": PASSWORD},
        format="json",
    )

    assert res.status_code == 409
    assert res.json()["error"] == "System already initialized"


def test_login_ok(super_admin_user):
    res = APIClient().post(
        "/api/v1/super-admin/login/",
        {"email": super_admin_user.email, "password": PASSWORD},
        format="json",
    )

    assert res.status_code == 200
    assert res.json()["data"]["session"]["access"]


def test_login_bad_password_is_401(super_admin_user):
    res = APIClient().post(
        "/api/v1/super-admin/login/",
        {"email": super_admin_user.email, "password": "wrong-password"},
        format="json",
    )

    assert res.status_code == 401


def test_login_as_tenant_user_is_403(admin_user):
    res = APIClient().post(
        "/api/v1/super-admin/login/",
        {"email": admin_user.email, "password": PASSWORD},
        format="json",
    )

    assert res.status_code == 403
    assert res.json()["error"] == "Super admin access required"
