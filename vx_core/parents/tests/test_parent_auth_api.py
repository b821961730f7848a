# backend/vx_core/parents/tests/test_parent_auth_api.py
from datetime import datetime, timedelta, timezone

import jwt
import pytest
from rest_framework.test import APIClient

from vx_core.audit.models import AuditEvent
from vx_core.conftest import PASSWORD, bearer
from vx_core.parents.models import NotificationPreference, Parent
from vx_core.parents.tokens import decode_parent_token, issue_parent_token

pytestmark = pytest.mark.django_db

PREFS_URL = "/api/v1/parent/auth/notification-preferences/"


def test_register_returns_parent_token():
    res = APIClient().post(
        "/api/v1/parent/auth/register/",
        {
            "email": "Sam@Example.com",
            "password": PASSWORD,
            "first_name": "Sam",
            "last_name": "Reed",
            "country": "ca",
        },
        format="json",
    )

    assert res.status_code == 201, res.content
    data = res.json()["data"]
    assert data["parent"]["email"] == "sam@example.com"
    assert data["parent"]["country"] == "CA"

    claims = decode_parent_token(data["token"])
    assert claims["userType"] == "parent"
    assert claims["role"] == "parent"
    assert claims["userId"] == data["parent"]["id"]
    assert claims["exp"] - claims["iat"] == int(timedelta(days=7).total_seconds())


def test_register_missing_fields_is_400():
    res = APIClient().post("/api/v1/parent/auth/register/", {"email": "x@example.com"}, format="json")

    assert res.status_code == 400
    body = res.json()
    assert body["code"] == "validation_error"
    assert "password" in body["error"]
    assert "first_name" in body["error"]


def test_register_existing_email_is_409(parent):
    res = APIClient().post(
        "/api/v1/parent/auth/register/",
        {"email": "maria@example.com", "password": PASSWORD, "first_name": "M", "last_name": "L"},
        format="json",
    )

    assert res.status_code == 409
    assert Parent.objects.count() == 1


def test_login_ok(parent):
    res = APIClient().post(
        "/api/v1/parent/auth/login/",
        {"email": "maria@example.com", "password": PASSWORD},
        format="json",
    )

    assert res.status_code == 200, res.content
    assert decode_parent_token(res.json()["data"]["token"])["userId"] == str(parent.id)


def test_login_bad_password_is_401(parent):
    res = APIClient().post(
        "/api/v1/parent/auth/login/",
        {"email": "maria@example.com", "password": "wrong-password"},
        format="json",
    )

    assert res.status_code == 401
    assert res.json()["error"] == "Invalid credentials"


def test_login_inactive_parent_is_401(parent):
    parent.is_active = False
    parent.save()

    res = APIClient().post(
        "/api/v1/parent/auth/login/",
        {"email": "maria@example.com", "password": PASSWORD},
        format="json",
    )

    assert res.status_code == 401


def test_clinic_staff_cannot_log_in_as_parent(admin_user):
    res = APIClient().post(
        "/api/v1/parent/auth/login/",
        {"email": admin_user.email, "password": PASSWORD},
        format="json",
    )

    assert res.status_code == 401


def test_profile_get_and_put(parent_client):
    res = parent_client.get("/api/v1/parent/auth/profile/")
    assert res.status_code == 200
    assert res.json()["data"]["first_name"] == "Maria"

    res = parent_client.put("/api/v1/parent/auth/profile/", {"phone": "+1 555 0100", "country": "gb"}, format="json")
    assert res.status_code == 200, res.content
    assert res.json()["data"]["phone"] == "+1 555 0100"
    assert res.json()["data"]["country"] == "GB"


def test_profile_requires_token():
    res = APIClient().get("/api/v1/parent/auth/profile/")

    assert res.status_code == 401
    assert res.json()["success"] is False


def test_expired_token_is_401(parent, settings):
    settings.PARENT_TOKEN_LIFETIME = timedelta(seconds=-1)
    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_parent_token(parent)}")

    res = c.get("/api/v1/parent/auth/profile/")

    assert res.status_code == 401


def test_non_parent_user_type_is_403(parent, settings):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"userId": str(parent.id), "userType": "clinic", "iat": now, "exp": now + timedelta(hours=1)},
        settings.PARENT_JWT_SECRET,
        algorithm="HS256",
    )
    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

    res = c.get("/api/v1/parent/auth/profile/")

    assert res.status_code == 403


def test_clinic_access_token_is_rejected(admin_user):
    c = APIClient()
    c.credentials(**bearer(admin_user))

    res = c.get("/api/v1/parent/auth/profile/")

    assert res.status_code == 401


def test_deactivated_parent_token_is_401(parent, parent_client):
    parent.is_active = False
    parent.save()

    res = parent_client.get("/api/v1/parent/auth/profile/")

    assert res.status_code == 401
    assert res.json()["error"] == "Parent not found."


def test_registration_creates_default_preferences(parent_client):
    res = parent_client.get(PREFS_URL)

    assert res.status_code == 200, res.content
    data = res.json()["data"]
    assert data["email_enabled"] is True
    assert data["sms_enabled"] is False
    assert data["reminder_days_before"] == 7
    assert data["reminder_time"] == "09:00:00"
    assert data["timezone"] == "UTC"


def test_preferences_are_created_on_first_read(django_user_model):
    user = django_user_model.objects.create_user(username="old@example.com", email="old@example.com", password=PASSWORD)
    parent = Parent.objects.create(user=user, first_name="Old", last_name="Timer")
    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_parent_token(parent)}")

    res = c.get(PREFS_URL)

    assert res.status_code == 200
    assert NotificationPreference.objects.filter(parent=parent).count() == 1


def test_update_preferences(parent_client, parent):
    res = parent_client.put(
        PREFS_URL,
        {"sms_enabled": True, "reminder_days_before": 3, "timezone": "Europe/Madrid"},
        format="json",
    )

    assert res.status_code == 200, res.content
    assert res.json()["message"] == "Preferences updated"
    prefs = NotificationPreference.objects.get(parent=parent)
    assert prefs.sms_enabled is True
    assert prefs.reminder_days_before == 3
    assert prefs.timezone == "Europe/Madrid"
    assert prefs.email_enabled is True

    event = AuditEvent.objects.get(event_code="parent.preferences_updated", entity_id=parent.id)
    assert event.metadata == {"updated_fields": ["reminder_days_before", "sms_enabled", "timezone"]}


def test_update_preferences_rejects_unknown_timezone(parent_client):
    res = parent_client.put(PREFS_URL, {"timezone": "Nowhere/Land"}, format="json")

    assert res.status_code == 400
    assert res.json()["details"] == "timezone: Unknown time zone."


def test_preferences_require_parent_token(db):
    assert APIClient().get(PREFS_URL).status_code == 401
