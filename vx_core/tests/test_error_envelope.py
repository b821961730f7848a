# backend/vx_core/tests/test_error_envelope.py
import pytest
from django.test import RequestFactory
from rest_framework.exceptions import NotFound, ValidationError

from vx_core.common.api.exceptions import ConflictError, api_exception_handler, build_error_envelope


def test_envelope_shape():
    req = RequestFactory().get("/api/v1/patients/")

    body = build_error_envelope(request=req, code="conflict", message="Nope", details="x must be positive")

    assert body == {
        "success": False,
        "error": "Nope",
        "details": "x must be positive",
        "code": "conflict",
        "request_id": req.request_id,
    }


def test_request_id_is_stable_per_request():
    req = RequestFactory().get("/")

    first = build_error_envelope(request=req, code="a", message="a")
    second = build_error_envelope(request=req, code="b", message="b")

    assert first["request_id"] == second["request_id"]


def test_unhandled_exception_is_generic_500():
    req = RequestFactory().get("/api/v1/patients/")

    resp = api_exception_handler(RuntimeError("secret stack detail"), {"request": req, "view": None})

    assert resp.status_code == 500
    assert resp.data["error"] == "Internal server error."
    assert resp.data["code"] == "server_error"
    assert "secret stack detail" not in str(resp.data)


def test_api_exceptions_keep_their_status():
    req = RequestFactory().get("/")

    conflict = api_exception_handler(ConflictError("Taken"), {"request": req})
    missing = api_exception_handler(NotFound("Gone"), {"request": req})

    assert (conflict.status_code, conflict.data["code"], conflict.data["error"]) == (409, "conflict", "Taken")
    assert (missing.status_code, missing.data["code"], missing.data["error"]) == (404, "not_found", "Gone")
    assert missing.data["details"] is None


def test_validation_details_are_flattened_to_text():
    req = RequestFactory().get("/")
    exc = ValidationError({"email": ["Enter a valid email address."], "non_field_errors": ["Passwords differ."]})

    resp = api_exception_handler(exc, {"request": req})

    assert resp.status_code == 400
    assert resp.data["error"] == "Missing or invalid fields: email."
    assert resp.data["details"] == "email: Enter a valid email address.; Passwords differ."


@pytest.mark.django_db
def test_validation_error_over_http_names_fields(api_client):
    res = api_client.post("/api/v1/patients/", {}, format="json")

    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["code"] == "validation_error"
    assert body["error"] == "Missing or invalid fields: full_name, date_of_birth."
    assert body["request_id"]


@pytest.mark.django_db
def test_auth_errors_over_http_are_401(tenant, client_for):
    res = client_for(tenant=tenant).get("/api/v1/patients/")

    assert res.status_code == 401
    assert res.json()["code"] == "not_authenticated"
