# backend/vx_core/tests/test_tenant_isolation.py
import uuid

import pytest

from vx_core.common.resources import model_for_path, register_tenant_resource, registered_tenant_resources
from vx_core.patients.models import Patient, PatientVaccination
from vx_core.tenants.models import Tenant

pytestmark = pytest.mark.django_db


@pytest.fixture
def foreign_patient(other_tenant):
    return Patient.objects.create(tenant_id=other_tenant.id, full_name="Not Yours", date_of_birth="2022-06-01")


def test_foreign_patient_read_is_403(api_client, foreign_patient):
    res = api_client.get(f"/api/v1/patients/{foreign_patient.id}/")

    assert res.status_code == 403
    body = res.json()
    assert body["error"] == "Access denied to this resource"
    assert "Not Yours" not in res.content.decode("utf-8")


def test_foreign_patient_write_is_403_and_untouched(api_client, foreign_patient):
    res = api_client.patch(f"/api/v1/patients/{foreign_patient.id}/", {"full_name": "Hijacked"}, format="json")

    assert res.status_code == 403
    foreign_patient.refresh_from_db()
    assert foreign_patient.full_name == "Not Yours"


def test_foreign_patient_delete_is_403(api_client, foreign_patient):
    assert api_client.delete(f"/api/v1/patients/{foreign_patient.id}/").status_code == 403
    assert Patient.objects.filter(id=foreign_patient.id).exists()


def test_unknown_patient_is_404(api_client):
    res = api_client.get(f"/api/v1/patients/{uuid.uuid4()}/")

    assert res.status_code == 404
    assert res.json()["error"] == "Resource not found"


def test_malformed_patient_id_is_404(api_client):
    assert api_client.get("/api/v1/patients/not-a-uuid/").status_code == 404


def test_list_never_leaks_other_tenants(api_client, foreign_patient, tenant):
    Patient.objects.create(tenant_id=tenant.id, full_name="Mine", date_of_birth="2022-06-01")

    results = api_client.get("/api/v1/patients/").json()["data"]["results"]

    assert [p["full_name"] for p in results] == ["Mine"]


def test_host_of_other_tenant_does_not_switch_scope(admin_user, other_tenant, foreign_patient, client_for):
    c = client_for(admin_user, other_tenant)

    assert c.get(f"/api/v1/patients/{foreign_patient.id}/").status_code == 403
    assert c.get("/api/v1/patients/").json()["data"]["results"] == []


def test_registry_maps_paths_to_models():
    assert registered_tenant_resources()["/patients"] is Patient
    assert model_for_path("/api/v1/patients/abc/") is Patient
    assert model_for_path("/api/v1/vaccinations/abc/") is PatientVaccination
    assert model_for_path("/api/v1/parent/children/abc/") is None
    assert model_for_path("/api/v1/patientsx/abc/") is None


def test_registry_rejects_models_without_tenant_column():
    with pytest.raises(ValueError):
        register_tenant_resource("/tenants", Tenant)
