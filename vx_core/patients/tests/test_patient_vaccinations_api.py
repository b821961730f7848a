# backend/vx_core/patients/tests/test_patient_vaccinations_api.py
import pytest

from vx_core.patients.models import Patient

pytestmark = pytest.mark.django_db

URL = "/api/v1/vaccinations/"


@pytest.fixture
def patient(tenant):
    return Patient.objects.create(tenant_id=tenant.id, full_name="Ava Stone", date_of_birth="2023-02-01")


def _dose(client, patient, **overrides):
    payload = {
        "patient_id": str(patient.id),
        "vaccine_code": "dtap",
        "vaccine_name": "DTaP",
        "dose_number": 1,
        "administered_on": "2023-04-01",
    }
    payload.update(overrides)
    return client.post(URL, payload, format="json")


def test_nurse_records_dose(tenant, patient, nurse_user, client_for):
    res = _dose(client_for(nurse_user, tenant), patient, batch_number="LOT-42")

    assert res.status_code == 201, res.content
    data = res.json()["data"]
    assert data["vaccine_code"] == "DTAP"
    assert data["patient_name"] == "Ava Stone"
    assert data["administered_by_id"] == nurse_user.id


def test_duplicate_dose_is_409(api_client, patient):
    assert _dose(api_client, patient).status_code == 201

    res = _dose(api_client, patient)

    assert res.status_code == 409


def test_dose_for_foreign_patient_is_404(api_client, other_tenant):
    stranger = Patient.objects.create(tenant_id=other_tenant.id, full_name="Elsewhere", date_of_birth="2022-01-01")

    res = _dose(api_client, stranger)

    assert res.status_code == 404


def test_list_filters_by_patient(api_client, tenant, patient):
    other = Patient.objects.create(tenant_id=tenant.id, full_name="Ben Rivers", date_of_birth="2023-05-05")
    _dose(api_client, patient)
    _dose(api_client, other)

    res = api_client.get(URL, {"patient_id": str(patient.id)})

    results = res.json()["data"]["results"]
    assert [r["patient_id"] for r in results] == [str(patient.id)]


def test_list_rejects_malformed_patient_id(api_client):
    res = api_client.get(URL, {"patient_id": "nope"})

    assert res.status_code == 400
    assert "patient_id" in res.json()["error"]


def test_retrieve_dose(api_client, patient):
    dose_id = _dose(api_client, patient).json()["data"]["id"]

    res = api_client.get(f"{URL}{dose_id}/")

    assert res.status_code == 200
    assert res.json()["data"]["id"] == dose_id


def test_patient_role_cannot_see_clinic_doses(tenant, patient_user, client_for):
    res = client_for(patient_user, tenant).get(URL)

    assert res.status_code == 403
