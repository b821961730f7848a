# backend/vx_core/patients/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Q, QuerySet

from vx_core.patients.models import Patient, PatientVaccination


def get_patient(*, tenant_id: UUID, patient_id: UUID) -> Patient:
    return Patient.objects.get(id=patient_id, tenant_id=tenant_id)


def search_patients(*, tenant_id: UUID, q: str | None = None) -> QuerySet[Patient]:
    qs = Patient.objects.filter(tenant_id=tenant_id)

    qv = (q or "").strip()
    if qv:
        qs = qs.filter(
            Q(full_name__icontains=qv)
            | Q(parent_name__icontains=qv)
            | Q(parent_phone__icontains=qv)
            | Q(parent_email__icontains=qv)
        )

    return qs.order_by("-created_at")


def patient_has_vaccinations(*, patient_id: UUID) -> bool:
    return PatientVaccination.objects.filter(patient_id=patient_id).exists()


def list_vaccinations(*, tenant_id: UUID, patient_id: UUID | None = None) -> QuerySet[PatientVaccination]:
    qs = PatientVaccination.objects.select_related("patient").filter(tenant_id=tenant_id)
    if patient_id:
        qs = qs.filter(patient_id=patient_id)
    return qs.order_by("-administered_on", "vaccine_code", "dose_number")


def get_vaccination(*, tenant_id: UUID, vaccination_id: UUID) -> PatientVaccination:
    return PatientVaccination.objects.select_related("patient").get(id=vaccination_id, tenant_id=tenant_id)
