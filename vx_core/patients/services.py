# backend/vx_core/patients/services.py
from __future__ import annotations

from uuid import UUID

from django.db import IntegrityError, transaction
from rest_framework.exceptions import NotFound

from vx_core.audit.services import AuditService, EventCode
from vx_core.common.api.exceptions import ConflictError
from vx_core.patients.models import Patient, PatientVaccination
from vx_core.patients.selectors import patient_has_vaccinations

PATIENT_FIELDS = {
    "full_name",
    "date_of_birth",
    "gender",
    "parent_name",
    "parent_phone",
    "parent_email",
    "address",
    "allergies",
    "medical_conditions",
    "emergency_contact",
}


class PatientService:
    @staticmethod
    @transaction.atomic
    def create_patient(*, tenant_id: UUID, actor_user_id: int | None, **data) -> Patient:
        fields = {k: v for k, v in data.items() if k in PATIENT_FIELDS}
        patient = Patient.objects.create(tenant_id=tenant_id, created_by_id=actor_user_id, **fields)

        AuditService.log_for(
            patient, EventCode.PATIENT_CREATED, actor_user_id=actor_user_id, metadata={"full_name": patient.full_name}
        )
        return patient

    @staticmethod
    @transaction.atomic
    def update_patient(
        *,
        tenant_id: UUID,
        actor_user_id: int | None,
        patient_id: UUID,
        data: dict,
    ) -> Patient:
        patient = Patient.objects.select_for_update().get(id=patient_id, tenant_id=tenant_id)

        updates = {k: v for k, v in (data or {}).items() if k in PATIENT_FIELDS}
        for k, v in updates.items():
            setattr(patient, k, v)
        patient.save()

        AuditService.log_for(
            patient,
            EventCode.PATIENT_UPDATED,
            actor_user_id=actor_user_id,
            metadata={"updated_fields": sorted(updates.keys())},
        )
        return patient

    @staticmethod
    @transaction.atomic
    def delete_patient(*, tenant_id: UUID, actor_user_id: int | None, patient_id: UUID) -> None:
        patient = Patient.objects.select_for_update().get(id=patient_id, tenant_id=tenant_id)

        if patient_has_vaccinations(patient_id=patient.id):
            raise ConflictError("Cannot delete patient with existing vaccination records")

        patient.delete()
        AuditService.log(
            event_code=EventCode.PATIENT_DELETED,
            entity_type="Patient",
            entity_id=patient_id,
            tenant_id=tenant_id,
            actor_user_id=actor_user_id,
        )


class PatientVaccinationService:
    @staticmethod
    @transaction.atomic
    def record_dose(
        *,
        tenant_id: UUID,
        actor_user_id: int | None,
        patient_id: UUID,
        vaccine_code: str,
        vaccine_name: str,
        administered_on,
        dose_number: int = 1,
        batch_number: str = "",
        notes: str = "",
    ) -> PatientVaccination:
        patient = Patient.objects.filter(id=patient_id, tenant_id=tenant_id).first()
        if patient is None:
            raise NotFound("Patient not found")

        try:
            with transaction.atomic():
                dose = PatientVaccination.objects.create(
                    tenant_id=tenant_id,
                    patient=patient,
                    vaccine_code=vaccine_code.strip().upper(),
                    vaccine_name=vaccine_name,
                    dose_number=dose_number,
                    administered_on=administered_on,
                    administered_by_id=actor_user_id,
                    batch_number=batch_number or "",
                    notes=notes or "",
                )
        except IntegrityError:
            raise ConflictError("This dose is already recorded for the patient")

        AuditService.log_for(
            dose,
            EventCode.PATIENT_VACCINATION_RECORDED,
            actor_user_id=actor_user_id,
            metadata={"patient_id": patient.id, "vaccine_code": dose.vaccine_code, "dose_number": dose_number},
        )
        return dose
