# backend/vx_core/patients/models.py
from django.conf import settings
from django.db import models
from vx_core.common.models import TenantScopedModel


class Patient(TenantScopedModel):
    """
    Child registered at a clinic (tenant-level record).
    """
    full_name = models.CharField(max_length=255)
    date_of_birth = models.DateField()
    gender = models.CharField(max_length=32, blank=True)

    parent_name = models.CharField(max_length=255, blank=True)
    parent_phone = models.CharField(max_length=32, blank=True)
    parent_email = models.EmailField(blank=True)
    address = models.TextField(blank=True)

    allergies = models.JSONField(default=list, blank=True)
    medical_conditions = models.JSONField(default=list, blank=True)
    emergency_contact = models.JSONField(default=dict, blank=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="patients_created",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "patients_patient"
        indexes = [
            models.Index(fields=["tenant_id", "full_name"], name="patients_tenant_name_idx"),
            models.Index(fields=["tenant_id", "parent_phone"], name="patients_tenant_phone_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.full_name} ({self.date_of_birth})"


class PatientVaccination(TenantScopedModel):
    """
    A dose administered at the clinic.
    """
    patient = models.ForeignKey(Patient, on_delete=models.PROTECT, related_name="vaccinations")

    vaccine_code = models.CharField(max_length=32)
    vaccine_name = models.CharField(max_length=255)
    dose_number = models.PositiveSmallIntegerField(default=1)
    administered_on = models.DateField()

    administered_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="vaccinations_administered",
        null=True,
        blank=True,
    )
    batch_number = models.CharField(max_length=64, blank=True)
    notes = models.TextField(blank=True)

    class Meta:
        db_table = "patients_patient_vaccination"
        constraints = [
            models.UniqueConstraint(
                fields=["patient", "vaccine_code", "dose_number"],
                name="uq_patient_vaccine_dose",
            ),
        ]
        indexes = [
            models.Index(fields=["tenant_id", "administered_on"], name="patients_vx_tenant_date_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.vaccine_code} #{self.dose_number} ({self.administered_on})"
