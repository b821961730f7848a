# backend/vx_core/patients/admin.py
from django.contrib import admin

from vx_core.patients.models import Patient, PatientVaccination


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):
    list_display = (
        "full_name",
        "date_of_birth",
        "parent_name",
        "parent_phone",
        "tenant_id",
        "created_at",
    )
    list_filter = ("tenant_id",)
    search_fields = ("full_name", "parent_name", "parent_phone", "parent_email")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("-created_at",)


@admin.register(PatientVaccination)
class PatientVaccinationAdmin(admin.ModelAdmin):
    list_display = ("patient", "vaccine_code", "dose_number", "administered_on", "tenant_id")
    list_filter = ("tenant_id", "vaccine_code")
    search_fields = ("vaccine_code", "vaccine_name", "batch_number", "patient__full_name")
    ordering = ("-administered_on",)
