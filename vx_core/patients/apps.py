from django.apps import AppConfig


class PatientsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "vx_core.patients"

    def ready(self) -> None:
        from vx_core.common.resources import register_tenant_resource
        from vx_core.patients.models import Patient, PatientVaccination

        register_tenant_resource("/patients", Patient)
        register_tenant_resource("/vaccinations", PatientVaccination)
