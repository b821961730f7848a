from django.apps import AppConfig


class VaccinationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "vx_core.vaccinations"
