# backend/vx_core/vaccinations/admin.py
from django.contrib import admin

from vx_core.vaccinations.models import VaccinationGuideline, VaccinationRecord, VaccinationScheduleEntry


@admin.register(VaccinationGuideline)
class VaccinationGuidelineAdmin(admin.ModelAdmin):
    list_display = (
        "country_code",
        "region_code",
        "vaccine_code",
        "dose_number",
        "recommended_age_months",
        "is_mandatory",
        "is_active",
    )
    list_filter = ("country_code", "is_mandatory", "is_active")
    search_fields = ("vaccine_code", "vaccine_name")
    ordering = ("country_code", "region_code", "recommended_age_months", "vaccine_code", "dose_number")


@admin.register(VaccinationScheduleEntry)
class VaccinationScheduleEntryAdmin(admin.ModelAdmin):
    list_display = ("child", "vaccine_code", "dose_number", "due_date", "status")
    list_filter = ("status", "vaccine_code")
    ordering = ("due_date",)


@admin.register(VaccinationRecord)
class VaccinationRecordAdmin(admin.ModelAdmin):
    list_display = ("child", "vaccine_code", "dose_number", "vaccination_date", "location")
    list_filter = ("vaccine_code",)
    ordering = ("-vaccination_date",)
