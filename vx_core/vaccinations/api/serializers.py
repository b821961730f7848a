# backend/vx_core/vaccinations/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from vx_core.vaccinations.models import VaccinationGuideline, VaccinationRecord, VaccinationScheduleEntry


class GuidelineSerializer(serializers.ModelSerializer):
    class Meta:
        model = VaccinationGuideline
        fields = [
            "id",
            "country_code",
            "region_code",
            "vaccine_code",
            "vaccine_name",
            "recommended_age_months",
            "min_age_months",
            "max_age_months",
            "dose_number",
            "total_doses",
            "is_mandatory",
            "contraindications",
            "notes",
        ]
        read_only_fields = fields


class ScheduleEntrySerializer(serializers.ModelSerializer):
    class Meta:
        model = VaccinationScheduleEntry
        fields = [
            "id",
            "vaccine_code",
            "vaccine_name",
            "dose_number",
            "total_doses",
            "due_date",
            "status",
            "is_mandatory",
            "notes",
            "updated_at",
        ]
        read_only_fields = fields


class VaccinationRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = VaccinationRecord
        fields = [
            "id",
            "vaccine_code",
            "vaccine_name",
            "dose_number",
            "vaccination_date",
            "administered_by",
            "location",
            "batch_number",
            "notes",
            "created_at",
        ]
        read_only_fields = fields


class VaccinationRecordCreateSerializer(serializers.Serializer):
    vaccine_code = serializers.CharField(max_length=32)
    vaccine_name = serializers.CharField(max_length=255)
    dose_number = serializers.IntegerField(min_value=1, required=False, default=1)
    vaccination_date = serializers.DateField()
    administered_by = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    location = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    batch_number = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class ScheduleOptionsSerializer(serializers.Serializer):
    country_code = serializers.CharField(min_length=2, max_length=2, required=False)
    region_code = serializers.CharField(max_length=16, required=False, allow_blank=True)
    include_optional = serializers.BooleanField(required=False, default=False)
    exclude_vaccines = serializers.ListField(child=serializers.CharField(max_length=32), required=False, default=list)


class CatchUpRequestSerializer(ScheduleOptionsSerializer):
    missed_vaccines = serializers.ListField(child=serializers.CharField(max_length=32), allow_empty=False)


class ScheduleItemSerializer(serializers.Serializer):
    vaccine_code = serializers.CharField()
    vaccine_name = serializers.CharField()
    dose_number = serializers.IntegerField()
    total_doses = serializers.IntegerField()
    due_date = serializers.DateField()
    status = serializers.CharField()
    is_mandatory = serializers.BooleanField()
    notes = serializers.CharField(allow_blank=True)
