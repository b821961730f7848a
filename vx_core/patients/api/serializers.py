# backend/vx_core/patients/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from vx_core.patients.models import Patient, PatientVaccination


class PatientCreateSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=255)
    date_of_birth = serializers.DateField()
    gender = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    parent_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    parent_phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    parent_email = serializers.EmailField(required=False, allow_blank=True, default="")
    address = serializers.CharField(required=False, allow_blank=True, default="")
    allergies = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    medical_conditions = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    emergency_contact = serializers.DictField(required=False, default=dict)


class PatientUpdateSerializer(serializers.Serializer):
    """
    Partial update contract (PUT/PATCH).
    """
    full_name = serializers.CharField(max_length=255, required=False)
    date_of_birth = serializers.DateField(required=False)
    gender = serializers.CharField(max_length=32, required=False, allow_blank=True)
    parent_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    parent_phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    parent_email = serializers.EmailField(required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    allergies = serializers.ListField(child=serializers.CharField(), required=False)
    medical_conditions = serializers.ListField(child=serializers.CharField(), required=False)
    emergency_contact = serializers.DictField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class PatientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Patient
        fields = [
            "id",
            "tenant_id",
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
            "created_by_id",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class PatientVaccinationCreateSerializer(serializers.Serializer):
    patient_id = serializers.UUIDField()
    vaccine_code = serializers.CharField(max_length=32)
    vaccine_name = serializers.CharField(max_length=255)
    dose_number = serializers.IntegerField(min_value=1, required=False, default=1)
    administered_on = serializers.DateField()
    batch_number = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class PatientVaccinationSerializer(serializers.ModelSerializer):
    patient_id = serializers.UUIDField(read_only=True)
    patient_name = serializers.CharField(source="patient.full_name", read_only=True)

    class Meta:
        model = PatientVaccination
        fields = [
            "id",
            "tenant_id",
            "patient_id",
            "patient_name",
            "vaccine_code",
            "vaccine_name",
            "dose_number",
            "administered_on",
            "administered_by_id",
            "batch_number",
            "notes",
            "created_at",
        ]
        read_only_fields = fields
