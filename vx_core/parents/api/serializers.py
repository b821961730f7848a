# backend/vx_core/parents/api/serializers.py
from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from rest_framework import serializers

from vx_core.parents.models import Child, Gender, NotificationPreference, Parent


class ParentRegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    country = serializers.CharField(min_length=2, max_length=2, required=False, default="US")


class ParentLoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class ParentProfileUpdateSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=150, required=False)
    last_name = serializers.CharField(max_length=150, required=False)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    country = serializers.CharField(min_length=2, max_length=2, required=False)


class ParentSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(source="user.email", read_only=True)

    class Meta:
        model = Parent
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "phone",
            "country",
            "email_verified",
            "created_at",
        ]
        read_only_fields = fields


class ChildCreateSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=150)
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True, default="")
    date_of_birth = serializers.DateField()
    gender = serializers.ChoiceField(choices=Gender.choices, required=False, allow_blank=True, default="")
    blood_group = serializers.CharField(max_length=8, required=False, allow_blank=True, default="")
    allergies = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    medical_conditions = serializers.ListField(child=serializers.CharField(), required=False, default=list)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class ChildUpdateSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=150, required=False)
    last_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    date_of_birth = serializers.DateField(required=False)
    gender = serializers.ChoiceField(choices=Gender.choices, required=False, allow_blank=True)
    blood_group = serializers.CharField(max_length=8, required=False, allow_blank=True)
    allergies = serializers.ListField(child=serializers.CharField(), required=False)
    medical_conditions = serializers.ListField(child=serializers.CharField(), required=False)
    notes = serializers.CharField(required=False, allow_blank=True)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class ChildSerializer(serializers.ModelSerializer):
    class Meta:
        model = Child
        fields = [
            "id",
            "first_name",
            "last_name",
            "date_of_birth",
            "gender",
            "blood_group",
            "allergies",
            "medical_conditions",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class NotificationPreferenceSerializer(serializers.ModelSerializer):
    class Meta:
        model = NotificationPreference
        fields = [
            "email_enabled",
            "sms_enabled",
            "push_enabled",
            "reminder_days_before",
            "reminder_time",
            "timezone",
            "language",
            "updated_at",
        ]
        read_only_fields = fields


class NotificationPreferenceUpdateSerializer(serializers.Serializer):
    email_enabled = serializers.BooleanField(required=False)
    sms_enabled = serializers.BooleanField(required=False)
    push_enabled = serializers.BooleanField(required=False)
    reminder_days_before = serializers.IntegerField(min_value=0, max_value=60, required=False)
    reminder_time = serializers.TimeField(required=False)
    timezone = serializers.CharField(max_length=64, required=False)
    language = serializers.CharField(max_length=8, required=False)

    def validate_timezone(self, value):
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise serializers.ValidationError("Unknown time zone.")
        return value

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class ReminderSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    child_id = serializers.UUIDField()
    child_name = serializers.CharField()
    vaccine_code = serializers.CharField()
    vaccine_name = serializers.CharField()
    dose_number = serializers.IntegerField()
    due_date = serializers.DateField()
    remind_on = serializers.DateField()
    status = serializers.CharField()
    message = serializers.CharField()


class ReminderCompleteSerializer(serializers.Serializer):
    vaccination_date = serializers.DateField(required=False)
    administered_by = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    location = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    batch_number = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")
    notes = serializers.CharField(required=False, allow_blank=True, default="")
