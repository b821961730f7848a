# backend/vx_core/tenants/api/serializers.py
from __future__ import annotations

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from rest_framework import serializers

from vx_core.tenants.models import Tenant, TenantStatus


class TenantSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tenant
        fields = [
            "id",
            "name",
            "subdomain",
            "status",
            "business_name",
            "business_email",
            "business_phone",
            "business_address",
            "timezone",
            "locale",
            "metadata",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class TenantCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    subdomain = serializers.SlugField(max_length=63)
    admin_email = serializers.EmailField()
    admin_password = serializers.CharField(min_length=8, write_only=True)
    admin_name = serializers.CharField(max_length=255)

    business_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    business_email = serializers.EmailField(required=False, allow_blank=True, default="")
    business_phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    business_address = serializers.CharField(required=False, allow_blank=True, default="")
    timezone = serializers.CharField(max_length=64, required=False, default="UTC")
    locale = serializers.CharField(max_length=16, required=False, default="en")
    metadata = serializers.JSONField(required=False, default=dict)


class TenantStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TenantStatus.choices)


class TenantListQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TenantStatus.choices, required=False)
    search = serializers.CharField(required=False, allow_blank=True)


class TenantSettingsUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    business_name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    business_email = serializers.EmailField(required=False, allow_blank=True)
    business_phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    business_address = serializers.CharField(required=False, allow_blank=True)
    timezone = serializers.CharField(max_length=64, required=False)
    locale = serializers.CharField(max_length=16, required=False)
    metadata = serializers.JSONField(required=False)

    def validate_timezone(self, value):
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise serializers.ValidationError("Unknown time zone.")
        return value

    def validate_metadata(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("Expected an object.")
        return value

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("At least one field is required.")
        return attrs


class FeatureSerializer(serializers.Serializer):
    code = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField()
    category = serializers.CharField()
    enabled = serializers.BooleanField()


class FeatureFlagsUpdateSerializer(serializers.Serializer):
    features = serializers.DictField(child=serializers.BooleanField(), allow_empty=False)
