# backend/vx_core/iam/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from vx_core.iam.models import TenantRole, TenantUser


class RegisterRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    full_name = serializers.CharField(max_length=255)


class LoginRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)


class RefreshRequestSerializer(serializers.Serializer):
    refresh = serializers.CharField()


class TenantUserCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    full_name = serializers.CharField(max_length=255)
    role = serializers.ChoiceField(choices=TenantRole.choices)


class SuperAdminInitSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    full_name = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")


class TenantUserSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True)
    email = serializers.EmailField(source="user.email", read_only=True)

    class Meta:
        model = TenantUser
        fields = ["id", "user_id", "email", "full_name", "role", "is_active", "created_at"]
        read_only_fields = fields


class TenantMiniSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()
    subdomain = serializers.CharField()


def context_payload(*, user, tenant=None, role=None, full_name: str = "") -> dict:
    """The {user, tenant} block returned by login and /auth/me/."""
    return {
        "user": {
            "id": user.id,
            "email": user.email,
            "full_name": full_name or user.get_full_name(),
            "role": role,
        },
        "tenant": TenantMiniSerializer(tenant).data if tenant is not None else None,
    }


class InvitationCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    full_name = serializers.CharField(max_length=255)
    role = serializers.ChoiceField(choices=TenantRole.choices, default=TenantRole.PATIENT)


class InvitationSerializer(serializers.Serializer):
    invitation_token = serializers.CharField(source="token")
    email = serializers.EmailField()
    full_name = serializers.CharField()
    role = serializers.CharField()
    expires_at = serializers.DateTimeField()


class InvitationAcceptSerializer(serializers.Serializer):
    invitation_token = serializers.CharField(max_length=64)
    password = serializers.CharField(min_length=8, write_only=True)
