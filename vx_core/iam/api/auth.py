# backend/vx_core/iam/api/auth.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView
from rest_framework_simplejwt.serializers import TokenRefreshSerializer

from vx_core.common.api.responses import success
from vx_core.common.context import get_request_context
from vx_core.common.permissions import RequireAuth, RequireTenant
from vx_core.iam.api.serializers import (
    LoginRequestSerializer,
    RefreshRequestSerializer,
    RegisterRequestSerializer,
    context_payload,
)
from vx_core.iam.models import TenantRole
from vx_core.iam.services.accounts import AccountService, issue_tokens


class RegisterView(APIView):
    """
    Self-registration on the tenant resolved from the host.
    Always creates a `patient`; staff are added by admins via /tenant/users/.
    """
    permission_classes = [RequireTenant]

    @extend_schema(request=RegisterRequestSerializer, responses={201: dict}, tags=["IAM"])
    def post(self, request):
        ser = RegisterRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        tenant = get_request_context(request).tenant
        membership = AccountService.register_tenant_user(
            tenant=tenant,
            email=ser.validated_data["email"],
            password=ser.validated_data["password"],
            full_name=ser.validated_data["full_name"],
            role=TenantRole.PATIENT,
        )
        return success(
            context_payload(
                user=membership.user,
                tenant=tenant,
                role=membership.role,
                full_name=membership.full_name,
            ),
            message="User registered successfully",
            status_code=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    permission_classes = [RequireTenant]

    @extend_schema(request=LoginRequestSerializer, responses={200: dict}, tags=["IAM"])
    def post(self, request):
        ser = LoginRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        membership = AccountService.authenticate_tenant_user(
            tenant=get_request_context(request).tenant,
            email=ser.validated_data["email"],
            password=ser.validated_data["password"],
        )
        data = context_payload(
            user=membership.user,
            tenant=membership.tenant,
            role=membership.role,
            full_name=membership.full_name,
        )
        data["session"] = issue_tokens(membership.user)
        return success(data)


class RefreshView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(request=RefreshRequestSerializer, responses={200: dict}, tags=["IAM"])
    def post(self, request):
        ser = TokenRefreshSerializer(data={"refresh": request.data.get("refresh")})
        ser.is_valid(raise_exception=True)

        return success(
            {
                "access": ser.validated_data["access"],
                "refresh": ser.validated_data.get("refresh", request.data.get("refresh")),
            }
        )


class LogoutView(APIView):
    """
    Tokens are stateless; the client drops them.
    """
    permission_classes = [RequireAuth]

    @extend_schema(request=None, responses={200: dict}, tags=["IAM"])
    def post(self, request):
        return success(message="Logged out successfully")
