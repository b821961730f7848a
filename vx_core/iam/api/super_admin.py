# backend/vx_core/iam/api/super_admin.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from vx_core.common.api.responses import success
from vx_core.common.context import ROLE_SUPER_ADMIN
from vx_core.iam.api.serializers import LoginRequestSerializer, SuperAdminInitSerializer
from vx_core.iam.services.accounts import AccountService, issue_tokens


class SuperAdminInitView(APIView):
    """One-shot bootstrap of the first platform operator."""
    permission_classes = [AllowAny]

    @extend_schema(request=SuperAdminInitSerializer, responses={201: dict}, tags=["Super Admin"])
    def post(self, request):
        ser = SuperAdminInitSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        admin = AccountService.init_super_admin(**ser.validated_data)
        return success(
            {"user": {"id": admin.user_id, "email": admin.user.email, "role": ROLE_SUPER_ADMIN}},
            message="System initialized",
            status_code=status.HTTP_201_CREATED,
        )


class SuperAdminLoginView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(request=LoginRequestSerializer, responses={200: dict}, tags=["Super Admin"])
    def post(self, request):
        ser = LoginRequestSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        user = AccountService.authenticate_super_admin(
            email=ser.validated_data["email"],
            password=ser.validated_data["password"],
        )
        return success(
            {
                "user": {"id": user.id, "email": user.email, "role": ROLE_SUPER_ADMIN},
                "session": issue_tokens(user),
            }
        )
