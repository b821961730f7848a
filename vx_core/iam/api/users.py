# backend/vx_core/iam/api/users.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.views import APIView

from vx_core.common.api.pagination import paginate
from vx_core.common.api.responses import success
from vx_core.common.permissions import ROLE_ADMIN, ROLE_DOCTOR, TenantRolePermission
from vx_core.iam.api.serializers import TenantUserCreateSerializer, TenantUserSerializer
from vx_core.iam.services.accounts import AccountService
from vx_core.iam.services.membership import list_tenant_users


class TenantUserPermission(TenantRolePermission):
    allowed_roles_per_action = {
        "list": {ROLE_ADMIN, ROLE_DOCTOR},
        "create": {ROLE_ADMIN},
    }


class TenantUsersView(APIView):
    """Staff directory of the caller's tenant."""
    permission_classes = [TenantUserPermission]

    @extend_schema(responses={200: TenantUserSerializer(many=True)}, tags=["IAM"])
    def get(self, request):
        return paginate(request, list_tenant_users(tenant_id=request.auth.tenant_id), TenantUserSerializer)

    @extend_schema(request=TenantUserCreateSerializer, responses={201: TenantUserSerializer}, tags=["IAM"])
    def post(self, request):
        ser = TenantUserCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        membership = AccountService.register_tenant_user(tenant=request.auth.tenant, **ser.validated_data)
        return success(TenantUserSerializer(membership).data, status_code=status.HTTP_201_CREATED)
