# backend/vx_core/tenants/api/views.py
from __future__ import annotations

from django.utils import timezone
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.views import APIView

from vx_core.audit.api.serializers import ActivitySerializer
from vx_core.common.api.pagination import paginate
from vx_core.common.api.params import route_uuid
from vx_core.common.api.responses import success
from vx_core.common.context import get_request_context
from vx_core.common.permissions import (
    RequireAuth,
    RequireSuperAdmin,
    TenantFeaturePermission,
    TenantSettingsPermission,
)
from vx_core.iam.api.serializers import TenantUserSerializer
from vx_core.iam.services.membership import list_tenant_users
from vx_core.tenants.api.serializers import (
    FeatureFlagsUpdateSerializer,
    FeatureSerializer,
    TenantCreateSerializer,
    TenantListQuerySerializer,
    TenantSerializer,
    TenantSettingsUpdateSerializer,
    TenantStatusUpdateSerializer,
)
from vx_core.tenants.models import Tenant
from vx_core.tenants.selectors import (
    get_tenant_or_none,
    is_feature_enabled,
    search_tenants,
    tenant_dashboard,
    tenant_features,
    tenant_stats,
)
from vx_core.tenants.services import FeatureService, TenantService


@extend_schema_view(
    list=extend_schema(
        tags=["Super Admin"],
        operation_id="v1_super_admin_tenants_list",
        parameters=[
            OpenApiParameter("status", str, required=False),
            OpenApiParameter("search", str, required=False),
        ],
        responses={200: TenantSerializer(many=True)},
    ),
    retrieve=extend_schema(tags=["Super Admin"], operation_id="v1_super_admin_tenants_retrieve", responses={200: TenantSerializer}),
    create=extend_schema(tags=["Super Admin"], operation_id="v1_super_admin_tenants_create", request=TenantCreateSerializer, responses={201: TenantSerializer}),
    set_status=extend_schema(tags=["Super Admin"], operation_id="v1_super_admin_tenants_set_status", request=TenantStatusUpdateSerializer, responses={200: TenantSerializer}),
    features=extend_schema(tags=["Super Admin"], request=FeatureFlagsUpdateSerializer, responses={200: FeatureSerializer(many=True)}),
)
class SuperAdminTenantViewSet(viewsets.ViewSet):
    """
    Platform-level tenant management.
    Routing is centralized in vx_core/api/urls.py.
    """

    permission_classes = [RequireSuperAdmin]

    # ✅ critical for drf-spectacular
    serializer_class = TenantSerializer
    queryset = Tenant.objects.none()

    def list(self, request):
        q = TenantListQuerySerializer(data=request.query_params)
        q.is_valid(raise_exception=True)
        qs = search_tenants(status=q.validated_data.get("status"), search=q.validated_data.get("search"))
        return paginate(request, qs, TenantSerializer)

    def retrieve(self, request, pk=None):
        tenant = get_tenant_or_none(tenant_id=route_uuid(pk, "Tenant not found"))
        if tenant is None:
            raise NotFound("Tenant not found")

        data = TenantSerializer(tenant).data
        data["users"] = TenantUserSerializer(list_tenant_users(tenant_id=tenant.id), many=True).data
        return success(data)

    def create(self, request):
        ser = TenantCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        ctx = get_request_context(request)
        tenant = TenantService.create_with_admin(actor_user_id=ctx.user.id, **ser.validated_data)
        return success(TenantSerializer(tenant).data, message="Tenant created", status_code=status.HTTP_201_CREATED)

    @action(detail=True, methods=["put"], url_path="status")
    def set_status(self, request, pk=None):
        ser = TenantStatusUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        ctx = get_request_context(request)
        tenant = TenantService.set_status(tenant_id=route_uuid(pk, "Tenant not found"), status=ser.validated_data["status"], actor_user_id=ctx.user.id)
        return success(TenantSerializer(tenant).data)

    @action(detail=True, methods=["get", "put"])
    def features(self, request, pk=None):
        tenant_id = route_uuid(pk, "Tenant not found")
        if request.method == "PUT":
            ser = FeatureFlagsUpdateSerializer(data=request.data)
            ser.is_valid(raise_exception=True)
            FeatureService.set_features(
                tenant_id=tenant_id,
                flags=ser.validated_data["features"],
                actor_user_id=get_request_context(request).user.id,
            )
        elif get_tenant_or_none(tenant_id=tenant_id) is None:
            raise NotFound("Tenant not found")

        return success(tenant_features(tenant_id=tenant_id))


class SuperAdminStatsView(APIView):
    permission_classes = [RequireSuperAdmin]

    @extend_schema(tags=["Super Admin"], responses={200: dict})
    def get(self, request):
        return success(tenant_stats())


class TenantDashboardView(APIView):
    """Landing numbers for the caller's clinic."""
    permission_classes = [RequireAuth]

    @extend_schema(tags=["Tenant"], responses={200: dict})
    def get(self, request):
        data = tenant_dashboard(tenant_id=request.auth.tenant_id, today=timezone.localdate())
        data["recent_activity"] = ActivitySerializer(data["recent_activity"], many=True).data
        return success(data)


class TenantSettingsView(APIView):
    permission_classes = [TenantSettingsPermission]

    @extend_schema(tags=["Tenant"], responses={200: dict})
    def get(self, request):
        tenant_id = request.auth.tenant_id
        tenant = get_tenant_or_none(tenant_id=tenant_id)
        return success(
            {
                "tenant": TenantSerializer(tenant).data,
                "features": [f for f in tenant_features(tenant_id=tenant_id) if f["enabled"]],
            }
        )

    @extend_schema(tags=["Tenant"], request=TenantSettingsUpdateSerializer, responses={200: TenantSerializer})
    def put(self, request):
        ser = TenantSettingsUpdateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        ctx = request.auth
        tenant = TenantService.update_settings(tenant_id=ctx.tenant_id, data=ser.validated_data, actor_user_id=ctx.user.id)
        return success(TenantSerializer(tenant).data, message="Settings updated")


class TenantFeaturesView(APIView):
    permission_classes = [TenantFeaturePermission]

    @extend_schema(tags=["Tenant"], responses={200: FeatureSerializer(many=True)})
    def get(self, request):
        return success(tenant_features(tenant_id=request.auth.tenant_id))


class TenantFeatureCheckView(APIView):
    permission_classes = [TenantFeaturePermission]

    @extend_schema(tags=["Tenant"], responses={200: dict})
    def get(self, request, code: str):
        enabled = is_feature_enabled(tenant_id=request.auth.tenant_id, code=code)
        if enabled is None:
            raise NotFound("Feature not found")
        return success({"feature": code, "enabled": enabled})
