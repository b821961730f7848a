# backend/vx_core/iam/api/me.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework.views import APIView

from vx_core.common.api.responses import success
from vx_core.common.permissions import RequireAuth
from vx_core.iam.api.serializers import context_payload


class MeView(APIView):
    permission_classes = [RequireAuth]

    @extend_schema(responses={200: dict}, tags=["IAM"])
    def get(self, request):
        ctx = request.auth
        membership = getattr(ctx.user, "tenant_membership", None)
        return success(
            context_payload(
                user=ctx.user,
                tenant=ctx.tenant,
                role=ctx.role,
                full_name=getattr(membership, "full_name", ""),
            )
        )
