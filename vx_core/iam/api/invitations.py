# backend/vx_core/iam/api/invitations.py

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.views import APIView

from vx_core.common.api.responses import success
from vx_core.common.context import get_request_context
from vx_core.common.permissions import ROLE_ADMIN, RequireTenant, TenantRolePermission
from vx_core.iam.api.serializers import (
    InvitationAcceptSerializer,
    InvitationCreateSerializer,
    InvitationSerializer,
    context_payload,
)
from vx_core.iam.services.invitations import InvitationService


class InvitationPermission(TenantRolePermission):
    allowed_roles_per_action = {"create": {ROLE_ADMIN}}


class InviteTenantUserView(APIView):
    permission_classes = [InvitationPermission]

    @extend_schema(request=InvitationCreateSerializer, responses={201: InvitationSerializer}, tags=["IAM"])
    def post(self, request):
        ser = InvitationCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        invitation = InvitationService.invite(
            tenant=request.auth.tenant,
            invited_by=request.user,
            **ser.validated_data,
        )
        return success(
            InvitationSerializer(invitation).data,
            message="Invitation created",
            status_code=status.HTTP_201_CREATED,
        )


class AcceptInvitationView(APIView):
    """
    Public on the clinic host: the token is the credential.
    """
    permission_classes = [RequireTenant]

    @extend_schema(request=InvitationAcceptSerializer, responses={201: dict}, tags=["IAM"])
    def post(self, request):
        ser = InvitationAcceptSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        tenant = get_request_context(request).tenant
        membership = InvitationService.accept(
            tenant=tenant,
            token=ser.validated_data["invitation_token"],
            password=ser.validated_data["password"],
        )
        return success(
            context_payload(
                user=membership.user,
                tenant=tenant,
                role=membership.role,
                full_name=membership.full_name,
            ),
            message="Invitation accepted",
            status_code=status.HTTP_201_CREATED,
        )
