# backend/vx_core/audit/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import viewsets
from rest_framework.exceptions import ValidationError

from vx_core.audit.api.serializers import AuditEventSerializer
from vx_core.audit.models import AuditEvent
from vx_core.audit.selectors import list_audit_events
from vx_core.common.api.pagination import paginate
from vx_core.common.api.params import parse_uuid
from vx_core.common.permissions import AuditPermission


class AuditEventViewSet(viewsets.GenericViewSet):
    """
    Audit trail of the caller's clinic.
    """
    permission_classes = [AuditPermission]

    # ✅ Makes drf-spectacular happy:
    serializer_class = AuditEventSerializer
    queryset = AuditEvent.objects.none()

    @extend_schema(
        tags=["Audit"],
        responses={200: AuditEventSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="entity_type",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter by entity type (e.g. Patient, Tenant).",
            ),
            OpenApiParameter(
                name="entity_id",
                type=OpenApiTypes.UUID,
                location=OpenApiParameter.QUERY,
                required=False,
            ),
            OpenApiParameter(
                name="event_code",
                type=OpenApiTypes.STR,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Filter by event code (e.g. patient.created).",
            ),
            OpenApiParameter(
                name="actor_user_id",
                type=OpenApiTypes.INT,
                location=OpenApiParameter.QUERY,
                required=False,
            ),
        ],
    )
    def list(self, request):
        params = request.query_params

        entity_id = parse_uuid(params["entity_id"], "entity_id") if params.get("entity_id") else None

        actor_user_id = None
        if params.get("actor_user_id"):
            try:
                actor_user_id = int(params["actor_user_id"])
            except ValueError:
                raise ValidationError({"actor_user_id": "Invalid actor_user_id (int expected)"})

        qs = list_audit_events(
            tenant_id=request.auth.tenant_id,
            entity_type=params.get("entity_type") or None,
            entity_id=entity_id,
            event_code=params.get("event_code") or None,
            actor_user_id=actor_user_id,
        )
        return paginate(request, qs, AuditEventSerializer)
