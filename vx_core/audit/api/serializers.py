# backend/vx_core/audit/api/serializers.py
from rest_framework import serializers

from vx_core.audit.models import AuditEvent


class AuditEventSerializer(serializers.ModelSerializer):
    timestamp = serializers.DateTimeField(source="occurred_at", read_only=True)
    actor_user_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = AuditEvent
        fields = [
            "id",
            "tenant_id",
            "entity_type",
            "entity_id",
            "event_code",
            "actor_user_id",
            "timestamp",
            "metadata",
        ]
        read_only_fields = fields


class ActivitySerializer(serializers.ModelSerializer):
    """Compact feed row for dashboards and the child activity tab."""

    class Meta:
        model = AuditEvent
        fields = ["event_code", "entity_type", "entity_id", "occurred_at", "metadata"]
        read_only_fields = fields
