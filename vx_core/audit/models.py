# backend/vx_core/audit/models.py
import uuid

from django.conf import settings
from django.db import models


class AuditEvent(models.Model):
    """
    Immutable audit record.
    tenant_id is empty for platform-level and parent-portal events.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    tenant_id = models.UUIDField(null=True, blank=True, db_index=True)

    event_code = models.CharField(max_length=128, db_index=True)  # e.g. "schedule.generated"
    entity_type = models.CharField(max_length=128, db_index=True)  # e.g. "Child"
    entity_id = models.UUIDField(db_index=True)

    actor_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="audit_events",
        null=True,
        blank=True,
    )

    occurred_at = models.DateTimeField(auto_now_add=True, db_index=True)
    metadata = models.JSONField(default=dict)

    class Meta:
        db_table = "audit_audit_event"
        indexes = [
            models.Index(fields=["tenant_id", "occurred_at"], name="audit_tenant_occurred_idx"),
            models.Index(fields=["entity_type", "entity_id"], name="audit_entity_idx"),
            models.Index(fields=["tenant_id", "event_code"], name="audit_tenant_event_idx"),
        ]
