# backend/vx_core/audit/services.py
from __future__ import annotations

import json
from typing import Any, Optional
from uuid import UUID

from django.core.serializers.json import DjangoJSONEncoder
from django.db import models, transaction

from vx_core.audit.models import AuditEvent


class EventCode(models.TextChoices):
    TENANT_CREATED = "tenant.created"
    TENANT_STATUS_CHANGED = "tenant.status_changed"
    TENANT_SETTINGS_UPDATED = "tenant.settings_updated"
    TENANT_FEATURES_UPDATED = "tenant.features_updated"
    INVITATION_CREATED = "invitation.created"
    INVITATION_ACCEPTED = "invitation.accepted"
    PATIENT_CREATED = "patient.created"
    PATIENT_UPDATED = "patient.updated"
    PATIENT_DELETED = "patient.deleted"
    PATIENT_VACCINATION_RECORDED = "patient.vaccination_recorded"
    PARENT_REGISTERED = "parent.registered"
    PARENT_PREFERENCES_UPDATED = "parent.preferences_updated"
    CHILD_CREATED = "child.created"
    CHILD_UPDATED = "child.updated"
    CHILD_DEACTIVATED = "child.deactivated"
    SCHEDULE_GENERATED = "schedule.generated"
    VACCINATION_RECORDED = "vaccination.recorded"
    REMINDER_COMPLETED = "reminder.completed"


def _jsonable(metadata: Optional[dict]) -> dict[str, Any]:
    # UUIDs, dates and Decimals become strings before they reach the JSON column
    return json.loads(json.dumps(metadata or {}, cls=DjangoJSONEncoder))


class AuditService:
    """
    Append-only writer for AuditEvent.

    Every service that changes clinic, parent or schedule state records the
    change here inside its own transaction. Rows are never updated.
    """

    @staticmethod
    @transaction.atomic
    def log(
        *,
        event_code: str,
        entity_type: str,
        entity_id: UUID,
        tenant_id: UUID | None = None,
        actor_user_id: int | None = None,
        metadata: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent.objects.create(
            tenant_id=tenant_id,
            event_code=str(event_code),
            entity_type=entity_type,
            entity_id=entity_id,
            actor_user_id=actor_user_id,
            metadata=_jsonable(metadata),
        )

    @staticmethod
    def log_for(
        instance: models.Model,
        event_code: str,
        *,
        actor_user_id: int | None = None,
        metadata: Optional[dict] = None,
    ) -> AuditEvent:
        """Entity type is the model name; tenant comes from a `tenant_id` column when there is one."""
        return AuditService.log(
            event_code=event_code,
            entity_type=instance._meta.object_name,
            entity_id=instance.pk,
            tenant_id=getattr(instance, "tenant_id", None),
            actor_user_id=actor_user_id,
            metadata=metadata,
        )
