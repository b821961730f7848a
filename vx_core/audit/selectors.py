# backend/vx_core/audit/selectors.py
from __future__ import annotations

from typing import Iterable
from uuid import UUID

from django.db.models import Q, QuerySet

from vx_core.audit.models import AuditEvent


def list_audit_events(
    *,
    tenant_id: UUID | None,
    entity_type: str | None = None,
    entity_id: UUID | None = None,
    event_code: str | None = None,
    actor_user_id: int | None = None,
) -> QuerySet[AuditEvent]:
    """tenant_id=None reads the platform / parent-portal trail."""
    qs = AuditEvent.objects.filter(tenant_id=tenant_id)

    if entity_type:
        qs = qs.filter(entity_type=entity_type)
    if entity_id:
        qs = qs.filter(entity_id=entity_id)
    if event_code:
        qs = qs.filter(event_code=event_code)
    if actor_user_id is not None:
        qs = qs.filter(actor_user_id=actor_user_id)

    return qs.order_by("-occurred_at")


def entity_activity(*, entity_type: str, entity_ids: Iterable[UUID], limit: int = 100) -> list[AuditEvent]:
    ids = list(entity_ids)
    if not ids:
        return []
    return list(
        AuditEvent.objects.filter(entity_type=entity_type, entity_id__in=ids).order_by("-occurred_at")[:limit]
    )


def recent_tenant_activity(*, tenant_id: UUID, limit: int = 10) -> list[AuditEvent]:
    return list(AuditEvent.objects.filter(tenant_id=tenant_id).order_by("-occurred_at")[:limit])


def activity_for(*, entities: Iterable[tuple[str, UUID]], limit: int = 10) -> list[AuditEvent]:
    """Merged trail of several (entity_type, entity_id) pairs, newest first."""
    q = Q()
    for entity_type, entity_id in entities:
        q |= Q(entity_type=entity_type, entity_id=entity_id)
    if not q:
        return []
    return list(AuditEvent.objects.filter(q).order_by("-occurred_at")[:limit])
