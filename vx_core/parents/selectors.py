# backend/vx_core/parents/selectors.py
from __future__ import annotations

from typing import Optional
from uuid import UUID

from django.db.models import QuerySet

from vx_core.parents.models import Child
from vx_core.vaccinations.models import ScheduleStatus, VaccinationScheduleEntry


def children_for_parent(*, parent_id: UUID) -> QuerySet[Child]:
    return Child.objects.filter(parent_id=parent_id, is_active=True).order_by("date_of_birth", "first_name")


def get_child_for_parent_or_none(*, parent_id: UUID, child_id: UUID) -> Optional[Child]:
    """Another parent's child is indistinguishable from a missing one."""
    return (
        Child.objects.select_related("parent")
        .filter(id=child_id, parent_id=parent_id, is_active=True)
        .first()
    )


def open_entries_for_parent(*, parent_id: UUID) -> QuerySet[VaccinationScheduleEntry]:
    """Not-yet-completed schedule rows across the parent's active children."""
    return (
        VaccinationScheduleEntry.objects.select_related("child")
        .filter(child__parent_id=parent_id, child__is_active=True)
        .exclude(status=ScheduleStatus.COMPLETED)
        .order_by("due_date", "vaccine_code", "dose_number")
    )


def get_entry_for_parent_or_none(*, parent_id: UUID, entry_id: UUID) -> Optional[VaccinationScheduleEntry]:
    return (
        VaccinationScheduleEntry.objects.select_related("child", "child__parent")
        .filter(id=entry_id, child__parent_id=parent_id, child__is_active=True)
        .first()
    )
