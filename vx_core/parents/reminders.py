# backend/vx_core/parents/reminders.py
"""
Parent-facing reminders over stored schedule rows.

A reminder is an open schedule entry plus the day the parent should be
nudged about it (due date minus their `reminder_days_before`).
"""
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Iterable, Optional

from django.db import transaction
from django.utils import timezone

from vx_core.audit.services import AuditService, EventCode
from vx_core.vaccinations.generator import schedule_generator
from vx_core.vaccinations.models import ScheduleStatus, VaccinationRecord, VaccinationScheduleEntry
from vx_core.vaccinations.schedule import classify_status
from vx_core.vaccinations.services import VaccinationRecordService

logger = logging.getLogger(__name__)


def reminder_message(entry: VaccinationScheduleEntry) -> str:
    return f"Time for {entry.vaccine_name} (dose {entry.dose_number}) vaccination for {entry.child.first_name}."


def build_reminder(entry: VaccinationScheduleEntry, *, days_before: int, today: date) -> dict[str, Any]:
    # stored status goes stale as days pass; only "completed" is authoritative
    status = entry.status
    if status != ScheduleStatus.COMPLETED:
        status = classify_status(entry.due_date, today, schedule_generator.grace_days)

    return {
        "id": entry.id,
        "child_id": entry.child_id,
        "child_name": str(entry.child),
        "vaccine_code": entry.vaccine_code,
        "vaccine_name": entry.vaccine_name,
        "dose_number": entry.dose_number,
        "due_date": entry.due_date,
        "remind_on": entry.due_date - timedelta(days=days_before),
        "status": status,
        "message": reminder_message(entry),
    }


def build_reminders(
    entries: Iterable[VaccinationScheduleEntry], *, days_before: int, today: Optional[date] = None
) -> list[dict[str, Any]]:
    today = today or timezone.localdate()
    return [build_reminder(e, days_before=days_before, today=today) for e in entries]


class ReminderService:
    @staticmethod
    @transaction.atomic
    def complete(
        *,
        entry: VaccinationScheduleEntry,
        actor_user_id: int | None = None,
        vaccination_date: Optional[date] = None,
        **record_fields,
    ) -> VaccinationRecord:
        """
        Completing a reminder means the dose was given: it is recorded
        (409 when it already is) and the schedule row flips to completed.
        """
        record = VaccinationRecordService.record(
            child=entry.child,
            vaccine_code=entry.vaccine_code,
            vaccine_name=entry.vaccine_name,
            dose_number=entry.dose_number,
            vaccination_date=vaccination_date or timezone.localdate(),
            actor_user_id=actor_user_id,
            **record_fields,
        )

        AuditService.log(
            event_code=EventCode.REMINDER_COMPLETED,
            entity_type="Child",
            entity_id=entry.child_id,
            actor_user_id=actor_user_id,
            metadata={"entry_id": entry.id, "record_id": record.id},
        )
        logger.info("Reminder completed entry=%s child=%s", entry.id, entry.child_id)
        return record
