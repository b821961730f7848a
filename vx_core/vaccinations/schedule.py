# backend/vx_core/vaccinations/schedule.py
"""
Pure date/status/contraindication rules of the schedule generator.

No ORM access here; everything takes plain values so the rules can be
exercised directly.
"""
from __future__ import annotations

from datetime import date
from typing import Iterable

from dateutil.relativedelta import relativedelta

from vx_core.vaccinations.models import ScheduleStatus

DEFAULT_GRACE_DAYS = 30


def add_months(d: date, months: int) -> date:
    """Calendar-month addition; the day is clamped to the target month's end (Jan 31 + 1 -> Feb 28/29)."""
    return d + relativedelta(months=months)


def age_in_months(birth: date, today: date) -> int:
    """Whole months elapsed; a partial month does not count. Never negative."""
    months = (today.year - birth.year) * 12 + (today.month - birth.month)
    if today.day < birth.day:
        months -= 1
    return max(0, months)


def classify_status(due: date, today: date, grace_days: int = DEFAULT_GRACE_DAYS) -> str:
    days_past_due = (today - due).days
    if days_past_due <= 0:
        return ScheduleStatus.UPCOMING
    if days_past_due <= grace_days:
        return ScheduleStatus.DUE
    return ScheduleStatus.OVERDUE


def _tokens(values: Iterable[str] | None) -> list[str]:
    return [str(v).strip().lower() for v in (values or []) if v is not None and str(v).strip()]


def has_contraindication(
    allergies: Iterable[str] | None,
    conditions: Iterable[str] | None,
    contraindications: Iterable[str] | None,
) -> bool:
    """
    True when any allergy/condition and any contraindication contain one
    another, case-insensitively ("Penicillin" vs "Penicillin allergy").
    """
    child_terms = _tokens(allergies) + _tokens(conditions)
    if not child_terms:
        return False

    for contra in _tokens(contraindications):
        for term in child_terms:
            if term in contra or contra in term:
                return True
    return False
