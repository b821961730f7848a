# backend/vx_core/vaccinations/selectors.py
from __future__ import annotations

from datetime import date
from typing import Iterable
from uuid import UUID

from django.db.models import Q, QuerySet

from vx_core.vaccinations.models import (
    ScheduleStatus,
    VaccinationGuideline,
    VaccinationRecord,
    VaccinationScheduleEntry,
)


def guidelines_for(
    *,
    country_code: str,
    region_code: str | None = None,
    include_optional: bool = False,
    exclude_codes: Iterable[str] = (),
    only_codes: Iterable[str] | None = None,
) -> QuerySet[VaccinationGuideline]:
    qs = VaccinationGuideline.objects.filter(country_code=country_code.upper(), is_active=True)

    # "" applies to every region of the country; regional rows only when asked for
    if region_code:
        qs = qs.filter(Q(region_code="") | Q(region_code=region_code.upper()))
    else:
        qs = qs.filter(region_code="")
    if not include_optional:
        qs = qs.filter(is_mandatory=True)

    excluded = [c.upper() for c in exclude_codes if c]
    if excluded:
        qs = qs.exclude(vaccine_code__in=excluded)
    if only_codes is not None:
        qs = qs.filter(vaccine_code__in=[c.upper() for c in only_codes if c])

    return qs.order_by("recommended_age_months", "vaccine_code", "dose_number", "region_code")


def completed_doses(*, child_id: UUID) -> set[tuple[str, int]]:
    return set(
        VaccinationRecord.objects.filter(child_id=child_id).values_list("vaccine_code", "dose_number")
    )


def records_for_child(*, child_id: UUID) -> QuerySet[VaccinationRecord]:
    return VaccinationRecord.objects.filter(child_id=child_id).order_by("-vaccination_date", "vaccine_code")


def schedule_for_child(*, child_id: UUID) -> QuerySet[VaccinationScheduleEntry]:
    return VaccinationScheduleEntry.objects.filter(child_id=child_id).order_by("due_date", "vaccine_code", "dose_number")


def entries_due_between(*, child_id: UUID, start: date, end: date) -> QuerySet[VaccinationScheduleEntry]:
    return (
        schedule_for_child(child_id=child_id)
        .filter(due_date__gte=start, due_date__lte=end)
        .exclude(status=ScheduleStatus.COMPLETED)
    )


def active_guidelines() -> QuerySet[VaccinationGuideline]:
    return VaccinationGuideline.objects.filter(is_active=True).order_by(
        "country_code", "region_code", "recommended_age_months", "vaccine_code", "dose_number"
    )
