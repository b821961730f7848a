# backend/vx_core/vaccinations/generator.py
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, replace
from datetime import date, timedelta
from typing import Iterable, Optional

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import APIException

from vx_core.audit.services import AuditService, EventCode
from vx_core.vaccinations.models import ScheduleStatus, VaccinationScheduleEntry
from vx_core.vaccinations.schedule import add_months, age_in_months, classify_status, has_contraindication
from vx_core.vaccinations.selectors import completed_doses, entries_due_between, guidelines_for

logger = logging.getLogger(__name__)


class ScheduleGenerationError(APIException):
    """
    Generic 500 for any store/computation failure while building or saving a
    schedule. Details go to the log, never to the caller.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Failed to generate vaccination schedule"
    default_code = "schedule_generation_failed"


@dataclass(frozen=True)
class ScheduleOptions:
    country_code: str = "US"
    region_code: Optional[str] = None
    include_optional: bool = False
    exclude_vaccines: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def for_child(cls, child, **overrides) -> "ScheduleOptions":
        """Defaults to the parent's country; explicit overrides win."""
        country = overrides.pop("country_code", None) or getattr(child.parent, "country", "") or getattr(
            settings, "VACCINATION_DEFAULT_COUNTRY", "US"
        )
        exclude = tuple(overrides.pop("exclude_vaccines", None) or ())
        return cls(country_code=country.upper(), exclude_vaccines=exclude, **overrides)


@dataclass(frozen=True)
class ScheduleItem:
    vaccine_code: str
    vaccine_name: str
    dose_number: int
    total_doses: int
    due_date: date
    status: str
    is_mandatory: bool
    notes: str = ""

    @property
    def key(self) -> tuple[str, int]:
        return self.vaccine_code, self.dose_number

    def as_dict(self) -> dict:
        data = asdict(self)
        data["due_date"] = self.due_date.isoformat()
        return data


class ScheduleGenerator:
    """
    Stateless; one module-level instance (`schedule_generator`) is shared.
    `today` is injectable on every operation.
    """

    STORE_ERRORS = (DatabaseError, ValueError, TypeError)

    @property
    def grace_days(self) -> int:
        return int(getattr(settings, "VACCINATION_DUE_GRACE_DAYS", 30))

    @property
    def catch_up_interval_days(self) -> int:
        return int(getattr(settings, "VACCINATION_CATCH_UP_INTERVAL_DAYS", 28))

    def _build(
        self,
        child,
        options: ScheduleOptions,
        *,
        today: date,
        only_codes: Iterable[str] | None = None,
    ) -> list[ScheduleItem]:
        rows = guidelines_for(
            country_code=options.country_code,
            region_code=options.region_code,
            include_optional=options.include_optional,
            exclude_codes=options.exclude_vaccines,
            only_codes=only_codes,
        )
        age = age_in_months(child.date_of_birth, today)

        # (code, dose) -> (is_regional, item); a region-specific row beats an all-region row
        picked: dict[tuple[str, int], tuple[bool, ScheduleItem]] = {}
        for g in rows:
            if g.max_age_months is not None and age > g.max_age_months:
                continue
            if has_contraindication(child.allergies, child.medical_conditions, g.contraindications):
                continue

            due = add_months(child.date_of_birth, g.recommended_age_months)
            item = ScheduleItem(
                vaccine_code=g.vaccine_code,
                vaccine_name=g.vaccine_name,
                dose_number=g.dose_number,
                total_doses=g.total_doses,
                due_date=due,
                status=classify_status(due, today, self.grace_days),
                is_mandatory=g.is_mandatory,
                notes=g.notes,
            )
            regional = bool(g.region_code)
            current = picked.get(item.key)
            if current is None or (regional and not current[0]):
                picked[item.key] = (regional, item)

        done = completed_doses(child_id=child.id)
        items = [item for key, (_, item) in picked.items() if key not in done]
        items.sort(key=lambda i: (i.due_date, i.vaccine_code, i.dose_number))
        return items

    def generate_schedule(
        self,
        child,
        options: ScheduleOptions | None = None,
        *,
        today: date | None = None,
    ) -> list[ScheduleItem]:
        options = options or ScheduleOptions.for_child(child)
        today = today or timezone.localdate()
        try:
            items = self._build(child, options, today=today)
        except self.STORE_ERRORS as exc:
            logger.exception("Schedule generation failed child=%s country=%s", child.id, options.country_code)
            raise ScheduleGenerationError() from exc

        logger.info("Generated %d schedule entries child=%s country=%s", len(items), child.id, options.country_code)
        return items

    def generate_catch_up_schedule(
        self,
        child,
        missed_codes: Iterable[str],
        options: ScheduleOptions | None = None,
        *,
        today: date | None = None,
    ) -> list[ScheduleItem]:
        """
        Outstanding doses of the missed vaccines on a compressed timeline:
        first dose today, each next dose of the same vaccine a fixed interval
        later. Everything is `due`.
        """
        codes = [c.strip().upper() for c in missed_codes if c and c.strip()]
        if not codes:
            return []

        options = options or ScheduleOptions.for_child(child)
        today = today or timezone.localdate()
        try:
            base = self._build(child, options, today=today, only_codes=codes)
        except self.STORE_ERRORS as exc:
            logger.exception("Catch-up generation failed child=%s", child.id)
            raise ScheduleGenerationError() from exc

        by_code: dict[str, list[ScheduleItem]] = {}
        for item in base:
            by_code.setdefault(item.vaccine_code, []).append(item)

        interval = timedelta(days=self.catch_up_interval_days)
        result: list[ScheduleItem] = []
        for doses in by_code.values():
            for idx, item in enumerate(sorted(doses, key=lambda i: i.dose_number)):
                result.append(replace(item, due_date=today + interval * idx, status=ScheduleStatus.DUE))

        result.sort(key=lambda i: (i.due_date, i.vaccine_code, i.dose_number))
        return result

    def save_schedule(self, child, items: Iterable[ScheduleItem], *, actor_user_id: int | None = None) -> int:
        """
        Upsert keyed by (child, vaccine_code, dose_number); re-running with the
        same items never creates duplicates.
        """
        items = list(items)
        try:
            with transaction.atomic():
                for item in items:
                    VaccinationScheduleEntry.objects.update_or_create(
                        child=child,
                        vaccine_code=item.vaccine_code,
                        dose_number=item.dose_number,
                        defaults={
                            "vaccine_name": item.vaccine_name,
                            "total_doses": item.total_doses,
                            "due_date": item.due_date,
                            "status": item.status,
                            "is_mandatory": item.is_mandatory,
                            "notes": item.notes,
                        },
                    )
                AuditService.log(
                    event_code=EventCode.SCHEDULE_GENERATED,
                    entity_type="Child",
                    entity_id=child.id,
                    actor_user_id=actor_user_id,
                    metadata={"entries": len(items)},
                )
        except DatabaseError as exc:
            logger.exception("Saving schedule failed child=%s entries=%d", child.id, len(items))
            raise ScheduleGenerationError("Failed to save vaccination schedule") from exc

        return len(items)

    def upcoming_vaccinations(self, child, *, days_ahead: int | None = None, today: date | None = None):
        today = today or timezone.localdate()
        if days_ahead is None:
            days_ahead = int(getattr(settings, "VACCINATION_UPCOMING_WINDOW_DAYS", 30))
        return list(entries_due_between(child_id=child.id, start=today, end=today + timedelta(days=days_ahead)))

    def mark_completed(self, child, *, vaccine_code: str, dose_number: int) -> int:
        return VaccinationScheduleEntry.objects.filter(
            child=child,
            vaccine_code=vaccine_code,
            dose_number=dose_number,
        ).update(status=ScheduleStatus.COMPLETED, updated_at=timezone.now())


schedule_generator = ScheduleGenerator()
