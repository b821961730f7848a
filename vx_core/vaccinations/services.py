# backend/vx_core/vaccinations/services.py
from __future__ import annotations

import logging
from typing import Iterable

from django.db import IntegrityError, transaction

from vx_core.audit.services import AuditService, EventCode
from vx_core.common.api.exceptions import ConflictError
from vx_core.vaccinations.generator import schedule_generator
from vx_core.vaccinations.models import VaccinationGuideline, VaccinationRecord

logger = logging.getLogger(__name__)

GUIDELINE_KEY = ("country_code", "region_code", "vaccine_code", "dose_number")


class VaccinationRecordService:
    @staticmethod
    @transaction.atomic
    def record(
        *,
        child,
        vaccine_code: str,
        vaccine_name: str,
        dose_number: int,
        vaccination_date,
        administered_by: str = "",
        location: str = "",
        batch_number: str = "",
        notes: str = "",
        actor_user_id: int | None = None,
    ) -> VaccinationRecord:
        code = vaccine_code.strip().upper()
        try:
            with transaction.atomic():
                record = VaccinationRecord.objects.create(
                    child=child,
                    vaccine_code=code,
                    vaccine_name=vaccine_name,
                    dose_number=dose_number,
                    vaccination_date=vaccination_date,
                    administered_by=administered_by or "",
                    location=location or "",
                    batch_number=batch_number or "",
                    notes=notes or "",
                )
        except IntegrityError:
            raise ConflictError("This dose is already recorded for the child")

        schedule_generator.mark_completed(child, vaccine_code=code, dose_number=dose_number)

        AuditService.log(
            event_code=EventCode.VACCINATION_RECORDED,
            entity_type="Child",
            entity_id=child.id,
            actor_user_id=actor_user_id,
            metadata={"vaccine_code": code, "dose_number": dose_number, "record_id": record.id},
        )
        return record


class GuidelineService:
    @staticmethod
    @transaction.atomic
    def upsert_many(rows: Iterable[dict]) -> tuple[int, int]:
        """
        Insert or refresh guideline rows keyed by (country, region, code, dose).
        Returns (created, updated).
        """
        created = updated = 0
        for row in rows:
            data = dict(row)
            data["country_code"] = data["country_code"].upper()
            data["region_code"] = (data.get("region_code") or "").upper()
            data["vaccine_code"] = data["vaccine_code"].upper()

            lookup = {k: data.pop(k) for k in GUIDELINE_KEY}
            _, was_created = VaccinationGuideline.objects.update_or_create(**lookup, defaults=data)
            if was_created:
                created += 1
            else:
                updated += 1

        logger.info("Guidelines upserted created=%d updated=%d", created, updated)
        return created, updated
