# backend/vx_core/vaccinations/models.py
import uuid

from django.db import models

from vx_core.common.models import TimeStampedModel


class VaccinationGuideline(TimeStampedModel):
    """
    One dose of one vaccine in a country's (optionally region's) schedule.
    region_code "" means the row applies to every region of the country.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    country_code = models.CharField(max_length=2, db_index=True)
    region_code = models.CharField(max_length=16, blank=True, default="")

    vaccine_code = models.CharField(max_length=32)
    vaccine_name = models.CharField(max_length=255)

    recommended_age_months = models.PositiveSmallIntegerField()
    min_age_months = models.PositiveSmallIntegerField(default=0)
    max_age_months = models.PositiveSmallIntegerField(null=True, blank=True)

    dose_number = models.PositiveSmallIntegerField(default=1)
    total_doses = models.PositiveSmallIntegerField(default=1)

    is_mandatory = models.BooleanField(default=True)
    contraindications = models.JSONField(default=list, blank=True)
    notes = models.TextField(blank=True)

    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "vaccinations_guideline"
        constraints = [
            models.UniqueConstraint(
                fields=["country_code", "region_code", "vaccine_code", "dose_number"],
                name="uq_guideline_country_region_code_dose",
            ),
        ]
        indexes = [
            models.Index(fields=["country_code", "is_active", "recommended_age_months"], name="vx_guideline_lookup_idx"),
        ]

    def __str__(self) -> str:
        region = f"/{self.region_code}" if self.region_code else ""
        return f"{self.country_code}{region} {self.vaccine_code} #{self.dose_number}"


class ScheduleStatus(models.TextChoices):
    UPCOMING = "upcoming", "Upcoming"
    DUE = "due", "Due"
    OVERDUE = "overdue", "Overdue"
    COMPLETED = "completed", "Completed"


class VaccinationScheduleEntry(TimeStampedModel):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    child = models.ForeignKey("parents.Child", on_delete=models.CASCADE, related_name="schedule_entries")

    vaccine_code = models.CharField(max_length=32)
    vaccine_name = models.CharField(max_length=255)
    dose_number = models.PositiveSmallIntegerField(default=1)
    total_doses = models.PositiveSmallIntegerField(default=1)

    due_date = models.DateField(db_index=True)
    status = models.CharField(
        max_length=16,
        choices=ScheduleStatus.choices,
        default=ScheduleStatus.UPCOMING,
        db_index=True,
    )
    is_mandatory = models.BooleanField(default=True)
    notes = models.TextField(blank=True)

    class Meta:
        db_table = "vaccinations_schedule_entry"
        constraints = [
            models.UniqueConstraint(
                fields=["child", "vaccine_code", "dose_number"],
                name="uq_schedule_child_code_dose",
            ),
        ]
        indexes = [
            models.Index(fields=["child", "due_date"], name="vx_schedule_child_due_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.vaccine_code} #{self.dose_number} due {self.due_date} ({self.status})"


class VaccinationRecord(TimeStampedModel):
    """
    A dose the child actually received.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    child = models.ForeignKey("parents.Child", on_delete=models.CASCADE, related_name="vaccination_records")

    vaccine_code = models.CharField(max_length=32)
    vaccine_name = models.CharField(max_length=255)
    dose_number = models.PositiveSmallIntegerField(default=1)
    vaccination_date = models.DateField()

    administered_by = models.CharField(max_length=255, blank=True)
    location = models.CharField(max_length=255, blank=True)
    batch_number = models.CharField(max_length=64, blank=True)
    notes = models.TextField(blank=True)

    class Meta:
        db_table = "vaccinations_record"
        constraints = [
            models.UniqueConstraint(
                fields=["child", "vaccine_code", "dose_number"],
                name="uq_record_child_code_dose",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.vaccine_code} #{self.dose_number} on {self.vaccination_date}"
