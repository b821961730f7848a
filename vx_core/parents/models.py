# backend/vx_core/parents/models.py
import uuid
from datetime import time

from django.conf import settings
from django.db import models

from vx_core.common.models import TimeStampedModel


class Parent(TimeStampedModel):
    """
    Parent-portal account. Independent of any clinic tenant.
    Credentials live on the linked auth user.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="parent_profile")

    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150)
    phone = models.CharField(max_length=32, blank=True)
    # ISO 3166-1 alpha-2, drives which guideline table applies
    country = models.CharField(max_length=2, default="US")

    email_verified = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "parents_parent"

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def email(self) -> str:
        return self.user.email


class Gender(models.TextChoices):
    MALE = "male", "Male"
    FEMALE = "female", "Female"
    OTHER = "other", "Other"


class Child(TimeStampedModel):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    parent = models.ForeignKey(Parent, on_delete=models.CASCADE, related_name="children")

    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150, blank=True)
    date_of_birth = models.DateField()
    gender = models.CharField(max_length=16, choices=Gender.choices, blank=True)
    blood_group = models.CharField(max_length=8, blank=True)

    allergies = models.JSONField(default=list, blank=True)
    medical_conditions = models.JSONField(default=list, blank=True)
    notes = models.TextField(blank=True)

    # soft delete
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "parents_child"
        indexes = [
            models.Index(fields=["parent", "is_active"], name="parents_child_parent_act_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


def default_reminder_days() -> int:
    return getattr(settings, "PARENT_REMINDER_DAYS_BEFORE", 7)


class NotificationPreference(TimeStampedModel):
    """How and when a parent wants to hear about upcoming doses."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    parent = models.OneToOneField(Parent, on_delete=models.CASCADE, related_name="notification_preferences")

    email_enabled = models.BooleanField(default=True)
    sms_enabled = models.BooleanField(default=False)
    push_enabled = models.BooleanField(default=True)

    reminder_days_before = models.PositiveSmallIntegerField(default=default_reminder_days)
    reminder_time = models.TimeField(default=time(9, 0))
    timezone = models.CharField(max_length=64, default="UTC")
    language = models.CharField(max_length=8, default="en")

    class Meta:
        db_table = "parents_notification_preference"

    def __str__(self) -> str:
        return f"Preferences of {self.parent_id}"
