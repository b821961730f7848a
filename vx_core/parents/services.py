# backend/vx_core/parents/services.py
from __future__ import annotations

import logging

from django.contrib.auth import authenticate
from django.db import transaction
from rest_framework.exceptions import AuthenticationFailed

from vx_core.audit.services import AuditService, EventCode
from vx_core.iam.services.accounts import INVALID_CREDENTIALS_MSG, create_login_user
from vx_core.parents.models import Child, NotificationPreference, Parent

logger = logging.getLogger(__name__)

PROFILE_FIELDS = {"first_name", "last_name", "phone", "country"}
PREFERENCE_FIELDS = {
    "email_enabled",
    "sms_enabled",
    "push_enabled",
    "reminder_days_before",
    "reminder_time",
    "timezone",
    "language",
}
CHILD_FIELDS = {
    "first_name",
    "last_name",
    "date_of_birth",
    "gender",
    "blood_group",
    "allergies",
    "medical_conditions",
    "notes",
}


class ParentService:
    @staticmethod
    @transaction.atomic
    def register(
        *,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        phone: str = "",
        country: str = "US",
    ) -> Parent:
        user = create_login_user(email=email, password=password, full_name=f"{first_name} {last_name}")
        parent = Parent.objects.create(
            user=user,
            first_name=first_name,
            last_name=last_name,
            phone=phone or "",
            country=(country or "US").upper(),
        )
        NotificationPreference.objects.create(parent=parent)
        AuditService.log_for(parent, EventCode.PARENT_REGISTERED, actor_user_id=user.id)
        logger.info("Parent registered id=%s", parent.id)
        return parent

    @staticmethod
    def authenticate(*, email: str, password: str) -> Parent:
        user = authenticate(username=email.strip().lower(), password=password)
        if user is None:
            raise AuthenticationFailed(INVALID_CREDENTIALS_MSG)

        parent = Parent.objects.select_related("user").filter(user=user, is_active=True).first()
        if parent is None:
            raise AuthenticationFailed(INVALID_CREDENTIALS_MSG)
        return parent

    @staticmethod
    @transaction.atomic
    def update_profile(*, parent: Parent, data: dict) -> Parent:
        updates = {k: v for k, v in (data or {}).items() if k in PROFILE_FIELDS}
        if "country" in updates:
            updates["country"] = updates["country"].upper()
        for k, v in updates.items():
            setattr(parent, k, v)
        parent.save()
        return parent


class ChildService:
    @staticmethod
    @transaction.atomic
    def create_child(*, parent: Parent, **data) -> Child:
        fields = {k: v for k, v in data.items() if k in CHILD_FIELDS}
        child = Child.objects.create(parent=parent, **fields)

        AuditService.log(
            event_code=EventCode.CHILD_CREATED,
            entity_type="Child",
            entity_id=child.id,
            actor_user_id=parent.user_id,
            metadata={"date_of_birth": child.date_of_birth},
        )
        return child

    @staticmethod
    @transaction.atomic
    def update_child(*, child: Child, data: dict) -> Child:
        updates = {k: v for k, v in (data or {}).items() if k in CHILD_FIELDS}
        for k, v in updates.items():
            setattr(child, k, v)
        child.save()

        AuditService.log_for(
            child, EventCode.CHILD_UPDATED, actor_user_id=child.parent.user_id, metadata={"updated_fields": sorted(updates)}
        )
        return child

    @staticmethod
    @transaction.atomic
    def deactivate_child(*, child: Child) -> Child:
        child.is_active = False
        child.save(update_fields=["is_active", "updated_at"])

        AuditService.log_for(child, EventCode.CHILD_DEACTIVATED, actor_user_id=child.parent.user_id)
        return child


class NotificationPreferenceService:
    @staticmethod
    def get_for(parent: Parent) -> NotificationPreference:
        # parents registered before preferences existed get defaults on first read
        prefs, _ = NotificationPreference.objects.get_or_create(parent=parent)
        return prefs

    @staticmethod
    @transaction.atomic
    def update(*, parent: Parent, data: dict) -> NotificationPreference:
        prefs = NotificationPreferenceService.get_for(parent)
        updates = {k: v for k, v in (data or {}).items() if k in PREFERENCE_FIELDS}
        for k, v in updates.items():
            setattr(prefs, k, v)
        prefs.save()

        AuditService.log_for(
            parent,
            EventCode.PARENT_PREFERENCES_UPDATED,
            actor_user_id=parent.user_id,
            metadata={"updated_fields": sorted(updates)},
        )
        return prefs
