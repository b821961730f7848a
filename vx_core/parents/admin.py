# backend/vx_core/parents/admin.py
from django.contrib import admin

from vx_core.parents.models import Child, NotificationPreference, Parent


@admin.register(Parent)
class ParentAdmin(admin.ModelAdmin):
    list_display = ("first_name", "last_name", "user", "country", "is_active", "created_at")
    list_filter = ("country", "is_active")
    search_fields = ("first_name", "last_name", "user__email", "phone")
    ordering = ("-created_at",)


@admin.register(Child)
class ChildAdmin(admin.ModelAdmin):
    list_display = ("first_name", "last_name", "date_of_birth", "parent", "is_active")
    list_filter = ("is_active", "gender")
    search_fields = ("first_name", "last_name", "parent__user__email")
    ordering = ("-created_at",)


@admin.register(NotificationPreference)
class NotificationPreferenceAdmin(admin.ModelAdmin):
    list_display = ("parent", "email_enabled", "sms_enabled", "push_enabled", "reminder_days_before")
    list_filter = ("email_enabled", "sms_enabled", "push_enabled")
    search_fields = ("parent__user__email",)
