# backend/vx_core/iam/admin.py
from __future__ import annotations

from django.contrib import admin

from vx_core.iam.models import SuperAdmin, TenantInvitation, TenantUser


@admin.register(TenantUser)
class TenantUserAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "tenant", "role", "is_active", "created_at")
    list_filter = ("tenant", "role", "is_active")
    search_fields = ("user__username", "user__email", "full_name")
    autocomplete_fields = ("user", "tenant")
    ordering = ("-created_at",)


@admin.register(SuperAdmin)
class SuperAdminAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("user__username", "user__email")
    ordering = ("-created_at",)


@admin.register(TenantInvitation)
class TenantInvitationAdmin(admin.ModelAdmin):
    list_display = ("email", "tenant", "role", "status", "expires_at", "created_at")
    list_filter = ("status", "role", "tenant")
    search_fields = ("email", "full_name")
    readonly_fields = ("token",)
    ordering = ("-created_at",)
