# backend/vx_core/tenants/admin.py
from django.contrib import admin

from vx_core.tenants.models import Tenant, TenantFeature


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    list_display = ("name", "subdomain", "status", "created_at", "updated_at")
    list_filter = ("status", "created_at")
    search_fields = ("name", "subdomain", "business_name")
    ordering = ("-created_at",)
    readonly_fields = ("id", "created_at", "updated_at")

    fieldsets = (
        (None, {"fields": ("id", "name", "subdomain", "status")}),
        ("Business", {"fields": ("business_name", "business_email", "business_phone", "business_address")}),
        ("Locale", {"fields": ("timezone", "locale")}),
        ("Metadata", {"fields": ("metadata",)}),
        ("Timestamps", {"fields": ("created_at", "updated_at")}),
    )


@admin.register(TenantFeature)
class TenantFeatureAdmin(admin.ModelAdmin):
    list_display = ("tenant", "code", "is_enabled", "updated_at")
    list_filter = ("code", "is_enabled")
    search_fields = ("tenant__name", "tenant__subdomain")
