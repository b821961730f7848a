# backend/vx_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from vx_core.audit.api.views import AuditEventViewSet
from vx_core.iam.api.auth import LoginView, LogoutView, RefreshView, RegisterView
from vx_core.iam.api.invitations import AcceptInvitationView, InviteTenantUserView
from vx_core.iam.api.me import MeView
from vx_core.iam.api.super_admin import SuperAdminInitView, SuperAdminLoginView
from vx_core.iam.api.users import TenantUsersView
from vx_core.parents.api.views import (
    ChildViewSet,
    ParentLoginView,
    ParentNotificationPreferencesView,
    ParentOverviewView,
    ParentProfileView,
    ParentRegisterView,
    ReminderCompleteView,
)
from vx_core.patients.api.views import PatientVaccinationViewSet, PatientViewSet
from vx_core.tenants.api.views import (
    SuperAdminStatsView,
    SuperAdminTenantViewSet,
    TenantDashboardView,
    TenantFeatureCheckView,
    TenantFeaturesView,
    TenantSettingsView,
)
from vx_core.vaccinations.api.views import GuidelineViewSet

router = DefaultRouter()

# ViewSet-backed modules (centralized)
router.register(r"patients", PatientViewSet, basename="patients")
# before "vaccinations" so "guidelines" is never read as a record id
router.register(r"vaccinations/guidelines", GuidelineViewSet, basename="vaccination-guidelines")
router.register(r"vaccinations", PatientVaccinationViewSet, basename="vaccinations")
router.register(r"audit/events", AuditEventViewSet, basename="audit-events")
router.register(r"super-admin/tenants", SuperAdminTenantViewSet, basename="super-admin-tenants")

# ✅ Parent portal
router.register(r"parent/children", ChildViewSet, basename="parent-children")

urlpatterns = [
    # 🔐 Clinic auth + /me
    path("auth/register/", RegisterView.as_view(), name="register"),
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/refresh/", RefreshView.as_view(), name="refresh"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("auth/me/", MeView.as_view(), name="me"),
    path("tenant/users/", TenantUsersView.as_view(), name="tenant-users"),
    path("tenant/users/invite/", InviteTenantUserView.as_view(), name="tenant-users-invite"),
    path("tenant/users/accept-invitation/", AcceptInvitationView.as_view(), name="tenant-users-accept-invitation"),

    # Clinic dashboard, settings, feature flags
    path("tenant/dashboard/", TenantDashboardView.as_view(), name="tenant-dashboard"),
    path("tenant/settings/", TenantSettingsView.as_view(), name="tenant-settings"),
    path("tenant/features/", TenantFeaturesView.as_view(), name="tenant-features"),
    path("tenant/features/<str:code>/check/", TenantFeatureCheckView.as_view(), name="tenant-feature-check"),

    # Platform administration
    path("super-admin/init/", SuperAdminInitView.as_view(), name="super-admin-init"),
    path("super-admin/login/", SuperAdminLoginView.as_view(), name="super-admin-login"),
    path("super-admin/stats/", SuperAdminStatsView.as_view(), name="super-admin-stats"),

    # Parent portal auth
    path("parent/auth/register/", ParentRegisterView.as_view(), name="parent-register"),
    path("parent/auth/login/", ParentLoginView.as_view(), name="parent-login"),
    path("parent/auth/profile/", ParentProfileView.as_view(), name="parent-profile"),
    path(
        "parent/auth/notification-preferences/",
        ParentNotificationPreferencesView.as_view(),
        name="parent-notification-preferences",
    ),
    path("parent/dashboard/overview/", ParentOverviewView.as_view(), name="parent-overview"),
    path("parent/reminders/<str:entry_id>/complete/", ReminderCompleteView.as_view(), name="parent-reminder-complete"),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
