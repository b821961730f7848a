# backend/vx_core/tenants/selectors.py
from __future__ import annotations

from datetime import date
from typing import Optional
from uuid import UUID

from django.db.models import Count, Q, QuerySet

from vx_core.tenants.features import FEATURE_CATALOGUE, FEATURES_BY_CODE
from vx_core.tenants.models import Tenant, TenantFeature, TenantStatus


def get_tenant_or_none(*, tenant_id: UUID) -> Optional[Tenant]:
    return Tenant.objects.filter(id=tenant_id).first()


def get_active_tenant_by_subdomain(*, subdomain: str) -> Optional[Tenant]:
    return Tenant.objects.filter(subdomain=subdomain.lower(), status=TenantStatus.ACTIVE).first()


def subdomain_taken(*, subdomain: str) -> bool:
    return Tenant.objects.filter(subdomain=subdomain.lower()).exists()


def search_tenants(*, status: str | None = None, search: str | None = None) -> QuerySet[Tenant]:
    qs = Tenant.objects.all()
    if status:
        qs = qs.filter(status=status)
    if search:
        qs = qs.filter(Q(name__icontains=search) | Q(subdomain__icontains=search))
    return qs.order_by("-created_at")


def tenant_stats() -> dict:
    from vx_core.iam.models import TenantUser
    from vx_core.patients.models import Patient

    by_status = Tenant.objects.aggregate(
        total=Count("id"),
        active=Count("id", filter=Q(status=TenantStatus.ACTIVE)),
        suspended=Count("id", filter=Q(status=TenantStatus.SUSPENDED)),
        cancelled=Count("id", filter=Q(status=TenantStatus.CANCELLED)),
    )
    return {
        "tenants": by_status,
        "tenant_users": TenantUser.objects.count(),
        "patients": Patient.objects.count(),
    }


def tenant_features(*, tenant_id: UUID) -> list[dict]:
    """Whole catalogue, each entry resolved against the tenant's overrides."""
    overrides = dict(TenantFeature.objects.filter(tenant_id=tenant_id).values_list("code", "is_enabled"))
    return [
        {
            "code": f.code,
            "name": f.name,
            "description": f.description,
            "category": f.category,
            "enabled": overrides.get(f.code, f.default_enabled),
        }
        for f in FEATURE_CATALOGUE
    ]


def is_feature_enabled(*, tenant_id: UUID, code: str) -> Optional[bool]:
    """None for a code outside the catalogue."""
    feature = FEATURES_BY_CODE.get(code)
    if feature is None:
        return None
    stored = TenantFeature.objects.filter(tenant_id=tenant_id, code=code).values_list("is_enabled", flat=True).first()
    return feature.default_enabled if stored is None else stored


def tenant_dashboard(*, tenant_id: UUID, today: date) -> dict:
    from vx_core.audit.selectors import recent_tenant_activity
    from vx_core.iam.models import TenantUser
    from vx_core.patients.models import Patient, PatientVaccination

    doses = PatientVaccination.objects.filter(tenant_id=tenant_id)
    recent = doses.select_related("patient").order_by("-administered_on", "-created_at")[:5]

    return {
        "stats": {
            "total_patients": Patient.objects.filter(tenant_id=tenant_id).count(),
            "total_vaccinations": doses.count(),
            "vaccinations_this_month": doses.filter(
                administered_on__gte=today.replace(day=1), administered_on__lte=today
            ).count(),
            "team_members": TenantUser.objects.filter(tenant_id=tenant_id, is_active=True).count(),
        },
        "recent_vaccinations": [
            {
                "id": d.id,
                "patient_id": d.patient_id,
                "patient_name": d.patient.full_name,
                "vaccine_code": d.vaccine_code,
                "vaccine_name": d.vaccine_name,
                "dose_number": d.dose_number,
                "administered_on": d.administered_on,
            }
            for d in recent
        ],
        "recent_activity": recent_tenant_activity(tenant_id=tenant_id),
    }
