# backend/vx_core/conftest.py
from datetime import date

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from vx_core.iam.models import TenantRole
from vx_core.iam.services.accounts import AccountService
from vx_core.parents.services import ChildService, ParentService
from vx_core.parents.tokens import issue_parent_token
from vx_core.tenants.models import Tenant
from vx_core.vaccinations.models import VaccinationGuideline

PASSWORD = "Pass@12345"
BASE_DOMAIN = "vaxclinic.test"


def host_for(tenant):
    """
    Host header that resolves to `tenant`.
    DRF test client requires HTTP_ prefix.
    """
    return {"HTTP_HOST": f"{tenant.subdomain}.{BASE_DOMAIN}"}


def bearer(user):
    return {"HTTP_AUTHORIZATION": f"Bearer {RefreshToken.for_user(user).access_token}"}


@pytest.fixture
def tenant(db):
    return Tenant.objects.create(name="Sunrise Pediatrics", subdomain="sunrise")


@pytest.fixture
def other_tenant(db):
    return Tenant.objects.create(name="Harbor Family Clinic", subdomain="harbor")


@pytest.fixture
def make_member(db):
    """
    make_member(tenant, role) -> auth user with an active TenantUser row.
    Password is PASSWORD; email defaults to <role>@<subdomain>.test.
    """
    def _make(tenant, role, *, email=None):
        membership = AccountService.register_tenant_user(
            tenant=tenant,
            email=email or f"{role}@{tenant.subdomain}.test",
            password=PASSWORD,
            full_name=f"{role.title()} User",
            role=role,
        )
        return membership.user

    return _make


@pytest.fixture
def admin_user(tenant, make_member):
    return make_member(tenant, TenantRole.ADMIN)


@pytest.fixture
def doctor_user(tenant, make_member):
    return make_member(tenant, TenantRole.DOCTOR)


@pytest.fixture
def nurse_user(tenant, make_member):
    return make_member(tenant, TenantRole.NURSE)


@pytest.fixture
def receptionist_user(tenant, make_member):
    return make_member(tenant, TenantRole.RECEPTIONIST)


@pytest.fixture
def patient_user(tenant, make_member):
    return make_member(tenant, TenantRole.PATIENT)


@pytest.fixture
def client_for():
    """
    client_for(user, tenant=None) -> APIClient sending a real Bearer token,
    so TenantContextMiddleware and the auth class actually run.
    """
    def _client(user=None, tenant=None):
        c = APIClient()
        creds = {}
        if user is not None:
            creds.update(bearer(user))
        if tenant is not None:
            creds.update(host_for(tenant))
        c.credentials(**creds)
        return c

    return _client


@pytest.fixture
def api_client(admin_user, tenant, client_for):
    return client_for(admin_user, tenant)


@pytest.fixture
def super_admin_user(db):
    return AccountService.init_super_admin(email="root@vaxclinic.test", password=PASSWORD, full_name="Root Operator").user


@pytest.fixture
def super_admin_client(super_admin_user, client_for):
    return client_for(super_admin_user)


@pytest.fixture
def parent(db):
    return ParentService.register(
        email="maria@example.com",
        password=PASSWORD,
        first_name="Maria",
        last_name="Lopez",
        country="US",
    )


@pytest.fixture
def parent_client(parent):
    c = APIClient()
    c.credentials(HTTP_AUTHORIZATION=f"Bearer {issue_parent_token(parent)}")
    return c


@pytest.fixture
def child(parent):
    return ChildService.create_child(parent=parent, first_name="Mia", last_name="Lopez", date_of_birth=date(2022, 3, 15))


@pytest.fixture
def make_guideline(db):
    """
    make_guideline(vaccine_code="HEPB", dose_number=1, ...) -> VaccinationGuideline
    Defaults to a mandatory all-region US row due at birth.
    """
    def _make(**overrides):
        data = {
            "country_code": "US",
            "region_code": "",
            "vaccine_code": "HEPB",
            "vaccine_name": "Hepatitis B",
            "recommended_age_months": 0,
            "min_age_months": 0,
            "max_age_months": None,
            "dose_number": 1,
            "total_doses": 3,
            "is_mandatory": True,
            "contraindications": [],
            "notes": "",
        }
        data.update(overrides)
        return VaccinationGuideline.objects.create(**data)

    return _make


@pytest.fixture
def us_guidelines(db):
    from vx_core.vaccinations.guidelines_us import US_GUIDELINES
    from vx_core.vaccinations.services import GuidelineService

    GuidelineService.upsert_many(US_GUIDELINES)
    return VaccinationGuideline.objects.filter(country_code="US")
