# backend/vx_core/vaccinations/tests/test_seed_guidelines_command.py
from io import StringIO

import pytest
from django.core.management import call_command

from vx_core.vaccinations.guidelines_us import US_GUIDELINES
from vx_core.vaccinations.models import VaccinationGuideline

pytestmark = pytest.mark.django_db


def test_seed_guidelines_is_idempotent():
    out = StringIO()
    call_command("seed_guidelines", stdout=out)
    first = VaccinationGuideline.objects.count()

    call_command("seed_guidelines", stdout=out)

    assert first == len(US_GUIDELINES)
    assert VaccinationGuideline.objects.count() == first
    assert "refreshed" in out.getvalue()


def test_seed_guidelines_restores_edited_rows():
    call_command("seed_guidelines", stdout=StringIO())
    VaccinationGuideline.objects.filter(vaccine_code="MMR", dose_number=1).update(recommended_age_months=99)

    call_command("seed_guidelines", stdout=StringIO())

    assert VaccinationGuideline.objects.get(vaccine_code="MMR", dose_number=1).recommended_age_months == 12
