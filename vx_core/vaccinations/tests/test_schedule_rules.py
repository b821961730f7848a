# backend/vx_core/vaccinations/tests/test_schedule_rules.py
from datetime import date

import pytest

from vx_core.vaccinations.models import ScheduleStatus
from vx_core.vaccinations.schedule import add_months, age_in_months, classify_status, has_contraindication


@pytest.mark.parametrize(
    "start, months, expected",
    [
        (date(2022, 3, 15), 0, date(2022, 3, 15)),
        (date(2022, 3, 15), 2, date(2022, 5, 15)),
        (date(2022, 3, 15), 12, date(2023, 3, 15)),
        (date(2022, 1, 31), 1, date(2022, 2, 28)),
        (date(2024, 1, 31), 1, date(2024, 2, 29)),
        (date(2022, 8, 31), 1, date(2022, 9, 30)),
    ],
)
def test_add_months_is_calendar_arithmetic(start, months, expected):
    assert add_months(start, months) == expected


def test_age_in_months_counts_whole_months_only():
    birth = date(2022, 3, 15)
    assert age_in_months(birth, date(2022, 3, 15)) == 0
    assert age_in_months(birth, date(2022, 5, 14)) == 1
    assert age_in_months(birth, date(2022, 5, 15)) == 2
    assert age_in_months(birth, date(2023, 3, 15)) == 12


def test_age_in_months_never_negative():
    assert age_in_months(date(2022, 3, 15), date(2022, 1, 1)) == 0


def test_status_boundaries_around_due_date():
    due = date(2022, 3, 15)
    assert classify_status(due, date(2022, 3, 1)) == ScheduleStatus.UPCOMING
    assert classify_status(due, due) == ScheduleStatus.UPCOMING
    assert classify_status(due, date(2022, 3, 16)) == ScheduleStatus.DUE
    assert classify_status(due, date(2022, 4, 14)) == ScheduleStatus.DUE  # day 30
    assert classify_status(due, date(2022, 4, 15)) == ScheduleStatus.OVERDUE  # day 31


def test_status_respects_custom_grace():
    due = date(2022, 3, 15)
    assert classify_status(due, date(2022, 3, 22), grace_days=7) == ScheduleStatus.DUE
    assert classify_status(due, date(2022, 3, 23), grace_days=7) == ScheduleStatus.OVERDUE


def test_contraindication_matches_substring_case_insensitively():
    assert has_contraindication(["Penicillin"], [], ["Penicillin allergy"])
    assert has_contraindication([], ["severe PENICILLIN allergy"], ["penicillin"])


def test_contraindication_no_overlap():
    assert not has_contraindication(["Peanuts"], ["Asthma"], ["Yeast allergy", "Pregnancy"])
    assert not has_contraindication([], [], ["Yeast allergy"])
    assert not has_contraindication(["Peanuts"], [], [])


def test_contraindication_ignores_blank_tokens():
    assert not has_contraindication(["", "  "], [], ["Yeast allergy"])
    assert not has_contraindication(["Peanuts"], [], ["", " "])
    assert not has_contraindication(None, None, None)
