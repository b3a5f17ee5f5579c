from datetime import date

import pytest
from django.db import IntegrityError, transaction

from roster.models import SchoolYear, Student

pytestmark = pytest.mark.django_db


def _year(name, start, end, **kwargs):
    return SchoolYear.objects.create(name=name, start_date=start, end_date=end, **kwargs)


def test_total_weeks_is_computed_when_missing():
    year = _year('2025 - 2026', date(2025, 9, 1), date(2026, 5, 31))
    assert year.total_weeks == 39


def test_explicit_total_weeks_is_kept():
    year = _year('2025 - 2026', date(2025, 9, 1), date(2026, 5, 31), total_weeks=35)
    assert year.total_weeks == 35


def test_make_current_moves_the_flag():
    old = _year('2024 - 2025', date(2024, 9, 2), date(2025, 5, 25))
    new = _year('2025 - 2026', date(2025, 9, 1), date(2026, 5, 31))
    old.make_current()
    new.make_current()

    old.refresh_from_db()
    assert not old.is_current
    assert SchoolYear.current() == new


def test_only_one_current_school_year():
    _year('2024 - 2025', date(2024, 9, 2), date(2025, 5, 25), is_current=True)
    with pytest.raises(IntegrityError), transaction.atomic():
        _year('2025 - 2026', date(2025, 9, 1), date(2026, 5, 31), is_current=True)


def test_current_is_none_without_school_years():
    assert SchoolYear.current() is None


def test_contains(school_year):
    assert school_year.contains(date(2025, 11, 13))
    assert not school_year.contains(date(2025, 8, 28))


def test_student_display_name(school_class):
    assert str(Student(full_name='Nguyễn Văn An', saint_name='Phêrô')) == 'Phêrô Nguyễn Văn An'
    assert str(Student(full_name='Nguyễn Văn An')) == 'Nguyễn Văn An'


def test_student_codes_are_unique_but_optional(make_student):
    make_student('A')
    make_student('B')
    make_student('C', student_code='HA1')
    with pytest.raises(IntegrityError), transaction.atomic():
        make_student('D', student_code='HA1')
