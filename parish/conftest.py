"""
Shared pytest fixtures.

Dates used throughout the tests fall in the week of Mon 2025-11-10 …
Sun 2025-11-16, whose Thursday is 2025-11-13.
"""

from datetime import date

import pytest

from accounts.models import CustomUser
from roster.choices import Branch, RecordStatus
from roster.models import SchoolClass, SchoolYear, Student

MONDAY = date(2025, 11, 10)
WEDNESDAY = date(2025, 11, 12)
THURSDAY = date(2025, 11, 13)
FRIDAY = date(2025, 11, 14)
SATURDAY = date(2025, 11, 15)
SUNDAY = date(2025, 11, 16)


@pytest.fixture
def school_year(db):
    year = SchoolYear.objects.create(
        name='2025 - 2026',
        start_date=date(2025, 9, 1),
        end_date=date(2026, 5, 31),
        parish_name='Giáo xứ Tân Định',
    )
    year.make_current()
    return year


@pytest.fixture
def school_class(db):
    return SchoolClass.objects.create(name='Ấu Nhi 2', branch=Branch.AU_NHI, display_order=2)


@pytest.fixture
def make_student(db, school_class):
    def _make(full_name='Nguyễn Văn An', **kwargs):
        kwargs.setdefault('school_class', school_class)
        return Student.objects.create(full_name=full_name, **kwargs)
    return _make


@pytest.fixture
def student(make_student):
    return make_student(saint_name='Phêrô', student_code='HA172336')


@pytest.fixture
def inactive_student(make_student):
    return make_student('Trần Thị Bình', status=RecordStatus.INACTIVE)


@pytest.fixture
def catechist(db, school_class):
    return CustomUser.objects.create_user(
        username='glv.maria',
        password='not-a-real-password',
        first_name='Maria',
        last_name='Lê',
        school_class=school_class,
    )


@pytest.fixture
def board_member(db):
    return CustomUser.objects.create_user(
        username='bdh.giuse',
        password='not-a-real-password',
        role=CustomUser.Role.ADMIN,
    )


@pytest.fixture
def catechist_client(client, catechist):
    client.force_login(catechist)
    return client


@pytest.fixture
def board_client(client, board_member):
    client.force_login(board_member)
    return client
