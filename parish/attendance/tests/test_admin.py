from datetime import date

import pytest
from django.urls import reverse

from attendance.models import AttendanceRecord
from attendance.services import WeekState, check_in, compensatory_check_in, week_status

pytestmark = pytest.mark.django_db

WEDNESDAY = date(2025, 11, 12)
THURSDAY = date(2025, 11, 13)


def _record_form(student, **fields):
    data = {
        'student':         student.pk,
        'school_class':    student.school_class_id,
        'attendance_date': '2025-11-13',
        'day_type':        'thu5',
        'status':          'present',
        'check_in_method': 'manual',
        'notes':           '',
    }
    data.update(fields)
    return data


def test_admin_cannot_add_a_thursday_on_top_of_a_make_up(admin_client, student):
    compensatory_check_in(student, WEDNESDAY)

    response = admin_client.post(
        reverse('admin:attendance_attendancerecord_add'), _record_form(student),
    )

    assert response.status_code == 403
    assert AttendanceRecord.objects.filter(student=student).count() == 1
    assert week_status(student, THURSDAY).state == WeekState.COMPENSATED_PRESENT
    student.refresh_from_db()
    assert student.attendance_thu5 == 1


def test_admin_cannot_add_a_sunday_record_on_a_weekday(admin_client, student):
    response = admin_client.post(
        reverse('admin:attendance_attendancerecord_add'),
        _record_form(student, attendance_date='2025-11-12', day_type='cn'),
    )

    assert response.status_code == 403
    assert not AttendanceRecord.objects.exists()


def test_admin_cannot_edit_records(admin_client, student):
    record = check_in(student, THURSDAY, AttendanceRecord.Status.ABSENT)

    response = admin_client.post(
        reverse('admin:attendance_attendancerecord_change', args=[record.pk]),
        _record_form(student),
    )

    assert response.status_code == 403
    record.refresh_from_db()
    assert record.status == AttendanceRecord.Status.ABSENT
    student.refresh_from_db()
    assert student.attendance_thu5 == 0


def test_admin_delete_refreshes_tallies(admin_client, student):
    record = compensatory_check_in(student, WEDNESDAY)
    student.refresh_from_db()
    assert student.attendance_thu5 == 1

    response = admin_client.post(
        reverse('admin:attendance_attendancerecord_delete', args=[record.pk]), {'post': 'yes'},
    )

    assert response.status_code == 302
    assert not AttendanceRecord.objects.exists()
    student.refresh_from_db()
    assert student.attendance_thu5 == 0
