from datetime import date

import pytest
from django.db import DatabaseError
from django.urls import reverse

from attendance import services
from attendance.badges import encode_badge
from attendance.models import AttendanceRecord
from attendance.services import check_in, compensatory_check_in
from roster.choices import RecordStatus

pytestmark = pytest.mark.django_db

WEDNESDAY = '2025-11-12'
THURSDAY = '2025-11-13'
SUNDAY = '2025-11-16'


def test_anonymous_users_get_401(client, student):
    response = client.post(reverse('mark_attendance'), {'student': student.pk, 'date': THURSDAY})
    assert response.status_code == 401
    assert response.json()['status'] == 'error'


def test_inactive_catechists_get_403(client, catechist, student):
    catechist.status = RecordStatus.INACTIVE
    catechist.save()
    client.force_login(catechist)

    response = client.get(reverse('session_sheet'), {'class': student.school_class_id, 'date': THURSDAY})
    assert response.status_code == 403


def test_mark_present(catechist_client, student, catechist):
    response = catechist_client.post(reverse('mark_attendance'), {'student': student.pk, 'date': THURSDAY})

    assert response.status_code == 200
    data = response.json()
    assert data['record']['status'] == 'present'
    assert data['record']['day_type'] == 'thu5'
    assert data['record']['created_by'] == catechist.display_name
    assert data['student']['attendance_thu5'] == 1


def test_mark_absent(catechist_client, student):
    response = catechist_client.post(
        reverse('mark_attendance'), {'student': student.pk, 'date': SUNDAY, 'status': 'absent'},
    )
    assert response.json()['record']['status'] == 'absent'


def test_mark_on_a_weekday_is_a_bad_request(catechist_client, student):
    response = catechist_client.post(reverse('mark_attendance'), {'student': student.pk, 'date': WEDNESDAY})
    assert response.status_code == 400
    assert 'Thursday or Sunday' in response.json()['message']


def test_mark_requires_post(catechist_client):
    assert catechist_client.get(reverse('mark_attendance')).status_code == 405


def test_mark_reports_form_errors(catechist_client):
    response = catechist_client.post(reverse('mark_attendance'), {'date': 'yesterday'})
    assert response.status_code == 400
    errors = response.json()['errors']
    assert set(errors) == {'student', 'date'}


def test_make_up_then_thursday_is_a_conflict(catechist_client, student):
    response = catechist_client.post(
        reverse('mark_compensatory'), {'student': student.pk, 'date': WEDNESDAY},
    )
    assert response.status_code == 201
    assert response.json()['record']['attendance_date'] == THURSDAY
    assert response.json()['record']['compensated_for_date'] == THURSDAY

    response = catechist_client.post(reverse('mark_attendance'), {'student': student.pk, 'date': THURSDAY})
    assert response.status_code == 409
    assert response.json()['message'] == 'This student has already been compensated this week.'


def test_database_failure_is_a_generic_500(catechist_client, student, monkeypatch):
    def broken(*args, **kwargs):
        raise DatabaseError('connection reset')

    monkeypatch.setattr(services, 'check_in', broken)
    response = catechist_client.post(reverse('mark_attendance'), {'student': student.pk, 'date': THURSDAY})
    assert response.status_code == 500
    assert 'connection reset' not in response.json()['message']


def test_mark_all_present(catechist_client, student, make_student):
    make_student('Lê Văn Cường')
    response = catechist_client.post(
        reverse('mark_all_present'), {'school_class': student.school_class_id, 'date': THURSDAY},
    )
    assert response.json()['marked'] == 2


def test_clear_attendance(catechist_client, student):
    record = check_in(student, date(2025, 11, 13))
    response = catechist_client.post(reverse('clear_attendance', args=[record.pk]))

    assert response.status_code == 200
    assert response.json()['student']['attendance_thu5'] == 0
    assert not AttendanceRecord.objects.exists()


def test_clear_unknown_record_is_404(catechist_client):
    response = catechist_client.post(reverse('clear_attendance', args=[999999]))
    assert response.status_code == 404


def test_session_sheet(catechist_client, student, make_student):
    other = make_student('Lê Văn Cường')
    check_in(student, date(2025, 11, 13))
    check_in(other, date(2025, 11, 13), AttendanceRecord.Status.ABSENT)

    response = catechist_client.get(reverse('session_sheet'), {'class': student.school_class_id, 'date': THURSDAY})

    data = response.json()
    assert data['day_type'] == 'thu5'
    assert [row['student']['id'] for row in data['rows']] == [other.pk, student.pk]
    assert (data['present'], data['absent']) == (1, 1)


def test_session_sheet_needs_a_class(catechist_client):
    assert catechist_client.get(reverse('session_sheet'), {'date': THURSDAY}).status_code == 400
    assert catechist_client.get(reverse('session_sheet'), {'class': 'x'}).status_code == 400
    assert catechist_client.get(reverse('session_sheet'), {'class': 999999}).status_code == 404


def test_session_sheet_rejects_bad_dates(catechist_client, school_class):
    response = catechist_client.get(reverse('session_sheet'), {'class': school_class.pk, 'date': '13/11/2025'})
    assert response.status_code == 400


def test_session_sheet_on_a_weekday_is_a_bad_request(catechist_client, student):
    compensatory_check_in(student, date(2025, 11, 12))
    response = catechist_client.get(reverse('session_sheet'), {'class': student.school_class_id, 'date': WEDNESDAY})
    assert response.status_code == 400
    assert 'Thursday or Sunday' in response.json()['message']


def test_compensatory_sheet(catechist_client, student, make_student):
    made_up = make_student('Phạm Thị Dung')
    compensatory_check_in(made_up, date(2025, 11, 12))

    response = catechist_client.get(
        reverse('compensatory_sheet'), {'class': student.school_class_id, 'date': '2025-11-15'},
    )

    data = response.json()
    assert data['anchor'] == THURSDAY
    assert data['week_start'] == '2025-11-10'
    assert data['week_end'] == SUNDAY
    assert data['can_compensate'] is True
    states = {row['student']['id']: row['state'] for row in data['rows']}
    assert states == {student.pk: 'unmarked', made_up.pk: 'compensated_present'}


def test_qr_check_in(catechist_client, student):
    response = catechist_client.post(reverse('qr_check_in'), {'payload': encode_badge(student), 'date': SUNDAY})

    data = response.json()
    assert data['record']['check_in_method'] == 'qr'
    assert data['record']['day_type'] == 'cn'
    assert data['student']['id'] == student.pk


def test_qr_check_in_with_unknown_badge(catechist_client):
    response = catechist_client.post(reverse('qr_check_in'), {'payload': 'hello', 'date': SUNDAY})
    assert response.status_code == 400
    assert response.json()['message'] == 'Unrecognised QR code.'


def test_student_badge(catechist_client, student):
    response = catechist_client.get(reverse('student_badge', args=[student.pk]))
    data = response.json()
    assert data['payload'] == encode_badge(student)
    assert data['qr_base64']
