from datetime import date

import pytest
from django.urls import reverse

from attendance.models import AttendanceRecord
from attendance.services import check_in, compensatory_check_in
from roster.choices import Branch
from roster.models import SchoolClass

pytestmark = pytest.mark.django_db


@pytest.fixture
def nghia_si_student(make_student):
    school_class = SchoolClass.objects.create(name='Nghĩa Sĩ 1', branch=Branch.NGHIA_SI)
    return make_student('Đỗ Quang Huy', school_class=school_class)


def test_trend_counts_the_last_three_thursdays(catechist_client, student, nghia_si_student):
    check_in(student, date(2025, 10, 30))
    check_in(student, date(2025, 11, 6), AttendanceRecord.Status.ABSENT)
    check_in(nghia_si_student, date(2025, 11, 6))
    compensatory_check_in(student, date(2025, 11, 12))
    check_in(nghia_si_student, date(2025, 11, 13))
    check_in(student, date(2025, 10, 23))

    data = catechist_client.get(reverse('attendance_trend'), {'session': 'thu5', 'date': '2025-11-16'}).json()

    assert [s['date'] for s in data['sessions']] == ['2025-10-30', '2025-11-06', '2025-11-13']
    assert [s['total'] for s in data['sessions']] == [1, 1, 2]
    assert data['sessions'][2]['by_branch'] == {
        'chien_con': 0, 'au_nhi': 1, 'thieu_nhi': 0, 'nghia_si': 1,
    }
    latest = {row['branch']: row for row in data['latest_by_branch']}
    assert latest['au_nhi']['present'] == 1
    assert latest['au_nhi']['students'] == 1
    assert latest['nghia_si']['label'] == 'Nghĩa Sĩ'


def test_trend_for_sundays(catechist_client, student):
    check_in(student, date(2025, 11, 16))
    data = catechist_client.get(reverse('attendance_trend'), {'session': 'cn', 'date': '2025-11-16'}).json()
    assert [s['total'] for s in data['sessions']] == [0, 0, 1]


def test_trend_rejects_unknown_sessions(catechist_client):
    response = catechist_client.get(reverse('attendance_trend'), {'session': 'friday'})
    assert response.status_code == 400


def test_overview_classifications(catechist_client, make_student, inactive_student):
    make_student('Giỏi', score_45_hk1=9, score_exam_hk1=9, score_45_hk2=9, score_exam_hk2=9,
                 attendance_thu5=40, attendance_cn=40)
    make_student('Yếu')

    data = catechist_client.get(reverse('performance_overview')).json()

    assert data['students'] == 2
    assert data['students_by_branch']['au_nhi'] == 2
    counts = {row['classification']: row['students'] for row in data['classifications']}
    assert counts == {'excellent': 1, 'good': 0, 'average': 0, 'below_average': 1}
