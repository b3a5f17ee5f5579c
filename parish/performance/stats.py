"""
performance/stats.py
────────────────────
Aggregates behind the performance dashboard.

attendance_trend(session_type, today)   present counts per branch for the
                                        last three Thursdays or Sundays
classification_overview(total_weeks)    students per branch and per
                                        classification bucket
"""

from django.db.models import Count

from attendance.calendar import last_session_dates
from attendance.models import AttendanceRecord
from roster.choices import Branch, RecordStatus
from roster.models import Student
from roster.scoring import Classification, scorecard

TREND_SESSIONS = 3


def _empty_branch_counts():
    return {value: 0 for value in Branch.values}


def active_students_by_branch():
    counts = _empty_branch_counts()
    rows = (
        Student.objects
        .filter(status=RecordStatus.ACTIVE, school_class__isnull=False)
        .values('school_class__branch')
        .annotate(n=Count('id'))
    )
    for row in rows:
        counts[row['school_class__branch']] += row['n']
    return counts


def attendance_trend(session_type, today):
    """
    Present records per branch for each of the last TREND_SESSIONS sessions
    of *session_type* on or before *today*, oldest first.  Make-up credits
    count towards the Thursday they stand in for.  Records are attributed to
    the class the student was in when checked in.
    """
    dates = last_session_dates(session_type, today, count=TREND_SESSIONS)
    rows = (
        AttendanceRecord.objects
        .filter(
            day_type=session_type,
            status=AttendanceRecord.Status.PRESENT,
            attendance_date__in=dates,
            school_class__isnull=False,
        )
        .values('attendance_date', 'school_class__branch')
        .annotate(n=Count('id'))
    )

    per_date = {day: _empty_branch_counts() for day in dates}
    for row in rows:
        per_date[row['attendance_date']][row['school_class__branch']] += row['n']

    students = active_students_by_branch()
    latest = per_date[dates[-1]]
    return {
        'session': session_type,
        'sessions': [
            {
                'date':      day.isoformat(),
                'total':     sum(per_date[day].values()),
                'by_branch': per_date[day],
            }
            for day in dates
        ],
        'latest_by_branch': [
            {'branch': value, 'label': label, 'present': latest[value], 'students': students[value]}
            for value, label in Branch.choices
        ],
    }


def classification_overview(total_weeks):
    """How many active students fall into each classification bucket."""
    buckets = {value: 0 for value in Classification.values}
    students = Student.objects.filter(status=RecordStatus.ACTIVE)
    for student in students:
        buckets[scorecard(student, total_weeks).classification] += 1
    return [
        {'classification': value, 'label': label, 'students': buckets[value]}
        for value, label in Classification.choices
    ]
