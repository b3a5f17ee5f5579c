"""
roster/utils.py
───────────────
Query and serialisation helpers for the roster views.
"""

from django.conf import settings
from django.db.models import Q

from .choices import Branch, RecordStatus
from .models import SchoolClass, SchoolYear, Student
from .scoring import attendance_grid, scorecard


def current_total_weeks():
    """
    total_weeks of the current SchoolYear, falling back to
    settings.DEFAULT_TOTAL_WEEKS when no school year has been set up.
    """
    school_year = SchoolYear.current()
    if school_year is None:
        return settings.DEFAULT_TOTAL_WEEKS
    return school_year.total_weeks


def filter_students(school_class_id=None, status=None, query=None):
    """
    Students for the roster list.  *query* matches full name, saint name or
    student code, case-insensitively.
    """
    students = Student.objects.select_related('school_class')
    if school_class_id is not None:
        students = students.filter(school_class_id=school_class_id)
    if status:
        students = students.filter(status=status)
    if query:
        students = students.filter(
            Q(full_name__icontains=query)
            | Q(saint_name__icontains=query)
            | Q(student_code__icontains=query)
        )
    return students.order_by('full_name')


def classes_by_branch():
    """Active classes grouped under their branch, in branch order."""
    grouped = {value: [] for value in Branch.values}
    for school_class in SchoolClass.objects.filter(status=RecordStatus.ACTIVE):
        grouped[school_class.branch].append(school_class)
    return [
        {'branch': branch, 'label': label, 'classes': [class_summary(c) for c in grouped[branch]]}
        for branch, label in Branch.choices
    ]


# ── Serialisation ─────────────────────────────────────────────────────────────

def class_summary(school_class):
    return {
        'id':            school_class.pk,
        'name':          school_class.name,
        'branch':        school_class.branch,
        'display_order': school_class.display_order,
        'status':        school_class.status,
    }


def student_summary(student):
    return {
        'id':           student.pk,
        'full_name':    student.full_name,
        'saint_name':   student.saint_name,
        'display_name': student.display_name,
        'student_code': student.student_code,
        'class_id':     student.school_class_id,
        'class_name':   student.school_class.name if student.school_class else None,
        'status':       student.status,
    }


def student_row(student, total_weeks):
    """Roster row: identity, raw scores (None = not yet scored), tallies, scorecard."""
    row = student_summary(student)
    row.update({
        'scores': {
            'score_45_hk1':   student.score_45_hk1,
            'score_exam_hk1': student.score_exam_hk1,
            'score_45_hk2':   student.score_45_hk2,
            'score_exam_hk2': student.score_exam_hk2,
        },
        'attendance_thu5': student.attendance_thu5,
        'attendance_cn':   student.attendance_cn,
        'scorecard':       scorecard(student, total_weeks).as_dict(),
    })
    return row


def student_detail(student, total_weeks):
    """student_row plus contact details and the week-by-week attendance grid."""
    row = student_row(student, total_weeks)
    row.update({
        'date_of_birth':  student.date_of_birth.isoformat() if student.date_of_birth else None,
        'gender':         student.gender,
        'parent_name':    student.parent_name,
        'parent_phone':   student.parent_phone,
        'parent_phone_2': student.parent_phone_2,
        'address':        student.address,
        'notes':          student.notes,
        'total_weeks':    total_weeks,
        'attendance_grid': {
            'thu5': attendance_grid(student.attendance_thu5, total_weeks),
            'cn':   attendance_grid(student.attendance_cn, total_weeks),
        },
    })
    return row


def school_year_summary(school_year):
    if school_year is None:
        return None
    return {
        'id':          school_year.pk,
        'name':        school_year.name,
        'start_date':  school_year.start_date.isoformat(),
        'end_date':    school_year.end_date.isoformat(),
        'total_weeks': school_year.total_weeks,
        'parish_name': school_year.parish_name,
        'is_current':  school_year.is_current,
    }
