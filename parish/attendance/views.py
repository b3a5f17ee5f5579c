"""
attendance/views.py
───────────────────
JSON endpoints for taking attendance.

    GET  sheet/                    regular session sheet for one class/date
    POST mark/                     regular check-in (present / absent)
    POST mark-all/                 everyone unmarked → present
    POST clear/<record_id>/        delete one record
    GET  compensatory/             make-up sheet for one class/week
    POST compensatory/mark/        make-up check-in
    POST qr/                       badge scan
    GET  students/<id>/badge/      badge QR as base64 PNG

Rule violations come back as {"status": "error", "message": ...} with the
exception's status_code; database failures are logged and reported as 500.
"""

import logging

from django.db import DatabaseError
from django.shortcuts import get_object_or_404

from core.utils import (
    catechist_required,
    date_param,
    int_param,
    json_error,
    json_form_errors,
    json_ok,
    require_POST_or_405,
)
from roster.choices import RecordStatus
from roster.models import SchoolClass, Student
from roster.utils import student_summary

from . import services
from .badges import encode_badge, generate_badge_qr
from .calendar import is_compensable_weekday, session_type_for_date, week_end, week_start
from .forms import CheckInForm, CompensatoryCheckInForm, MarkAllForm, QRCheckInForm
from .models import AttendanceRecord

logger = logging.getLogger(__name__)

GENERIC_FAILURE = 'Something went wrong while saving attendance. Please try again.'


# ── Serialisation ─────────────────────────────────────────────────────────────

def record_summary(record):
    if record is None:
        return None
    return {
        'id':                   record.pk,
        'student_id':           record.student_id,
        'attendance_date':      record.attendance_date.isoformat(),
        'day_type':             record.day_type,
        'status':               record.status,
        'check_in_time':        record.check_in_time.isoformat() if record.check_in_time else None,
        'check_in_method':      record.check_in_method,
        'is_compensatory':      record.is_compensatory,
        'compensated_for_date': record.compensated_for_date.isoformat() if record.compensated_for_date else None,
        'created_by':           record.created_by.display_name if record.created_by else None,
    }


def _student_tallies(student):
    return {
        'id':              student.pk,
        'attendance_thu5': student.attendance_thu5,
        'attendance_cn':   student.attendance_cn,
    }


def _class_from_params(params):
    """(SchoolClass, None) or (None, error response)."""
    try:
        class_id = int_param(params, 'class')
    except ValueError as exc:
        return None, json_error(exc)
    if class_id is None:
        return None, json_error('Missing class.')
    return get_object_or_404(SchoolClass, pk=class_id), None


def _run(action, *args, **kwargs):
    """
    Call into services and turn its outcome into (result, None) or
    (None, error response).
    """
    try:
        return action(*args, **kwargs), None
    except services.AttendanceError as exc:
        return None, json_error(exc, status=exc.status_code)
    except DatabaseError:
        logger.exception('%s failed', action.__name__)
        return None, json_error(GENERIC_FAILURE, status=500)


# ── Regular sessions ──────────────────────────────────────────────────────────

@catechist_required
def session_sheet_json(req):
    school_class, error = _class_from_params(req.GET)
    if error:
        return error
    try:
        on_date = date_param(req.GET)
    except ValueError as exc:
        return json_error(exc)

    rows, error = _run(services.session_sheet, school_class, on_date)
    if error:
        return error
    return json_ok({
        'class_id': school_class.pk,
        'date':     on_date.isoformat(),
        'day_type': session_type_for_date(on_date),
        'rows': [
            {'student': student_summary(row['student']), 'status': row['status'],
             'record': record_summary(row['record'])}
            for row in rows
        ],
        'present': sum(1 for row in rows if row['status'] == AttendanceRecord.Status.PRESENT),
        'absent':  sum(1 for row in rows if row['status'] == AttendanceRecord.Status.ABSENT),
    })


@catechist_required
@require_POST_or_405
def mark_attendance_json(req):
    form = CheckInForm(req.POST)
    if not form.is_valid():
        return json_form_errors(form)

    student = form.cleaned_data['student']
    record, error = _run(
        services.check_in, student, form.cleaned_data['date'], form.cleaned_data['status'],
        created_by=req.user,
    )
    if error:
        return error
    return json_ok({'record': record_summary(record), 'student': _student_tallies(student)})


@catechist_required
@require_POST_or_405
def mark_all_present_json(req):
    form = MarkAllForm(req.POST)
    if not form.is_valid():
        return json_form_errors(form)

    count, error = _run(
        services.mark_all_present, form.cleaned_data['school_class'], form.cleaned_data['date'],
        created_by=req.user,
    )
    if error:
        return error
    return json_ok({'marked': count})


@catechist_required
@require_POST_or_405
def clear_attendance_json(req, record_id):
    try:
        student, error = _run(services.clear_attendance, record_id)
    except AttendanceRecord.DoesNotExist:
        return json_error('Attendance record not found.', status=404)
    if error:
        return error
    return json_ok({'student': _student_tallies(student)})


# ── Make-up sessions ──────────────────────────────────────────────────────────

@catechist_required
def compensatory_sheet_json(req):
    """Thursday state of every active student of a class for the week of ?date=."""
    school_class, error = _class_from_params(req.GET)
    if error:
        return error
    try:
        on_date = date_param(req.GET)
    except ValueError as exc:
        return json_error(exc)

    students = Student.objects.filter(
        school_class=school_class, status=RecordStatus.ACTIVE,
    ).order_by('full_name')
    views = services.week_statuses(students, on_date)
    return json_ok({
        'class_id':       school_class.pk,
        'date':           on_date.isoformat(),
        'anchor':         views[0].anchor.isoformat() if views else None,
        'week_start':     week_start(on_date).isoformat(),
        'week_end':       week_end(on_date).isoformat(),
        'can_compensate': is_compensable_weekday(on_date),
        'rows': [
            {
                'student':        student_summary(view.student),
                'state':          view.state.value,
                'is_credited':    view.is_credited,
                'can_compensate': view.can_compensate,
                'record':         record_summary(view.record),
            }
            for view in views
        ],
    })


@catechist_required
@require_POST_or_405
def mark_compensatory_json(req):
    form = CompensatoryCheckInForm(req.POST)
    if not form.is_valid():
        return json_form_errors(form)

    student = form.cleaned_data['student']
    record, error = _run(
        services.compensatory_check_in, student, form.cleaned_data['date'],
        created_by=req.user,
    )
    if error:
        return error
    return json_ok({'record': record_summary(record), 'student': _student_tallies(student)}, status=201)


# ── QR badges ─────────────────────────────────────────────────────────────────

@catechist_required
@require_POST_or_405
def qr_check_in_json(req):
    form = QRCheckInForm(req.POST)
    if not form.is_valid():
        return json_form_errors(form)

    record, error = _run(
        services.check_in_from_qr, form.cleaned_data['payload'], form.cleaned_data['date'],
        created_by=req.user,
    )
    if error:
        return error
    return json_ok({
        'record':  record_summary(record),
        'student': student_summary(record.student),
    })


@catechist_required
def student_badge_json(req, student_id):
    student = get_object_or_404(Student, pk=student_id)
    return json_ok({
        'student':    student_summary(student),
        'payload':    encode_badge(student),
        'qr_base64':  generate_badge_qr(student),
    })
