"""
attendance/services.py
──────────────────────
Reconciliation rules for weekly attendance.

Every write to AttendanceRecord goes through this module so the Thursday
credit of a week can be earned exactly once, either by attending the
Thursday session or by a make-up check-in on another weekday.

Per (student, week) the Thursday slot moves through:

    UNMARKED ──► REGULAR_PRESENT        (checked in on Thursday)
             ──► COMPENSATED_PRESENT    (make-up on Mon/Tue/Wed/Fri/Sat)
             ──► ABSENT                 (explicitly marked absent)

REGULAR_PRESENT and COMPENSATED_PRESENT are mutually exclusive.  The checks
below reject the second path, and the partial unique constraints on
AttendanceRecord catch whatever slips between the check and the write.

Functions
─────────
check_in(student, on_date, status)          regular Thursday / Sunday check-in
mark_all_present(school_class, on_date)     bulk present for unmarked students
compensatory_check_in(student, on_date)     make-up check-in for the week
check_in_from_qr(payload, on_date)          badge scan → one of the above
clear_attendance(record_id)                 delete one record
week_status / week_statuses                 Thursday state for a week
session_sheet(school_class, on_date)        per-student rows for one session
recompute_tallies(student)                  refresh Student counters
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from django.db import IntegrityError, models, transaction
from django.db.models import Count, Q
from django.utils import timezone

from roster.choices import RecordStatus
from roster.models import SchoolYear, Student

from .badges import decode_badge
from .calendar import (
    SUNDAY_SESSION,
    THURSDAY_SESSION,
    anchor_thursday,
    is_compensable_weekday,
    session_type_for_date,
)
from .models import AttendanceRecord

logger = logging.getLogger(__name__)

PRESENT = AttendanceRecord.Status.PRESENT


# ── Errors ────────────────────────────────────────────────────────────────────

class AttendanceError(Exception):
    """
    A check-in was refused.  str(exc) is safe to show to the user and
    status_code is what the JSON views answer with.
    """

    default_message = 'Attendance could not be recorded.'
    status_code = 400

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class NotASessionDay(AttendanceError):
    default_message = 'Attendance can only be taken on Thursday or Sunday.'


class NotACompensableDay(AttendanceError):
    default_message = 'Make-up attendance is only allowed on Monday, Tuesday, Wednesday, Friday or Saturday.'


class InactiveStudent(AttendanceError):
    default_message = 'Only active students can be checked in.'


class AlreadyAttendedThursday(AttendanceError):
    default_message = 'This student already attended Thursday this week.'
    status_code = 409


class AlreadyCompensated(AttendanceError):
    default_message = 'This student has already been compensated this week.'
    status_code = 409


class AlreadyRecorded(AttendanceError):
    default_message = 'A record already exists for this day.'
    status_code = 409


class InvalidBadge(AttendanceError):
    default_message = 'Unrecognised QR code.'


# ── Read-side value types ─────────────────────────────────────────────────────

class WeekState(models.TextChoices):
    UNMARKED            = 'unmarked',            'Not marked'
    REGULAR_PRESENT     = 'regular_present',     'Attended Thursday'
    COMPENSATED_PRESENT = 'compensated_present', 'Made up'
    ABSENT              = 'absent',              'Absent'


@dataclass(frozen=True)
class StudentAttendanceView:
    """Thursday-slot state of one student for the week around *anchor*."""

    student: Student
    anchor: date
    state: WeekState
    record: Optional[AttendanceRecord] = None

    @property
    def is_credited(self):
        return self.state in (WeekState.REGULAR_PRESENT, WeekState.COMPENSATED_PRESENT)

    @property
    def can_compensate(self):
        return not self.is_credited


def _resolve_state(regular, compensatory):
    if regular is not None and regular.status == PRESENT:
        return WeekState.REGULAR_PRESENT, regular
    if compensatory is not None:
        return WeekState.COMPENSATED_PRESENT, compensatory
    if regular is not None:
        return WeekState.ABSENT, regular
    return WeekState.UNMARKED, None


def week_statuses(students, on_date):
    """StudentAttendanceView for every student, for the week containing *on_date*."""
    students = list(students)
    anchor = anchor_thursday(on_date)
    records = AttendanceRecord.objects.filter(
        student_id__in=[s.pk for s in students],
    ).filter(
        Q(attendance_date=anchor, day_type=THURSDAY_SESSION, is_compensatory=False)
        | Q(is_compensatory=True, compensated_for_date=anchor, status=PRESENT)
    )

    regular, compensated = {}, {}
    for record in records:
        target = compensated if record.is_compensatory else regular
        target[record.student_id] = record

    views = []
    for student in students:
        state, record = _resolve_state(regular.get(student.pk), compensated.get(student.pk))
        views.append(StudentAttendanceView(student=student, anchor=anchor, state=state, record=record))
    return views


def week_status(student, on_date):
    return week_statuses([student], on_date)[0]


def session_sheet(school_class, on_date):
    """
    Rows for the attendance sheet of *school_class* on *on_date*: every active
    student with the record that currently counts for that session, if any.
    On a Thursday a make-up credit for the week is shown when no regular
    record exists.  Raises NotASessionDay for any other weekday.
    """
    day_type = session_type_for_date(on_date)
    if day_type is None:
        raise NotASessionDay()

    students = list(
        Student.objects
        .filter(school_class=school_class, status=RecordStatus.ACTIVE)
        .order_by('full_name')
    )
    records = (
        AttendanceRecord.objects
        .filter(student__in=students, attendance_date=on_date, day_type=day_type)
        .select_related('created_by')
    )

    regular, compensated = {}, {}
    for record in records:
        if record.is_compensatory:
            if record.status == PRESENT:
                compensated[record.student_id] = record
        else:
            regular[record.student_id] = record

    rows = []
    for student in students:
        record = regular.get(student.pk) or compensated.get(student.pk)
        rows.append({
            'student':  student,
            'record':   record,
            'status':   record.status if record else None,
            'day_type': day_type,
        })
    return rows


# ── Tallies ───────────────────────────────────────────────────────────────────

def recompute_tallies(student, school_year=None):
    """
    Recount the student's credited sessions and store them on the Student.

    Thursdays are counted per distinct date: a make-up record is stored on
    its anchor Thursday, so a week can never be counted twice.
    Scoped to the current school year when one exists.
    """
    school_year = school_year or SchoolYear.current()
    records = AttendanceRecord.objects.filter(student=student, status=PRESENT)
    if school_year is not None:
        records = records.filter(
            attendance_date__range=(school_year.start_date, school_year.end_date),
        )

    counts = records.aggregate(
        thu5=Count('attendance_date', filter=Q(day_type=THURSDAY_SESSION), distinct=True),
        cn=Count('attendance_date', filter=Q(day_type=SUNDAY_SESSION), distinct=True),
    )
    Student.objects.filter(pk=student.pk).update(
        attendance_thu5=counts['thu5'],
        attendance_cn=counts['cn'],
    )
    student.attendance_thu5 = counts['thu5']
    student.attendance_cn = counts['cn']
    return counts['thu5'], counts['cn']


# ── Writes ────────────────────────────────────────────────────────────────────

def _check_in_time():
    return timezone.localtime().time().replace(microsecond=0)


def _lock_student(student):
    """Serialise concurrent writes for one student (no-op on SQLite)."""
    Student.objects.select_for_update().filter(pk=student.pk).first()


def check_in(student, on_date, status=PRESENT, *, created_by=None,
             method=AttendanceRecord.Method.MANUAL):
    """
    Record *student* as present/absent at the regular session on *on_date*.

    Re-checking the same student on the same session overwrites the status
    and time of the existing record.  A Thursday check-in is refused when the
    week has already been credited by a make-up check-in.
    """
    day_type = session_type_for_date(on_date)
    if day_type is None:
        raise NotASessionDay()
    if not student.is_active:
        raise InactiveStudent()

    try:
        with transaction.atomic():
            _lock_student(student)
            if day_type == THURSDAY_SESSION and AttendanceRecord.objects.filter(
                student=student,
                is_compensatory=True,
                compensated_for_date=on_date,
                status=PRESENT,
            ).exists():
                raise AlreadyCompensated()

            record, created = AttendanceRecord.objects.update_or_create(
                student=student,
                attendance_date=on_date,
                day_type=day_type,
                is_compensatory=False,
                defaults={
                    'status':          status,
                    'check_in_time':   _check_in_time(),
                    'check_in_method': method,
                    'created_by':      created_by,
                    'school_class':    student.school_class,
                    'school_year':     SchoolYear.current(),
                },
            )
    except AttendanceError as exc:
        logger.info('Check-in refused for student %s on %s: %s', student.pk, on_date, exc)
        raise
    except IntegrityError as exc:
        logger.info('Duplicate check-in for student %s on %s %s', student.pk, on_date, day_type)
        raise AlreadyRecorded() from exc

    recompute_tallies(student)
    logger.info(
        'Student %s marked %s for %s %s (%s)',
        student.pk, status, day_type, on_date, 'new' if created else 'updated',
    )
    return record


def mark_all_present(school_class, on_date, *, created_by=None):
    """
    Mark every active, not-yet-marked student of *school_class* present for
    the session on *on_date*.  Students whose Thursday is already credited by
    a make-up check-in are skipped.  Returns the number of students marked.
    """
    day_type = session_type_for_date(on_date)
    if day_type is None:
        raise NotASessionDay()

    students = Student.objects.filter(school_class=school_class, status=RecordStatus.ACTIVE)
    marked_ids = set(
        AttendanceRecord.objects
        .filter(
            student__in=students,
            attendance_date=on_date,
            day_type=day_type,
            is_compensatory=False,
        )
        .values_list('student_id', flat=True)
    )
    if day_type == THURSDAY_SESSION:
        marked_ids |= set(
            AttendanceRecord.objects
            .filter(
                student__in=students,
                is_compensatory=True,
                compensated_for_date=on_date,
                status=PRESENT,
            )
            .values_list('student_id', flat=True)
        )

    count = 0
    for student in students.exclude(pk__in=marked_ids):
        try:
            check_in(student, on_date, PRESENT, created_by=created_by)
        except AttendanceError:
            continue
        count += 1
    logger.info('Marked %d students present in class %s on %s', count, school_class.pk, on_date)
    return count


def compensatory_check_in(student, on_date, *, created_by=None,
                          method=AttendanceRecord.Method.MANUAL):
    """
    Credit this week's Thursday to *student* for a make-up session held on
    *on_date*.  The record is stored on the anchor Thursday so that regular
    and make-up credit are tallied on the same date.
    """
    if not is_compensable_weekday(on_date):
        raise NotACompensableDay()
    if not student.is_active:
        raise InactiveStudent()

    anchor = anchor_thursday(on_date)
    try:
        with transaction.atomic():
            _lock_student(student)
            credited = AttendanceRecord.objects.filter(student=student, status=PRESENT)
            if credited.filter(
                attendance_date=anchor,
                day_type=THURSDAY_SESSION,
                is_compensatory=False,
            ).exists():
                raise AlreadyAttendedThursday()
            if credited.filter(is_compensatory=True, compensated_for_date=anchor).exists():
                raise AlreadyCompensated()

            record = AttendanceRecord.objects.create(
                student=student,
                school_class=student.school_class,
                school_year=SchoolYear.current(),
                attendance_date=anchor,
                day_type=THURSDAY_SESSION,
                status=PRESENT,
                check_in_time=_check_in_time(),
                check_in_method=method,
                created_by=created_by,
                is_compensatory=True,
                compensated_for_date=anchor,
                notes=f'Make-up on {on_date.isoformat()} for Thursday {anchor.isoformat()}',
            )
    except AttendanceError as exc:
        logger.info('Make-up refused for student %s on %s: %s', student.pk, on_date, exc)
        raise
    except IntegrityError as exc:
        logger.info('Duplicate make-up for student %s, week of %s', student.pk, anchor)
        raise AlreadyRecorded() from exc

    recompute_tallies(student)
    logger.info('Student %s made up Thursday %s on %s', student.pk, anchor, on_date)
    return record


def check_in_from_qr(payload, on_date, *, created_by=None):
    """
    Check in the student encoded in a badge *payload*.  On a session day this
    is a regular present check-in; on any other weekday it is a make-up.
    """
    try:
        student_id, student_code = decode_badge(payload)
    except ValueError as exc:
        raise InvalidBadge() from exc

    student = Student.objects.filter(pk=student_id).first()
    if student is None or (student.student_code or '') != student_code:
        raise InvalidBadge()

    if session_type_for_date(on_date) is not None:
        record = check_in(student, on_date, PRESENT, created_by=created_by,
                          method=AttendanceRecord.Method.QR)
    else:
        record = compensatory_check_in(student, on_date, created_by=created_by,
                                       method=AttendanceRecord.Method.QR)
    return record


def clear_attendance(record_id):
    """
    Delete one attendance record and refresh the owner's tallies.
    Raises AttendanceRecord.DoesNotExist for an unknown id.
    """
    record = AttendanceRecord.objects.select_related('student').get(pk=record_id)
    student = record.student
    record.delete()
    recompute_tallies(student)
    logger.info('Cleared attendance record %s of student %s', record_id, student.pk)
    return student
