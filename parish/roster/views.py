"""
roster/views.py
───────────────
JSON endpoints for classes, students, scores and the school-year settings.

Every view requires a signed-in catechist; class writes and editing the
school year are reserved for the parish board.  Edits are partial: fields
left out of the POST keep their stored value.
"""

import logging

from django.db import DatabaseError
from django.forms.models import model_to_dict
from django.shortcuts import get_object_or_404

from core.utils import (
    catechist_required,
    int_param,
    json_error,
    json_form_errors,
    json_ok,
    parish_admin_required,
    require_POST_or_405,
)

from .choices import RecordStatus
from .forms import SchoolClassForm, SchoolYearForm, StudentForm, StudentScoreForm
from .models import SchoolClass, SchoolYear, Student
from .utils import (
    class_summary,
    classes_by_branch,
    current_total_weeks,
    filter_students,
    school_year_summary,
    student_detail,
    student_row,
)

logger = logging.getLogger(__name__)

SAVE_FAILED = '%s could not be saved. Please try again.'


def _merged(instance, form_class, data):
    """Stored values of *instance* overlaid with the submitted *data*."""
    merged = model_to_dict(instance, fields=form_class._meta.fields)
    merged.update(data.dict())
    return merged


# ── Classes ───────────────────────────────────────────────────────────────────

@catechist_required
def class_list_json(req):
    return json_ok({'branches': classes_by_branch()})


@parish_admin_required
@require_POST_or_405
def create_class_json(req):
    form = SchoolClassForm(req.POST)
    if not form.is_valid():
        return json_form_errors(form)
    try:
        school_class = form.save()
    except DatabaseError:
        logger.exception('Could not create class %r', form.cleaned_data.get('name'))
        return json_error(SAVE_FAILED % 'The class', status=500)
    logger.info('Class %s "%s" created by %s', school_class.pk, school_class.name, req.user)
    return json_ok({'class': class_summary(school_class)}, status=201)


@parish_admin_required
@require_POST_or_405
def edit_class_json(req, class_id):
    school_class = get_object_or_404(SchoolClass, pk=class_id)
    form = SchoolClassForm(_merged(school_class, SchoolClassForm, req.POST), instance=school_class)
    if not form.is_valid():
        return json_form_errors(form)
    try:
        school_class = form.save()
    except DatabaseError:
        logger.exception('Could not update class %s', class_id)
        return json_error(SAVE_FAILED % 'The class', status=500)
    logger.info('Class %s "%s" updated by %s', school_class.pk, school_class.name, req.user)
    return json_ok({'class': class_summary(school_class)})


@parish_admin_required
@require_POST_or_405
def delete_class_json(req, class_id):
    """Delete a class.  Its students stay on the roster without a class."""
    school_class = get_object_or_404(SchoolClass, pk=class_id)
    name = school_class.name
    try:
        school_class.delete()
    except DatabaseError:
        logger.exception('Could not delete class %s', class_id)
        return json_error('The class could not be deleted. Please try again.', status=500)
    logger.info('Class %s "%s" deleted by %s', class_id, name, req.user)
    return json_ok({'deleted': class_id})


# ── Students ──────────────────────────────────────────────────────────────────

@catechist_required
def student_list_json(req):
    try:
        class_id = int_param(req.GET, 'class')
    except ValueError as exc:
        return json_error(exc)

    status = req.GET.get('status', '').strip().upper()
    if status and status not in RecordStatus.values:
        return json_error(f'Unknown status "{status}".')

    total_weeks = current_total_weeks()
    students = filter_students(class_id, status, req.GET.get('q', '').strip())
    return json_ok({
        'total_weeks': total_weeks,
        'students':    [student_row(s, total_weeks) for s in students],
    })


@catechist_required
def student_detail_json(req, student_id):
    student = get_object_or_404(Student.objects.select_related('school_class'), pk=student_id)
    return json_ok({'student': student_detail(student, current_total_weeks())})


@catechist_required
@require_POST_or_405
def create_student_json(req):
    form = StudentForm(req.POST)
    if not form.is_valid():
        return json_form_errors(form)
    try:
        student = form.save()
    except DatabaseError:
        logger.exception('Could not create student %r', form.cleaned_data.get('full_name'))
        return json_error(SAVE_FAILED % 'The student', status=500)
    logger.info('Student %s created by %s', student.pk, req.user)
    return json_ok({'student': student_detail(student, current_total_weeks())}, status=201)


@catechist_required
@require_POST_or_405
def edit_student_json(req, student_id):
    student = get_object_or_404(Student, pk=student_id)
    form = StudentForm(_merged(student, StudentForm, req.POST), instance=student)
    if not form.is_valid():
        return json_form_errors(form)
    try:
        student = form.save()
    except DatabaseError:
        logger.exception('Could not update student %s', student_id)
        return json_error(SAVE_FAILED % 'The student', status=500)
    logger.info('Student %s updated by %s', student.pk, req.user)
    return json_ok({'student': student_detail(student, current_total_weeks())})


@catechist_required
@require_POST_or_405
def delete_student_json(req, student_id):
    """Delete a student together with their attendance history."""
    student = get_object_or_404(Student, pk=student_id)
    try:
        student.delete()
    except DatabaseError:
        logger.exception('Could not delete student %s', student_id)
        return json_error('The student could not be deleted. Please try again.', status=500)
    logger.info('Student %s deleted by %s', student_id, req.user)
    return json_ok({'deleted': student_id})


@catechist_required
@require_POST_or_405
def save_scores_json(req, student_id):
    student = get_object_or_404(Student, pk=student_id)
    form = StudentScoreForm(req.POST, instance=student)
    if not form.is_valid():
        return json_form_errors(form)
    try:
        student = form.save()
    except DatabaseError:
        logger.exception('Could not save scores of student %s', student_id)
        return json_error(SAVE_FAILED % 'Scores', status=500)
    logger.info('Scores of student %s updated by %s', student.pk, req.user)
    return json_ok({'student': student_row(student, current_total_weeks())})


# ── School year ───────────────────────────────────────────────────────────────

@catechist_required
def school_year_json(req):
    """
    GET  – the current school year (null when none is set up yet) and the
           week count the aggregator is using.
    POST – board only: create or update the current school year.
    """
    current = SchoolYear.current()
    if req.method == 'POST':
        if not req.user.is_parish_admin:
            return json_error('Access denied – parish board only.', status=403)
        form = SchoolYearForm(req.POST, instance=current)
        if not form.is_valid():
            return json_form_errors(form)
        try:
            school_year = form.save()
            school_year.make_current()
        except DatabaseError:
            logger.exception('Could not save school year %r', form.cleaned_data.get('name'))
            return json_error(SAVE_FAILED % 'The school year', status=500)
        logger.info('School year %s "%s" saved by %s', school_year.pk, school_year.name, req.user)
        current = school_year

    return json_ok({
        'school_year': school_year_summary(current),
        'total_weeks': current_total_weeks(),
    })
