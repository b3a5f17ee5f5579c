"""
performance/views.py
────────────────────
Dashboard endpoints: overview numbers and the three-session attendance trend.
"""

from attendance.calendar import SUNDAY_SESSION, THURSDAY_SESSION
from core.utils import catechist_required, date_param, json_error, json_ok
from roster.utils import current_total_weeks

from .stats import active_students_by_branch, attendance_trend, classification_overview


@catechist_required
def overview_json(req):
    total_weeks = current_total_weeks()
    by_branch = active_students_by_branch()
    return json_ok({
        'total_weeks':        total_weeks,
        'students':           sum(by_branch.values()),
        'students_by_branch': by_branch,
        'classifications':    classification_overview(total_weeks),
    })


@catechist_required
def attendance_trend_json(req):
    """?session=thu5 (default) or cn; ?date= moves "today" for past reports."""
    session = req.GET.get('session', THURSDAY_SESSION)
    if session not in (THURSDAY_SESSION, SUNDAY_SESSION):
        return json_error(f'Unknown session "{session}".')
    try:
        today = date_param(req.GET)
    except ValueError as exc:
        return json_error(exc)
    return json_ok(attendance_trend(session, today))
