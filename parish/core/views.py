"""
core/views.py
─────────────
Landing summary for signed-in staff.
Custom error handlers (404 / 500) are registered in parish/urls.py and
answer in the same JSON shape as every other endpoint.
"""

from django.contrib.auth import get_user_model
from django.utils import timezone

from attendance.calendar import anchor_thursday, session_type_for_date, week_number
from roster.choices import RecordStatus
from roster.models import SchoolClass, SchoolYear, Student
from roster.utils import school_year_summary

from .utils import catechist_required, json_error, json_ok


@catechist_required
def home_view(req):
    """Who is signed in, today's session and the current school year at a glance."""
    today = timezone.localdate()
    school_year = SchoolYear.current()
    user = req.user

    return json_ok({
        'user': {
            'id':           user.pk,
            'display_name': user.display_name,
            'role':         user.role,
            'class_id':     user.school_class_id,
        },
        'parish_name': school_year.parish_name if school_year else '',
        'school_year': school_year_summary(school_year),
        'today': {
            'date':        today.isoformat(),
            'day_type':    session_type_for_date(today),
            'anchor':      anchor_thursday(today).isoformat(),
            'week_number': week_number(school_year.start_date, today) if school_year else None,
        },
        'counts': {
            'students':   Student.objects.filter(status=RecordStatus.ACTIVE).count(),
            'classes':    SchoolClass.objects.filter(status=RecordStatus.ACTIVE).count(),
            'catechists': get_user_model().objects.filter(status=RecordStatus.ACTIVE).count(),
        },
    })


# ── Custom error pages ────────────────────────────────────────────────────────

def handler404(req, exception):
    return json_error('Not found.', status=404)


def handler500(req):
    return json_error('Internal server error.', status=500)
