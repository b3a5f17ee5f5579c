"""
attendance/calendar.py
──────────────────────
Pure calendar arithmetic for the weekly catechism sessions.

Weeks run Monday → Sunday.  Each week has two regular sessions:
    thu5 – Thursday (Type A, the main catechism session)
    cn   – Sunday   (Type B)

Make-up (compensatory) check-ins are taken on any other weekday and are
credited to the Thursday of the same week, the week's "anchor" date.

Everything here works on datetime.date values only: no I/O, no time zones.
Callers convert "now" to a local date first (django.utils.timezone.localdate).
"""

import math
from datetime import timedelta

THURSDAY_SESSION = 'thu5'
SUNDAY_SESSION = 'cn'

# Day indexes in the Sunday=0 … Saturday=6 convention
SUNDAY = 0
THURSDAY = 4
COMPENSABLE_DAYS = frozenset({1, 2, 3, 5, 6})

_SESSION_DAY = {THURSDAY_SESSION: THURSDAY, SUNDAY_SESSION: SUNDAY}


def day_index(day):
    """Weekday of *day* with Sunday=0, Monday=1 … Saturday=6."""
    return day.isoweekday() % 7


def week_start(day):
    """The Monday on or before *day*."""
    index = day_index(day)
    if index == SUNDAY:
        return day - timedelta(days=6)
    return day - timedelta(days=index - 1)


def week_end(day):
    """The Sunday on or after *day*."""
    index = day_index(day)
    if index == SUNDAY:
        return day
    return day + timedelta(days=7 - index)


def anchor_thursday(day):
    """
    The Thursday that *day*'s Mon–Sun week resolves to.
    A Sunday belongs to the week that started the Monday before it, so it
    resolves to the preceding Thursday.
    """
    index = day_index(day)
    days_to_thursday = -3 if index == SUNDAY else THURSDAY - index
    return day + timedelta(days=days_to_thursday)


def is_compensable_weekday(day):
    """True on Mon, Tue, Wed, Fri and Sat, the days a make-up check-in is allowed."""
    return day_index(day) in COMPENSABLE_DAYS


def session_type_for_date(day):
    """'thu5' on Thursdays, 'cn' on Sundays, None on any other day."""
    index = day_index(day)
    if index == THURSDAY:
        return THURSDAY_SESSION
    if index == SUNDAY:
        return SUNDAY_SESSION
    return None


def last_session_dates(session_type, today, count=3):
    """
    The *count* most recent dates of *session_type* on or before *today*,
    oldest first.
    """
    days_back = (day_index(today) - _SESSION_DAY[session_type]) % 7
    latest = today - timedelta(days=days_back)
    return [latest - timedelta(weeks=i) for i in reversed(range(count))]


def calculate_total_weeks(start_date, end_date):
    """Number of (possibly partial) weeks spanned by two dates."""
    if not start_date or not end_date:
        return 0
    return math.ceil(abs((end_date - start_date).days) / 7)


def week_number(start_date, day):
    """1-based week of *day* within a school year starting on *start_date*."""
    return (week_start(day) - week_start(start_date)).days // 7 + 1
