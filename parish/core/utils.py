"""
core/utils.py
─────────────
Helpers shared by every JSON view module (roster, attendance, performance).
Nothing here imports from an app's views (no circular imports).
"""

from functools import wraps

from django.http import HttpResponseNotAllowed, JsonResponse
from django.utils import timezone
from django.utils.dateparse import parse_date


# ── Responses ─────────────────────────────────────────────────────────────────

def json_ok(data=None, status=200):
    payload = {'status': 'ok'}
    payload.update(data or {})
    return JsonResponse(payload, status=status)


def json_error(message, status=400):
    return JsonResponse({'status': 'error', 'message': str(message)}, status=status)


def json_form_errors(form):
    """400 with every field error of *form*, keyed by field name."""
    errors = {
        field: [error['message'] for error in field_errors]
        for field, field_errors in form.errors.get_json_data().items()
    }
    return JsonResponse({'status': 'error', 'errors': errors}, status=400)


# ── Access control ────────────────────────────────────────────────────────────

def catechist_required(view_fn):
    """
    Decorator: anonymous users → 401, catechists whose account has been set
    INACTIVE → 403.  Every parish role may pass.
    """
    @wraps(view_fn)
    def wrapper(req, *args, **kwargs):
        if not req.user.is_authenticated:
            return json_error('Authentication required.', status=401)
        if not req.user.is_active or not req.user.is_active_member:
            return json_error('Your account is inactive.', status=403)
        return view_fn(req, *args, **kwargs)
    return wrapper


def parish_admin_required(view_fn):
    """Decorator: like catechist_required, but only for the parish board."""
    @wraps(view_fn)
    @catechist_required
    def wrapper(req, *args, **kwargs):
        if not req.user.is_parish_admin:
            return json_error('Access denied – parish board only.', status=403)
        return view_fn(req, *args, **kwargs)
    return wrapper


def require_POST_or_405(view_fn):
    """Decorator: return 405 for any non-POST request."""
    @wraps(view_fn)
    def wrapper(req, *args, **kwargs):
        if req.method != 'POST':
            return HttpResponseNotAllowed(['POST'])
        return view_fn(req, *args, **kwargs)
    return wrapper


# ── Query parameters ──────────────────────────────────────────────────────────

def date_param(params, name='date'):
    """
    Read an ISO date (YYYY-MM-DD) from *params*.  Missing → today's local
    date.  Raises ValueError for anything unparseable.
    """
    raw = (params.get(name) or '').strip()
    if not raw:
        return timezone.localdate()
    parsed = parse_date(raw)
    if parsed is None:
        raise ValueError(f'Invalid date "{raw}", expected YYYY-MM-DD.')
    return parsed


def int_param(params, name):
    """Integer query parameter, or None when absent.  Raises ValueError when malformed."""
    raw = (params.get(name) or '').strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'Invalid {name} "{raw}".')
