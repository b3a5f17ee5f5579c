"""
attendance/urls.py
──────────────────
Include in the root urls.py with:
    path('attendance/', include('attendance.urls')),
"""

from django.urls import path

from . import views

urlpatterns = [
    # Regular Thursday / Sunday sessions
    path('sheet/',                   views.session_sheet_json,     name='session_sheet'),
    path('mark/',                    views.mark_attendance_json,   name='mark_attendance'),
    path('mark-all/',                views.mark_all_present_json,  name='mark_all_present'),
    path('clear/<int:record_id>/',   views.clear_attendance_json,  name='clear_attendance'),

    # Make-up check-ins
    path('compensatory/',            views.compensatory_sheet_json, name='compensatory_sheet'),
    path('compensatory/mark/',       views.mark_compensatory_json,  name='mark_compensatory'),

    # QR badges
    path('qr/',                               views.qr_check_in_json,   name='qr_check_in'),
    path('students/<int:student_id>/badge/',  views.student_badge_json, name='student_badge'),
]
