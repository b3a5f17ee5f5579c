"""
performance/urls.py
───────────────────
Include in the root urls.py with:
    path('performance/', include('performance.urls')),
"""

from django.urls import path

from . import views

urlpatterns = [
    path('',       views.overview_json,         name='performance_overview'),
    path('trend/', views.attendance_trend_json, name='attendance_trend'),
]
