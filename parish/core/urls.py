"""
core/urls.py
────────────
Include in the root urls.py with:
    path('', include('core.urls')),
"""

from django.urls import path

from . import views

urlpatterns = [
    path('', views.home_view, name='homepage'),
]
