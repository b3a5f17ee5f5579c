"""
URL configuration for the parish project.

── Routing ────────────────────────────────────────────────────────────────────
  path('', include('core.urls')),                    # landing summary
  path('roster/', include('roster.urls')),           # classes, students, school year
  path('attendance/', include('attendance.urls')),   # check-in, make-up, QR
  path('performance/', include('performance.urls')), # dashboards

Every app answers with JSON; the client UI renders it.
"""

from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path('admin/', admin.site.urls),

    path('', include('core.urls')),
    path('roster/', include('roster.urls')),
    path('attendance/', include('attendance.urls')),
    path('performance/', include('performance.urls')),
]

handler404 = 'core.views.handler404'
handler500 = 'core.views.handler500'
