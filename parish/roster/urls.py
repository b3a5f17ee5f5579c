"""
roster/urls.py
──────────────
Include in the root urls.py with:
    path('roster/', include('roster.urls')),
"""

from django.urls import path

from . import views

urlpatterns = [
    path('classes/',                          views.class_list_json,     name='class_list'),
    path('classes/new/',                      views.create_class_json,   name='create_class'),
    path('classes/<int:class_id>/edit/',      views.edit_class_json,     name='edit_class'),
    path('classes/<int:class_id>/delete/',    views.delete_class_json,   name='delete_class'),
    path('students/',                         views.student_list_json,   name='student_list'),
    path('students/new/',                     views.create_student_json, name='create_student'),
    path('students/<int:student_id>/',        views.student_detail_json, name='student_detail'),
    path('students/<int:student_id>/edit/',   views.edit_student_json,   name='edit_student'),
    path('students/<int:student_id>/delete/', views.delete_student_json, name='delete_student'),
    path('students/<int:student_id>/scores/', views.save_scores_json,    name='save_scores'),
    path('school-year/',                      views.school_year_json,    name='school_year'),
]
