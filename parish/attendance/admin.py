"""
attendance/admin.py
───────────────────
Admin registration for AttendanceRecord.

Records are read-only here: every write goes through attendance.services,
which enforces the one-credit-per-Thursday rules.  Records deleted here go
through clear_attendance so the student's tallies stay in step.
"""

from django.contrib import admin

from .models import AttendanceRecord
from .services import clear_attendance


@admin.register(AttendanceRecord)
class AttendanceRecordAdmin(admin.ModelAdmin):
    list_display    = ('student', 'attendance_date', 'day_type', 'status', 'is_compensatory',
                       'check_in_method', 'check_in_time', 'created_by')
    list_filter     = ('day_type', 'status', 'is_compensatory', 'check_in_method', 'school_class')
    search_fields   = ('student__full_name', 'student__saint_name', 'student__student_code')
    date_hierarchy  = 'attendance_date'
    raw_id_fields   = ('student', 'school_class', 'created_by')
    readonly_fields = ('created_at', 'updated_at')

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def delete_model(self, request, obj):
        clear_attendance(obj.pk)

    def delete_queryset(self, request, queryset):
        for record_id in queryset.values_list('pk', flat=True):
            clear_attendance(record_id)
