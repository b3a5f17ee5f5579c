"""
roster/admin.py
───────────────
Admin registrations for SchoolClass, Student, SchoolYear.
"""

from django.contrib import admin

from .models import SchoolClass, SchoolYear, Student


@admin.register(SchoolClass)
class SchoolClassAdmin(admin.ModelAdmin):
    list_display  = ('name', 'branch', 'display_order', 'status', 'student_count')
    list_filter   = ('branch', 'status')
    search_fields = ('name',)
    ordering      = ('display_order', 'name')

    @admin.display(description='Students')
    def student_count(self, obj):
        return obj.students.count()


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display    = ('full_name', 'saint_name', 'student_code', 'school_class', 'status',
                       'attendance_thu5', 'attendance_cn')
    list_filter     = ('status', 'school_class__branch', 'school_class')
    search_fields   = ('full_name', 'saint_name', 'student_code')
    raw_id_fields   = ('school_class',)
    readonly_fields = ('attendance_thu5', 'attendance_cn', 'created_at', 'updated_at')

    fieldsets = (
        (None, {
            'fields': ('full_name', 'saint_name', 'student_code', 'school_class', 'status'),
        }),
        ('Personal', {
            'fields': ('date_of_birth', 'gender', 'parent_name', 'parent_phone',
                       'parent_phone_2', 'address', 'notes'),
        }),
        ('Scores', {
            'fields': ('score_45_hk1', 'score_exam_hk1', 'score_45_hk2', 'score_exam_hk2'),
        }),
        ('Attendance (computed)', {
            'fields': ('attendance_thu5', 'attendance_cn', 'created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )


@admin.register(SchoolYear)
class SchoolYearAdmin(admin.ModelAdmin):
    list_display  = ('name', 'start_date', 'end_date', 'total_weeks', 'is_current', 'status')
    list_filter   = ('is_current', 'status')
    search_fields = ('name', 'parish_name')
    actions       = ['make_current']

    @admin.action(description='Make the selected school year current')
    def make_current(self, request, queryset):
        if queryset.count() != 1:
            self.message_user(request, 'Select exactly one school year.', level='error')
            return
        queryset.get().make_current()
