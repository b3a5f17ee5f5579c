"""
attendance/models.py
────────────────────
AttendanceRecord – one check-in event for one student.

Regular records are keyed by (student, attendance_date, day_type).
Compensatory (make-up) records are dated to the Thursday they stand in for,
carry is_compensatory=True, and are keyed by (student, compensated_for_date).
Both keys are enforced by the database so that two catechists marking the
same child at the same moment cannot both succeed.
"""

from django.conf import settings
from django.db import models
from django.db.models import Q

from .calendar import SUNDAY_SESSION, THURSDAY_SESSION


class AttendanceRecord(models.Model):

    class DayType(models.TextChoices):
        THURSDAY = THURSDAY_SESSION, 'Thứ năm'
        SUNDAY   = SUNDAY_SESSION,   'Chủ nhật'

    class Status(models.TextChoices):
        PRESENT = 'present', 'Present'
        ABSENT  = 'absent',  'Absent'

    class Method(models.TextChoices):
        MANUAL = 'manual', 'Manual'
        QR     = 'qr',     'QR code'
        IMPORT = 'import', 'Spreadsheet import'

    student = models.ForeignKey(
        'roster.Student',
        on_delete=models.CASCADE,
        related_name='attendance_records',
    )
    school_class = models.ForeignKey(
        'roster.SchoolClass',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='attendance_records',
        help_text='Class the student was in when checked in.',
    )
    school_year = models.ForeignKey(
        'roster.SchoolYear',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='attendance_records',
    )
    attendance_date = models.DateField(db_index=True)
    day_type = models.CharField(max_length=10, choices=DayType.choices)
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.PRESENT,
    )
    check_in_time = models.TimeField(null=True, blank=True)
    check_in_method = models.CharField(
        max_length=10,
        choices=Method.choices,
        default=Method.MANUAL,
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='attendance_records_created',
    )

    # Make-up bookkeeping
    is_compensatory = models.BooleanField(default=False)
    compensated_for_date = models.DateField(
        null=True,
        blank=True,
        help_text='The Thursday this make-up check-in substitutes for.',
    )
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Attendance Record'
        verbose_name_plural = 'Attendance Records'
        ordering = ['-attendance_date', 'student__full_name']
        constraints = [
            models.UniqueConstraint(
                fields=['student', 'attendance_date', 'day_type'],
                condition=Q(is_compensatory=False),
                name='unique_regular_check_in',
            ),
            models.UniqueConstraint(
                fields=['student', 'compensated_for_date'],
                condition=Q(is_compensatory=True, status='present'),
                name='unique_compensatory_credit',
            ),
            models.CheckConstraint(
                condition=Q(is_compensatory=False) | Q(compensated_for_date__isnull=False),
                name='compensatory_has_anchor',
            ),
        ]

    def __str__(self):
        kind = 'make-up' if self.is_compensatory else self.get_day_type_display()
        return f"{self.student} – {self.attendance_date} {kind} ({self.get_status_display()})"

    @property
    def is_credited(self):
        return self.status == self.Status.PRESENT
