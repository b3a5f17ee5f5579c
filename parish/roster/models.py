"""
roster/models.py
────────────────
Who is taught, where, and in which school year.

SchoolClass – a named group inside one Branch, e.g. "Ấu Nhi 2".
Student     – a child enrolled in one SchoolClass, with raw scores and the
              cumulative attendance tallies shown on the roster.
SchoolYear  – one row per year; exactly one row carries is_current=True.
"""

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models, transaction
from django.db.models import Q

from attendance.calendar import calculate_total_weeks

from .choices import Branch, RecordStatus

SCORE_VALIDATORS = [MinValueValidator(0), MaxValueValidator(10)]


class SchoolClass(models.Model):
    """
    One class inside a branch.  display_order drives the order classes are
    listed in pickers and reports.
    """

    name = models.CharField(
        max_length=100,
        help_text='Class name, e.g. "Ấu Nhi 2".',
    )
    branch = models.CharField(
        max_length=20,
        choices=Branch.choices,
        help_text='The age / programme tier this class belongs to.',
    )
    display_order = models.PositiveIntegerField(default=0)
    status = models.CharField(
        max_length=10,
        choices=RecordStatus.choices,
        default=RecordStatus.ACTIVE,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Class'
        verbose_name_plural = 'Classes'
        ordering = ['display_order', 'name']

    def __str__(self):
        return f"{self.name} ({self.get_branch_display()})"


class Student(models.Model):
    """
    A child on the roster.

    Score slots are nullable: NULL means "not yet scored" and is displayed as
    such, while the aggregator treats it as 0 when averaging.

    attendance_thu5 / attendance_cn are derived counters.  They are rewritten
    by attendance.services.recompute_tallies after every check-in or delete
    and are never edited by hand.
    """

    class Gender(models.TextChoices):
        MALE   = 'male',   'Nam'
        FEMALE = 'female', 'Nữ'

    full_name = models.CharField(max_length=200)
    saint_name = models.CharField(max_length=100, blank=True)
    student_code = models.CharField(
        max_length=20,
        unique=True,
        null=True,
        blank=True,
        help_text='Optional roster code, e.g. "HA172336".',
    )
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=10, choices=Gender.choices, blank=True)
    parent_name = models.CharField(max_length=200, blank=True)
    parent_phone = models.CharField(max_length=20, blank=True)
    parent_phone_2 = models.CharField(max_length=20, blank=True)
    address = models.CharField(max_length=255, blank=True)
    notes = models.TextField(blank=True)

    school_class = models.ForeignKey(
        SchoolClass,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='students',
    )
    status = models.CharField(
        max_length=10,
        choices=RecordStatus.choices,
        default=RecordStatus.ACTIVE,
        help_text='Only ACTIVE students can be checked in.',
    )

    # ── Raw scores (term 1 = HK1, term 2 = HK2) ──────────────────────────────
    score_45_hk1 = models.FloatField(null=True, blank=True, validators=SCORE_VALIDATORS)
    score_exam_hk1 = models.FloatField(null=True, blank=True, validators=SCORE_VALIDATORS)
    score_45_hk2 = models.FloatField(null=True, blank=True, validators=SCORE_VALIDATORS)
    score_exam_hk2 = models.FloatField(null=True, blank=True, validators=SCORE_VALIDATORS)

    # ── Derived attendance tallies ────────────────────────────────────────────
    attendance_thu5 = models.PositiveIntegerField(default=0)
    attendance_cn = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Student'
        verbose_name_plural = 'Students'
        ordering = ['full_name']

    def __str__(self):
        return self.display_name

    @property
    def display_name(self):
        return f"{self.saint_name} {self.full_name}" if self.saint_name else self.full_name

    @property
    def is_active(self):
        return self.status == RecordStatus.ACTIVE


class SchoolYear(models.Model):
    """
    A school year, e.g. "2025 - 2026".  The aggregator reads total_weeks from
    the current row; see current() for the fallback when none exists.
    """

    name = models.CharField(max_length=50)
    start_date = models.DateField()
    end_date = models.DateField()
    total_weeks = models.PositiveIntegerField(
        blank=True,
        help_text='Defaults to the number of weeks between start and end date.',
    )
    parish_name = models.CharField(max_length=200, blank=True)
    is_current = models.BooleanField(default=False)
    status = models.CharField(
        max_length=10,
        choices=RecordStatus.choices,
        default=RecordStatus.ACTIVE,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'School Year'
        verbose_name_plural = 'School Years'
        ordering = ['-start_date']
        constraints = [
            models.UniqueConstraint(
                fields=['is_current'],
                condition=Q(is_current=True),
                name='one_current_school_year',
            ),
        ]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if self.total_weeks is None:
            self.total_weeks = calculate_total_weeks(self.start_date, self.end_date)
        super().save(*args, **kwargs)

    def contains(self, day):
        return self.start_date <= day <= self.end_date

    @classmethod
    def current(cls):
        """The current school year, or None when the table is still empty."""
        return cls.objects.filter(is_current=True).first()

    def make_current(self):
        """Flag this row as current and clear the flag everywhere else."""
        with transaction.atomic():
            SchoolYear.objects.filter(is_current=True).exclude(pk=self.pk).update(is_current=False)
            self.is_current = True
            self.save()
