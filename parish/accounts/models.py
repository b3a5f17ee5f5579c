"""
accounts/models.py
──────────────────
Identity of the people who run the catechism school.

CustomUser – extends AbstractUser with a role (admin / branch leader /
             catechist) and the branch or class the person is assigned to.

Students are NOT users; they live in roster.Student.  A CustomUser only
appears on attendance records as the creator of a check-in.
"""

from django.contrib.auth.models import AbstractUser
from django.db import models

from roster.choices import Branch, RecordStatus


class CustomUser(AbstractUser):
    """
    A member of staff.

    Roles
    -----
    ADMIN          – the parish board; manages settings and every class.
    BRANCH_LEADER  – leads one branch (age tier) and its classes.
    CATECHIST      – teaches one class and takes its attendance.
    """

    class Role(models.TextChoices):
        ADMIN         = 'admin',            'Ban điều hành'
        BRANCH_LEADER = 'phan_doan_truong', 'Phân đoàn trưởng'
        CATECHIST     = 'giao_ly_vien',     'Giáo lý viên'

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.CATECHIST,
        verbose_name='Role',
    )
    saint_name = models.CharField(
        max_length=100,
        blank=True,
        help_text='Baptismal (saint) name, shown before the full name.',
    )
    phone = models.CharField(max_length=20, blank=True)
    branch = models.CharField(
        max_length=20,
        choices=Branch.choices,
        blank=True,
        help_text='Branch led or taught by this person, if any.',
    )
    school_class = models.ForeignKey(
        'roster.SchoolClass',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='catechists',
        help_text='The class this catechist is assigned to.',
    )
    status = models.CharField(
        max_length=10,
        choices=RecordStatus.choices,
        default=RecordStatus.ACTIVE,
    )

    @property
    def is_parish_admin(self):
        return self.is_superuser or self.role == self.Role.ADMIN

    @property
    def is_active_member(self):
        return self.status == RecordStatus.ACTIVE

    @property
    def display_name(self):
        name = self.get_full_name() or self.username
        return f"{self.saint_name} {name}" if self.saint_name else name

    def __str__(self):
        return f"{self.display_name} ({self.get_role_display()})"

    class Meta:
        verbose_name = 'User'
        verbose_name_plural = 'Users'
