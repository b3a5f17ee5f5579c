"""
accounts/admin.py
─────────────────
Admin registration for CustomUser.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(BaseUserAdmin):
    """
    Extends the default UserAdmin to surface role, branch and class assignment.
    """

    list_display  = BaseUserAdmin.list_display + ('role', 'branch', 'school_class', 'status')
    list_filter   = BaseUserAdmin.list_filter  + ('role', 'branch', 'status')
    raw_id_fields = ('school_class',)

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Parish Role', {'fields': ('role', 'saint_name', 'phone', 'branch', 'school_class', 'status')}),
    )
    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('Parish Role', {'fields': ('role', 'branch', 'school_class')}),
    )
