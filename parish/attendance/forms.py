"""
attendance/forms.py
───────────────────
Input validation for the check-in endpoints.  Business rules live in
services.py; these forms only check that the ids and dates are well formed.
A missing date means "today" in the parish time zone.
"""

from django import forms
from django.utils import timezone

from roster.models import SchoolClass, Student

from .models import AttendanceRecord


class _DatedForm(forms.Form):
    date = forms.DateField(required=False, input_formats=['%Y-%m-%d'])

    def clean_date(self):
        return self.cleaned_data.get('date') or timezone.localdate()


class CheckInForm(_DatedForm):
    student = forms.ModelChoiceField(queryset=Student.objects.all())
    status = forms.ChoiceField(
        choices=AttendanceRecord.Status.choices,
        required=False,
    )

    def clean_status(self):
        return self.cleaned_data.get('status') or AttendanceRecord.Status.PRESENT


class CompensatoryCheckInForm(_DatedForm):
    student = forms.ModelChoiceField(queryset=Student.objects.all())


class MarkAllForm(_DatedForm):
    school_class = forms.ModelChoiceField(queryset=SchoolClass.objects.all())


class QRCheckInForm(_DatedForm):
    payload = forms.CharField(max_length=200)
