"""
roster/forms.py
───────────────
Forms behind the roster endpoints: class and student records, score entry
and the school-year settings.
"""

from django import forms

from .models import SchoolClass, SchoolYear, Student


class SchoolClassForm(forms.ModelForm):

    class Meta:
        model  = SchoolClass
        fields = ['name', 'branch', 'display_order', 'status']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['display_order'].required = False
        self.fields['status'].required = False

    def clean_display_order(self):
        return self.cleaned_data.get('display_order') or 0

    def clean_status(self):
        return self.cleaned_data.get('status') or SchoolClass._meta.get_field('status').default


class StudentForm(forms.ModelForm):
    """
    A student's personal and enrolment details.  Scores and attendance
    tallies have their own write paths and are not editable here.
    """

    class Meta:
        model  = Student
        fields = [
            'full_name', 'saint_name', 'student_code', 'date_of_birth', 'gender',
            'parent_name', 'parent_phone', 'parent_phone_2', 'address', 'notes',
            'school_class', 'status',
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['date_of_birth'].input_formats = ['%Y-%m-%d']
        self.fields['status'].required = False

    def clean_status(self):
        return self.cleaned_data.get('status') or Student._meta.get_field('status').default


class StudentScoreForm(forms.ModelForm):
    """
    The four raw score slots.  A blank field stores NULL ("not yet scored");
    the model validators keep every score within 0–10.
    """

    class Meta:
        model  = Student
        fields = ['score_45_hk1', 'score_exam_hk1', 'score_45_hk2', 'score_exam_hk2']


class SchoolYearForm(forms.ModelForm):
    """
    Settings form for a school year.  Leave total_weeks blank to have it
    computed from the start and end dates.
    """

    class Meta:
        model  = SchoolYear
        fields = ['name', 'start_date', 'end_date', 'total_weeks', 'parish_name']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['start_date'].input_formats = ['%Y-%m-%d']
        self.fields['end_date'].input_formats = ['%Y-%m-%d']
        self.fields['total_weeks'].required = False

    def clean(self):
        cleaned = super().clean()
        start, end = cleaned.get('start_date'), cleaned.get('end_date')
        if start and end and end < start:
            raise forms.ValidationError('The school year must end after it starts.')
        return cleaned

    def save(self, commit=True):
        # Dates may have changed: recompute unless a week count was given
        if self.cleaned_data.get('total_weeks') is None:
            self.instance.total_weeks = None
        return super().save(commit=commit)
