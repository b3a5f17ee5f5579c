import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('roster', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='AttendanceRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('attendance_date', models.DateField(db_index=True)),
                ('day_type', models.CharField(
                    choices=[('thu5', 'Thứ năm'), ('cn', 'Chủ nhật')],
                    max_length=10,
                )),
                ('status', models.CharField(
                    choices=[('present', 'Present'), ('absent', 'Absent')],
                    default='present',
                    max_length=10,
                )),
                ('check_in_time', models.TimeField(blank=True, null=True)),
                ('check_in_method', models.CharField(
                    choices=[('manual', 'Manual'), ('qr', 'QR code'), ('import', 'Spreadsheet import')],
                    default='manual',
                    max_length=10,
                )),
                ('is_compensatory', models.BooleanField(default=False)),
                ('compensated_for_date', models.DateField(
                    blank=True,
                    help_text='The Thursday this make-up check-in substitutes for.',
                    null=True,
                )),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name='attendance_records_created',
                    to=settings.AUTH_USER_MODEL,
                )),
                ('school_class', models.ForeignKey(
                    blank=True,
                    help_text='Class the student was in when checked in.',
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name='attendance_records',
                    to='roster.schoolclass',
                )),
                ('school_year', models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name='attendance_records',
                    to='roster.schoolyear',
                )),
                ('student', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE,
                    related_name='attendance_records',
                    to='roster.student',
                )),
            ],
            options={
                'verbose_name': 'Attendance Record',
                'verbose_name_plural': 'Attendance Records',
                'ordering': ['-attendance_date', 'student__full_name'],
                'constraints': [
                    models.UniqueConstraint(
                        condition=models.Q(is_compensatory=False),
                        fields=('student', 'attendance_date', 'day_type'),
                        name='unique_regular_check_in',
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(is_compensatory=True, status='present'),
                        fields=('student', 'compensated_for_date'),
                        name='unique_compensatory_credit',
                    ),
                    models.CheckConstraint(
                        condition=models.Q(is_compensatory=False) | models.Q(compensated_for_date__isnull=False),
                        name='compensatory_has_anchor',
                    ),
                ],
            },
        ),
    ]
