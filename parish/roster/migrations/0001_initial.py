import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


def score_field():
    return models.FloatField(
        blank=True,
        null=True,
        validators=[
            django.core.validators.MinValueValidator(0),
            django.core.validators.MaxValueValidator(10),
        ],
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='SchoolClass',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text='Class name, e.g. "Ấu Nhi 2".', max_length=100)),
                ('branch', models.CharField(
                    choices=[
                        ('chien_con', 'Chiên Con'),
                        ('au_nhi', 'Ấu Nhi'),
                        ('thieu_nhi', 'Thiếu Nhi'),
                        ('nghia_si', 'Nghĩa Sĩ'),
                    ],
                    help_text='The age / programme tier this class belongs to.',
                    max_length=20,
                )),
                ('display_order', models.PositiveIntegerField(default=0)),
                ('status', models.CharField(
                    choices=[('ACTIVE', 'Active'), ('INACTIVE', 'Inactive')],
                    default='ACTIVE',
                    max_length=10,
                )),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Class',
                'verbose_name_plural': 'Classes',
                'ordering': ['display_order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Student',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('full_name', models.CharField(max_length=200)),
                ('saint_name', models.CharField(blank=True, max_length=100)),
                ('student_code', models.CharField(
                    blank=True,
                    help_text='Optional roster code, e.g. "HA172336".',
                    max_length=20,
                    null=True,
                    unique=True,
                )),
                ('date_of_birth', models.DateField(blank=True, null=True)),
                ('gender', models.CharField(
                    blank=True,
                    choices=[('male', 'Nam'), ('female', 'Nữ')],
                    max_length=10,
                )),
                ('parent_name', models.CharField(blank=True, max_length=200)),
                ('parent_phone', models.CharField(blank=True, max_length=20)),
                ('parent_phone_2', models.CharField(blank=True, max_length=20)),
                ('address', models.CharField(blank=True, max_length=255)),
                ('notes', models.TextField(blank=True)),
                ('status', models.CharField(
                    choices=[('ACTIVE', 'Active'), ('INACTIVE', 'Inactive')],
                    default='ACTIVE',
                    help_text='Only ACTIVE students can be checked in.',
                    max_length=10,
                )),
                ('score_45_hk1', score_field()),
                ('score_exam_hk1', score_field()),
                ('score_45_hk2', score_field()),
                ('score_exam_hk2', score_field()),
                ('attendance_thu5', models.PositiveIntegerField(default=0)),
                ('attendance_cn', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('school_class', models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name='students',
                    to='roster.schoolclass',
                )),
            ],
            options={
                'verbose_name': 'Student',
                'verbose_name_plural': 'Students',
                'ordering': ['full_name'],
            },
        ),
        migrations.CreateModel(
            name='SchoolYear',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=50)),
                ('start_date', models.DateField()),
                ('end_date', models.DateField()),
                ('total_weeks', models.PositiveIntegerField(
                    blank=True,
                    help_text='Defaults to the number of weeks between start and end date.',
                )),
                ('parish_name', models.CharField(blank=True, max_length=200)),
                ('is_current', models.BooleanField(default=False)),
                ('status', models.CharField(
                    choices=[('ACTIVE', 'Active'), ('INACTIVE', 'Inactive')],
                    default='ACTIVE',
                    max_length=10,
                )),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'School Year',
                'verbose_name_plural': 'School Years',
                'ordering': ['-start_date'],
                'constraints': [
                    models.UniqueConstraint(
                        condition=models.Q(is_current=True),
                        fields=('is_current',),
                        name='one_current_school_year',
                    ),
                ],
            },
        ),
    ]
