from django.db import migrations, models
import django.core.validators
import django.db.models.deletion
import student_hub.achievements.models


def _submission_fields(related_name):
    return [
        ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
        ('document', models.FileField(blank=True, db_index=True, default='', help_text='Supporting PDF, served from /uploads/', max_length=255, upload_to=student_hub.achievements.models.document_upload_to)),
        ('status', models.CharField(choices=[('pending', 'Pending'), ('accepted', 'Accepted'), ('rejected', 'Rejected')], db_index=True, default='pending', max_length=10)),
        ('rejection_reason', models.TextField(blank=True, default='', help_text='If status is rejected, reason why')),
        ('created_at', models.DateTimeField(auto_now_add=True)),
        ('updated_at', models.DateTimeField(auto_now=True)),
        ('student', models.ForeignKey(db_column='sid', on_delete=django.db.models.deletion.CASCADE, related_name=related_name, to='users.student', to_field='sid')),
    ]


COMPANY_TYPES = [('government', 'Government'), ('private', 'Private')]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('users', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Internship',
            fields=[
                *_submission_fields('internship_submissions'),
                ('companyname', models.CharField(max_length=255, verbose_name='Company name')),
                ('duration', models.CharField(max_length=100)),
                ('companytype', models.CharField(choices=COMPANY_TYPES, max_length=20, verbose_name='Company type')),
            ],
            options={'ordering': ['-created_at', '-id'], 'abstract': False},
        ),
        migrations.CreateModel(
            name='Placement',
            fields=[
                *_submission_fields('placement_submissions'),
                ('companyname', models.CharField(max_length=255, verbose_name='Company name')),
                ('companytype', models.CharField(choices=COMPANY_TYPES, max_length=20, verbose_name='Company type')),
            ],
            options={'ordering': ['-created_at', '-id'], 'abstract': False},
        ),
        migrations.CreateModel(
            name='Skill',
            fields=[
                *_submission_fields('skill_submissions'),
                ('skillname', models.CharField(max_length=255, verbose_name='Skill name')),
            ],
            options={'ordering': ['-created_at', '-id'], 'abstract': False},
        ),
        migrations.CreateModel(
            name='CurricularActivity',
            fields=[
                *_submission_fields('curricularactivity_submissions'),
                ('activities', models.CharField(max_length=255)),
                ('description', models.TextField(help_text='What the student did')),
            ],
            options={'verbose_name_plural': 'curricular activities', 'ordering': ['-created_at', '-id'], 'abstract': False},
        ),
        migrations.CreateModel(
            name='ExtracurricularActivity',
            fields=[
                *_submission_fields('extracurricularactivity_submissions'),
                ('activities', models.CharField(max_length=255)),
                ('description', models.TextField(help_text='What the student did')),
            ],
            options={'verbose_name_plural': 'extracurricular activities', 'ordering': ['-created_at', '-id'], 'abstract': False},
        ),
        migrations.CreateModel(
            name='AcademicRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('gpa', models.FloatField(validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(10)])),
                ('sem', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(8)], verbose_name='Semester')),
                ('document', models.FileField(max_length=255, upload_to=student_hub.achievements.models.document_upload_to)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('student', models.ForeignKey(db_column='sid', on_delete=django.db.models.deletion.CASCADE, related_name='academic_records', to='users.student', to_field='sid')),
            ],
            options={'ordering': ['sem', 'created_at']},
        ),
    ]
