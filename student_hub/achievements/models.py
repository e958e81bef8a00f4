from __future__ import annotations

import time
from pathlib import Path
from typing import ClassVar

from django.core.validators import MaxValueValidator
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.text import get_valid_filename
from django.utils.translation import gettext_lazy as _

from .variants import SubmissionVariant


def document_upload_to(instance, filename: str) -> str:
    """Flat ``<millis>-<original name>`` names directly under MEDIA_ROOT."""

    stem = get_valid_filename(Path(filename).name) or "document.pdf"
    return f"{int(time.time() * 1000)}-{stem}"


class SubmissionStatus(models.TextChoices):
    PENDING = "pending", _("Pending")
    ACCEPTED = "accepted", _("Accepted")
    REJECTED = "rejected", _("Rejected")


class CompanyType(models.TextChoices):
    GOVERNMENT = "government", _("Government")
    PRIVATE = "private", _("Private")


class Submission(models.Model):
    """A student-owned achievement document awaiting or past review."""

    Status = SubmissionStatus
    variant: ClassVar[SubmissionVariant]

    student = models.ForeignKey(
        "users.Student",
        on_delete=models.CASCADE,
        to_field="sid",
        db_column="sid",
        related_name="%(class)s_submissions",
    )
    document = models.FileField(
        upload_to=document_upload_to,
        max_length=255,
        blank=True,
        default="",
        db_index=True,
        help_text=_("Supporting PDF, served from /uploads/"),
    )
    status = models.CharField(
        max_length=10,
        choices=SubmissionStatus.choices,
        default=SubmissionStatus.PENDING,
        db_index=True,
    )
    rejection_reason = models.TextField(
        blank=True, default="", help_text=_("If status is rejected, reason why")
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["-created_at", "-id"]

    @property
    def sid(self) -> str:
        return self.student_id

    @property
    def title(self) -> str:
        raise NotImplementedError

    @property
    def subtitle(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return f"{self.variant.label} {self.title} ({self.student_id}, {self.status})"


class Internship(Submission):
    variant = SubmissionVariant.INTERNSHIP

    companyname = models.CharField(_("Company name"), max_length=255)
    duration = models.CharField(max_length=100)
    companytype = models.CharField(
        _("Company type"), max_length=20, choices=CompanyType.choices
    )

    @property
    def title(self) -> str:
        return self.companyname

    @property
    def subtitle(self) -> str:
        return f"{self.duration} - {self.companytype}"


class Placement(Submission):
    variant = SubmissionVariant.PLACEMENT

    companyname = models.CharField(_("Company name"), max_length=255)
    companytype = models.CharField(
        _("Company type"), max_length=20, choices=CompanyType.choices
    )

    @property
    def title(self) -> str:
        return self.companyname

    @property
    def subtitle(self) -> str:
        return self.companytype


class Skill(Submission):
    variant = SubmissionVariant.SKILL

    skillname = models.CharField(_("Skill name"), max_length=255)

    @property
    def title(self) -> str:
        return self.skillname

    @property
    def subtitle(self) -> str:
        return "Skill Certificate"


class ActivitySubmission(Submission):
    activities = models.CharField(max_length=255)
    description = models.TextField(help_text=_("What the student did"))

    class Meta(Submission.Meta):
        abstract = True

    @property
    def title(self) -> str:
        return self.activities

    @property
    def subtitle(self) -> str:
        return self.description


class CurricularActivity(ActivitySubmission):
    variant = SubmissionVariant.CURRICULAR

    class Meta(ActivitySubmission.Meta):
        verbose_name_plural = _("curricular activities")


class ExtracurricularActivity(ActivitySubmission):
    variant = SubmissionVariant.EXTRACURRICULAR

    class Meta(ActivitySubmission.Meta):
        verbose_name_plural = _("extracurricular activities")


SUBMISSION_MODELS: dict[SubmissionVariant, type[Submission]] = {
    model.variant: model
    for model in (
        CurricularActivity,
        ExtracurricularActivity,
        Internship,
        Placement,
        Skill,
    )
}


class AcademicRecord(models.Model):
    """Semester GPA with the transcript PDF, uploaded by faculty."""

    student = models.ForeignKey(
        "users.Student",
        on_delete=models.CASCADE,
        to_field="sid",
        db_column="sid",
        related_name="academic_records",
    )
    gpa = models.FloatField(
        validators=[MinValueValidator(0), MaxValueValidator(10)],
    )
    sem = models.PositiveSmallIntegerField(
        _("Semester"),
        validators=[MinValueValidator(1), MaxValueValidator(8)],
    )
    document = models.FileField(upload_to=document_upload_to, max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sem", "created_at"]

    @property
    def sid(self) -> str:
        return self.student_id

    def __str__(self) -> str:
        return f"{self.student_id} sem {self.sem}: {self.gpa}"
