from __future__ import annotations

from django.conf import settings
from rest_framework import serializers

from student_hub.achievements.locations import absolute_document_url
from student_hub.achievements.models import AcademicRecord
from student_hub.achievements.models import CompanyType
from student_hub.achievements.models import CurricularActivity
from student_hub.achievements.models import ExtracurricularActivity
from student_hub.achievements.models import Internship
from student_hub.achievements.models import Placement
from student_hub.achievements.models import Skill
from student_hub.achievements.variants import SubmissionVariant

PDF_CONTENT_TYPE = "application/pdf"
COMPANY_TYPE_ERROR = "Company type must be either government or private"


def validate_pdf_upload(upload):
    if getattr(upload, "content_type", None) != PDF_CONTENT_TYPE:
        msg = "Only PDF files are allowed"
        raise serializers.ValidationError(msg)
    limit = settings.SUBMISSION_UPLOAD_MAX_BYTES
    if upload.size > limit:
        msg = f"File too large. Maximum size is {limit // (1024 * 1024)}MB"
        raise serializers.ValidationError(msg)
    return upload


# Output -----------------------------------------------------------------------


class _DocumentUrlMixin:
    def get_url(self, obj):
        return absolute_document_url(obj.document, self.context.get("base_url"))


class SubmissionSerializer(_DocumentUrlMixin, serializers.ModelSerializer):
    """Fields every submission variant shares; camelCase as the dashboards expect."""

    _id = serializers.IntegerField(source="pk", read_only=True)
    sid = serializers.CharField(source="student_id", read_only=True)
    url = serializers.SerializerMethodField()
    rejectionReason = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    common_fields = [
        "_id",
        "sid",
        "url",
        "status",
        "rejectionReason",
        "createdAt",
        "updatedAt",
    ]

    def get_rejectionReason(self, obj):
        return obj.rejection_reason or None


class InternshipSerializer(SubmissionSerializer):
    class Meta:
        model = Internship
        fields = [
            *SubmissionSerializer.common_fields,
            "companyname",
            "duration",
            "companytype",
        ]


class PlacementSerializer(SubmissionSerializer):
    class Meta:
        model = Placement
        fields = [*SubmissionSerializer.common_fields, "companyname", "companytype"]


class SkillSerializer(SubmissionSerializer):
    class Meta:
        model = Skill
        fields = [*SubmissionSerializer.common_fields, "skillname"]


class CurricularActivitySerializer(SubmissionSerializer):
    class Meta:
        model = CurricularActivity
        fields = [*SubmissionSerializer.common_fields, "activities", "description"]


class ExtracurricularActivitySerializer(SubmissionSerializer):
    class Meta:
        model = ExtracurricularActivity
        fields = [*SubmissionSerializer.common_fields, "activities", "description"]


SUBMISSION_SERIALIZERS: dict[SubmissionVariant, type[SubmissionSerializer]] = {
    SubmissionVariant.INTERNSHIP: InternshipSerializer,
    SubmissionVariant.PLACEMENT: PlacementSerializer,
    SubmissionVariant.SKILL: SkillSerializer,
    SubmissionVariant.CURRICULAR: CurricularActivitySerializer,
    SubmissionVariant.EXTRACURRICULAR: ExtracurricularActivitySerializer,
}


class AcademicRecordSerializer(_DocumentUrlMixin, serializers.ModelSerializer):
    _id = serializers.IntegerField(source="pk", read_only=True)
    sid = serializers.CharField(source="student_id", read_only=True)
    url = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = AcademicRecord
        fields = ["_id", "sid", "gpa", "sem", "url", "createdAt", "updatedAt"]


# Input ------------------------------------------------------------------------


class _SubmitSerializer(serializers.Serializer):
    pdfFile = serializers.FileField(required=False, allow_empty_file=False)

    def validate_pdfFile(self, value):
        return validate_pdf_upload(value)


def _company_type() -> serializers.ChoiceField:
    return serializers.ChoiceField(
        choices=CompanyType.choices,
        error_messages={"invalid_choice": COMPANY_TYPE_ERROR},
    )


class InternshipSubmitSerializer(_SubmitSerializer):
    companyname = serializers.CharField(max_length=255)
    duration = serializers.CharField(max_length=100)
    companytype = _company_type()


class PlacementSubmitSerializer(_SubmitSerializer):
    companyname = serializers.CharField(max_length=255)
    companytype = _company_type()


class SkillSubmitSerializer(_SubmitSerializer):
    skillname = serializers.CharField(max_length=255)


class ActivitySubmitSerializer(_SubmitSerializer):
    activities = serializers.CharField(max_length=255)
    description = serializers.CharField()


SUBMIT_SERIALIZERS: dict[SubmissionVariant, type[_SubmitSerializer]] = {
    SubmissionVariant.INTERNSHIP: InternshipSubmitSerializer,
    SubmissionVariant.PLACEMENT: PlacementSubmitSerializer,
    SubmissionVariant.SKILL: SkillSubmitSerializer,
    SubmissionVariant.CURRICULAR: ActivitySubmitSerializer,
    SubmissionVariant.EXTRACURRICULAR: ActivitySubmitSerializer,
}


class AcademicRecordUploadSerializer(serializers.Serializer):
    sid = serializers.CharField(max_length=50)
    gpa = serializers.FloatField(min_value=0, max_value=10)
    sem = serializers.IntegerField(
        min_value=1,
        max_value=8,
        error_messages={
            "min_value": "Semester must be between 1 and 8",
            "max_value": "Semester must be between 1 and 8",
        },
    )
    pdfFile = serializers.FileField(
        allow_empty_file=False,
        error_messages={"required": "PDF file is required"},
    )

    def validate_pdfFile(self, value):
        return validate_pdf_upload(value)


class ReviewSerializer(serializers.Serializer):
    """Accept/reject input after alias normalisation (see the review views)."""

    sid = serializers.CharField(max_length=50)
    # Blank matches a submission stored without an attachment.
    docurl = serializers.CharField(allow_blank=True)
    documentype = serializers.CharField()
    description = serializers.CharField(required=False, allow_blank=True)


class RejectSerializer(ReviewSerializer):
    description = serializers.CharField(
        trim_whitespace=True,
        error_messages={"blank": "Rejection description must not be empty"},
    )
