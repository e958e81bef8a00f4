from __future__ import annotations

import logging
from collections.abc import Mapping

from django.conf import settings
from django.http import QueryDict
from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.exceptions import PermissionDenied
from rest_framework.exceptions import ValidationError
from rest_framework.generics import GenericAPIView
from rest_framework.parsers import FormParser
from rest_framework.parsers import JSONParser
from rest_framework.parsers import MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from student_hub.achievements import selectors
from student_hub.achievements import services
from student_hub.achievements.exceptions import DocumentStoreError
from student_hub.achievements.exceptions import ReviewConflictError
from student_hub.achievements.exceptions import SubmissionNotFoundError
from student_hub.achievements.exceptions import UnknownVariantError
from student_hub.achievements.locations import document_location
from student_hub.achievements.models import SUBMISSION_MODELS
from student_hub.achievements.variants import SubmissionVariant
from student_hub.achievements.variants import resolve_variant
from student_hub.achievements.variants import variant_for_collection
from student_hub.audit.utils import client_ip
from student_hub.users.api.permissions import IsAdminRole
from student_hub.users.api.permissions import IsStudentRole
from student_hub.users.api.permissions import is_admin
from student_hub.users.api.permissions import student_profile
from student_hub.users.models import Student

from .filters import SubmissionFilter
from .serializers import SUBMISSION_SERIALIZERS
from .serializers import SUBMIT_SERIALIZERS
from .serializers import AcademicRecordSerializer
from .serializers import AcademicRecordUploadSerializer
from .serializers import RejectSerializer
from .serializers import ReviewSerializer

logger = logging.getLogger(__name__)

ALLOWED_KEYS = "curriculam, extracurriculam, internship, placement, skill"


def _flatten(data) -> dict:
    # Multipart bodies arrive as QueryDicts; avoid .copy(), it deep-copies uploads.
    if isinstance(data, QueryDict):
        return data.dict()
    if not isinstance(data, Mapping):
        raise ValidationError({"non_field_errors": "Expected an object"})
    return dict(data)


def _base_url() -> str:
    return settings.PUBLIC_BASE_URL


class _StoreFailureResponse(Response):
    def __init__(self, error: str, exc: Exception):
        super().__init__(
            {"error": error, "detail": error, "details": str(exc)},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


@extend_schema(tags=["Submissions"])
class SubmitDocumentView(APIView):
    """Student uploads one achievement document of the kind named by ``key``."""

    permission_classes = [IsStudentRole]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    def post(self, request):
        student = student_profile(request.user)
        data = _flatten(request.data)
        key = data.pop("key", None)
        if not key:
            raise ValidationError({"key": "Document key is required"})
        try:
            variant = resolve_variant(key)
        except UnknownVariantError:
            msg = f"Invalid document key. Allowed values: {ALLOWED_KEYS}"
            raise ValidationError({"key": msg}) from None

        upload = request.FILES.get("pdfFile")
        if upload is not None:
            data["pdfFile"] = upload
        serializer = SUBMIT_SERIALIZERS[variant](data=data)
        serializer.is_valid(raise_exception=True)
        fields = dict(serializer.validated_data)
        upload = fields.pop("pdfFile", None)

        try:
            submission = services.submit_document(student, variant, fields, upload)
        except DocumentStoreError as exc:
            logger.exception("Document submission failed for sid=%s", student.sid)
            return _StoreFailureResponse("Failed to submit document", exc)

        document = SUBMISSION_SERIALIZERS[variant](
            submission, context={"base_url": _base_url()}
        ).data
        return Response(
            {
                "message": f"{variant.value} document submitted successfully",
                "documentType": variant.value,
                "document": document,
                "fileName": submission.document.name or None,
            },
            status=status.HTTP_201_CREATED,
        )


@extend_schema(
    tags=["Submissions"],
    parameters=[OpenApiParameter("status", str, enum=["pending", "accepted", "rejected"])],
)
class StudentDocumentListView(GenericAPIView):
    """The calling student's documents of one kind, newest first."""

    permission_classes = [IsStudentRole]
    filterset_class = SubmissionFilter

    def get_variant(self):
        try:
            return variant_for_collection(self.kwargs["collection"])
        except UnknownVariantError as exc:
            raise NotFound(str(exc)) from exc

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return SUBMISSION_MODELS[SubmissionVariant.SKILL].objects.none()
        student = student_profile(self.request.user)
        return selectors.student_submissions(self.get_variant(), student.sid)

    def get(self, request, collection):
        rows = self.filter_queryset(self.get_queryset())
        payload = selectors.documents_payload(self.get_variant(), rows, _base_url())
        return Response(payload)


@extend_schema(tags=["Reviews"])
class PendingDocumentsView(APIView):
    permission_classes = [IsAdminRole]

    def get(self, request):
        return Response(selectors.pending_documents_payload(_base_url()))


@extend_schema(tags=["Academics"], request=AcademicRecordUploadSerializer)
class AcademicRecordUploadView(APIView):
    permission_classes = [IsAdminRole]
    parser_classes = [MultiPartParser, FormParser]

    def post(self, request):
        data = _flatten(request.data)
        upload = request.FILES.get("pdfFile")
        if upload is not None:
            data["pdfFile"] = upload
        serializer = AcademicRecordUploadSerializer(data=data)
        serializer.is_valid(raise_exception=True)
        values = serializer.validated_data

        student = Student.objects.filter(sid=values["sid"]).first()
        if student is None:
            raise NotFound("Student not found with this student ID")

        try:
            record = services.create_academic_record(
                student,
                gpa=values["gpa"],
                sem=values["sem"],
                upload=values["pdfFile"],
            )
        except DocumentStoreError as exc:
            logger.exception("Academic upload failed for sid=%s", student.sid)
            return _StoreFailureResponse("Failed to create academic record", exc)

        return Response(
            {
                "message": "Academic record created successfully",
                "record": AcademicRecordSerializer(
                    record, context={"base_url": _base_url()}
                ).data,
                "fileName": record.document.name,
            },
            status=status.HTTP_201_CREATED,
        )


@extend_schema(tags=["Academics"])
class StudentAcademicsView(APIView):
    """Semester records of one student; faculty see anyone, students only themselves."""

    permission_classes = [IsAuthenticated]

    def get(self, request, sid):
        if not is_admin(request.user):
            student = student_profile(request.user)
            if student is None or student.sid != sid:
                raise PermissionDenied("Access denied. You can only view your own records.")
        return Response(selectors.academic_records_payload(sid, _base_url()))


class _ReviewView(APIView):
    permission_classes = [IsAdminRole]
    parser_classes = [JSONParser, FormParser, MultiPartParser]
    serializer_class = ReviewSerializer
    decision = ""

    def _normalize_frontend_payload(self, data) -> dict:
        """Map the location and type aliases onto ``docurl`` / ``documentype``.

        - location: ``docurl`` | ``docUrl`` | ``url``
        - type: ``documentype`` | ``documentType`` | ``type``
        """
        raw = _flatten(data)
        out = {"sid": raw.get("sid")}
        for target, aliases in (
            ("docurl", ("docurl", "docUrl", "url")),
            ("documentype", ("documentype", "documentType", "type")),
        ):
            value = next((raw[a] for a in aliases if raw.get(a) is not None), None)
            if value is not None:
                out[target] = value
        if "description" in raw:
            out["description"] = raw["description"]
        return {key: value for key, value in out.items() if value is not None}

    def post(self, request):
        serializer = self.serializer_class(
            data=self._normalize_frontend_payload(request.data)
        )
        serializer.is_valid(raise_exception=True)
        values = serializer.validated_data

        try:
            variant = resolve_variant(values["documentype"])
        except UnknownVariantError as exc:
            raise ValidationError({"documentype": str(exc)}) from exc

        try:
            submission = services.review_submission(
                variant,
                sid=values["sid"],
                location=values["docurl"],
                decision=self.decision,
                description=values.get("description", ""),
                actor=request.user,
                ip_address=client_ip(request),
            )
        except SubmissionNotFoundError as exc:
            raise NotFound("Document not found for given sid and url") from exc
        except ReviewConflictError as exc:
            message = str(exc)
            return Response(
                {"detail": message, "error": message, "status": exc.current_status},
                status=status.HTTP_409_CONFLICT,
            )
        return Response(self.build_response(submission))

    def build_response(self, submission) -> dict:
        raise NotImplementedError


@extend_schema(tags=["Reviews"], request=ReviewSerializer)
class AcceptDocumentView(_ReviewView):
    decision = services.ACCEPT

    def build_response(self, submission) -> dict:
        return {
            "message": "successfully accepted",
            "url": document_location(submission.document),
        }


@extend_schema(tags=["Reviews"], request=RejectSerializer)
class RejectDocumentView(_ReviewView):
    serializer_class = RejectSerializer
    decision = services.REJECT

    def build_response(self, submission) -> dict:
        return {
            "message": "successfully rejected",
            "description": submission.rejection_reason,
        }
