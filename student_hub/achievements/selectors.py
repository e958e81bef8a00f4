"""Read paths shared by the list endpoints and the event streams.

Every function re-runs its query in full and returns a JSON-ready payload;
nothing is cached between calls.
"""

from __future__ import annotations

from typing import Any

from django.db.models import QuerySet

from .api.serializers import SUBMISSION_SERIALIZERS
from .api.serializers import AcademicRecordSerializer
from .models import SUBMISSION_MODELS
from .models import AcademicRecord
from .models import SubmissionStatus
from .variants import VARIANT_INFO
from .variants import SubmissionVariant

# Order of the admin breakdown and of equal-timestamp documents.
PENDING_VARIANTS = (
    SubmissionVariant.CURRICULAR,
    SubmissionVariant.EXTRACURRICULAR,
    SubmissionVariant.INTERNSHIP,
    SubmissionVariant.PLACEMENT,
    SubmissionVariant.SKILL,
)


def student_submissions(variant: SubmissionVariant, sid: str) -> QuerySet:
    return SUBMISSION_MODELS[variant].objects.filter(student_id=sid)


def documents_payload(
    variant: SubmissionVariant, rows, base_url: str | None = None
) -> dict[str, Any]:
    rows = sorted(rows, key=lambda row: (row.created_at, row.pk), reverse=True)
    serializer_class = SUBMISSION_SERIALIZERS[variant]
    documents = serializer_class(rows, many=True, context={"base_url": base_url}).data
    return {
        "message": f"{VARIANT_INFO[variant].label} documents retrieved successfully",
        "totalCount": len(documents),
        "documents": list(documents),
    }


def student_documents_payload(
    variant: SubmissionVariant, sid: str, base_url: str | None = None
) -> dict[str, Any]:
    return documents_payload(variant, student_submissions(variant, sid), base_url)


def academic_records_payload(sid: str, base_url: str | None = None) -> dict[str, Any]:
    rows = AcademicRecord.objects.filter(student_id=sid).order_by("sem", "created_at")
    records = AcademicRecordSerializer(
        rows, many=True, context={"base_url": base_url}
    ).data
    return {
        "message": "Academic records retrieved successfully",
        "sid": sid,
        "count": len(records),
        "records": list(records),
    }


def pending_documents_payload(base_url: str | None = None) -> dict[str, Any]:
    """All pending submissions across variants, tagged for the review queue."""

    breakdown: dict[str, int] = {}
    tagged: list[tuple[Any, dict[str, Any]]] = []
    context = {"base_url": base_url}
    for variant in PENDING_VARIANTS:
        rows = list(
            SUBMISSION_MODELS[variant]
            .objects.filter(status=SubmissionStatus.PENDING)
            .order_by("pk")
        )
        breakdown[VARIANT_INFO[variant].breakdown_key] = len(rows)
        data = SUBMISSION_SERIALIZERS[variant](rows, many=True, context=context).data
        for row, item in zip(rows, data, strict=True):
            document = dict(item)
            document["documentType"] = variant.value
            document["title"] = row.title
            document["subtitle"] = row.subtitle
            tagged.append((row.created_at, document))

    # Stable sort: equal timestamps keep variant order.
    tagged.sort(key=lambda pair: pair[0], reverse=True)
    documents = [document for _, document in tagged]
    return {
        "message": "Pending documents retrieved successfully",
        "totalCount": len(documents),
        "breakdown": breakdown,
        "documents": documents,
    }
