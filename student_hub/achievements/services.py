"""Write paths for submissions: student uploads, faculty uploads and reviews."""

from __future__ import annotations

import logging
from typing import Any

from django.conf import settings
from django.db import DatabaseError
from django.db import transaction
from django.db.models import Case
from django.db.models import Value
from django.db.models import When
from django.utils import timezone

from student_hub.audit.utils import log_action
from student_hub.realtime.events.submissions import publish_submission_changed

from .exceptions import DocumentStoreError
from .exceptions import ReviewConflictError
from .exceptions import SubmissionNotFoundError
from .locations import normalize_document_location
from .locations import stored_document_name
from .models import SUBMISSION_MODELS
from .models import AcademicRecord
from .models import Submission
from .models import SubmissionStatus
from .variants import SubmissionVariant

logger = logging.getLogger(__name__)

ACCEPT = "accept"
REJECT = "reject"

_pending_first = Case(
    When(status=SubmissionStatus.PENDING, then=Value(0)),
    default=Value(1),
)


def _store_with_compensation(instance, upload) -> None:
    """Save ``instance``; if the row write fails, remove the file just stored."""

    stored_name = ""
    try:
        with transaction.atomic():
            if upload is not None:
                instance.document.save(upload.name, upload, save=False)
                stored_name = instance.document.name
            instance.save()
    except DatabaseError as exc:
        if stored_name:
            instance.document.storage.delete(stored_name)
            logger.warning(
                "Removed %s after failed %s write",
                stored_name,
                type(instance).__name__,
            )
        raise DocumentStoreError(str(exc)) from exc


def submit_document(
    student,
    variant: SubmissionVariant,
    fields: dict[str, Any],
    upload=None,
) -> Submission:
    """Create a pending submission owned by ``student``."""

    model = SUBMISSION_MODELS[variant]
    instance = model(student=student, status=SubmissionStatus.PENDING, **fields)
    _store_with_compensation(instance, upload)
    logger.info(
        "Stored %s submission %s for sid=%s",
        variant.value,
        instance.pk,
        student.sid,
    )
    return instance


def create_academic_record(student, *, gpa: float, sem: int, upload) -> AcademicRecord:
    record = AcademicRecord(student=student, gpa=gpa, sem=sem)
    _store_with_compensation(record, upload)
    logger.info("Stored academic record sem=%s for sid=%s", sem, student.sid)
    return record


def review_submission(  # noqa: PLR0913
    variant: SubmissionVariant,
    *,
    sid: str,
    location: str,
    decision: str,
    description: str = "",
    actor=None,
    ip_address: str = "",
) -> Submission:
    """Accept or reject the submission matched by owner sid and document location.

    The change is a single-row UPDATE. With
    ``SUBMISSION_REVIEW_REQUIRE_PENDING`` the UPDATE is additionally
    conditioned on ``status=pending`` and a resolved submission raises
    ReviewConflictError; otherwise the latest review overwrites the earlier one.

    Several rows can share a location (attachment-less submissions share the
    empty one). The oldest pending row is reviewed first; once none is
    pending, the oldest row is.
    """

    if decision not in (ACCEPT, REJECT):
        msg = f"Unknown review decision: {decision!r}"
        raise ValueError(msg)

    model = SUBMISSION_MODELS[variant]
    name = stored_document_name(location)
    require_pending = settings.SUBMISSION_REVIEW_REQUIRE_PENDING

    if decision == ACCEPT:
        changes = {"status": SubmissionStatus.ACCEPTED, "rejection_reason": ""}
    else:
        changes = {"status": SubmissionStatus.REJECTED, "rejection_reason": description}

    with transaction.atomic():
        current = (
            model.objects.filter(student_id=str(sid), document=name)
            .order_by(_pending_first, "pk")
            .values("pk", "status")
            .first()
        )
        if current is None:
            raise SubmissionNotFoundError(str(sid), normalize_document_location(location))

        rows = model.objects.filter(pk=current["pk"])
        if require_pending:
            rows = rows.filter(status=SubmissionStatus.PENDING)
        updated = rows.update(**changes, updated_at=timezone.now())
        if not updated:
            raise ReviewConflictError(current["status"])

        log_action(
            f"submission_{changes['status']}",
            actor=actor,
            message=f"{variant.value} {name} sid={sid}",
            model_name=model.__name__,
            record_id=current["pk"],
            before={"status": current["status"]},
            after={
                "status": str(changes["status"]),
                "rejection_reason": changes["rejection_reason"],
            },
            ip_address=ip_address,
        )
        # QuerySet.update() bypasses post_save.
        transaction.on_commit(lambda: publish_submission_changed(str(sid)))

    logger.info(
        "Review %s on %s pk=%s sid=%s",
        changes["status"],
        variant.value,
        current["pk"],
        sid,
    )
    return model.objects.get(pk=current["pk"])
