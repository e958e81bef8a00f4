"""Snapshot scopes and the query each one re-runs on every tick."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from channels.db import database_sync_to_async

from student_hub.achievements import selectors
from student_hub.achievements.variants import VARIANT_INFO
from student_hub.achievements.variants import SubmissionVariant

from .bus import ADMIN_TOPIC
from .bus import student_topic

PENDING = "pending"
SUBMISSIONS = "submissions"
ACADEMICS = "academics"


@dataclass(frozen=True)
class SnapshotScope:
    """What one stream watches: the admin queue, or one student's records."""

    kind: str
    sid: str | None = None
    variant: SubmissionVariant | None = None

    @classmethod
    def admin(cls) -> SnapshotScope:
        return cls(kind=PENDING)

    @classmethod
    def student(cls, sid: str, variant: SubmissionVariant) -> SnapshotScope:
        return cls(kind=SUBMISSIONS, sid=sid, variant=variant)

    @classmethod
    def academics(cls, sid: str) -> SnapshotScope:
        return cls(kind=ACADEMICS, sid=sid)

    @property
    def event(self) -> str:
        if self.kind == PENDING:
            return "pending-documents"
        if self.kind == ACADEMICS:
            return "academics-update"
        return VARIANT_INFO[self.variant].event

    @property
    def failure_message(self) -> str:
        if self.kind == PENDING:
            return "Failed to fetch pending documents"
        if self.kind == ACADEMICS:
            return "Failed to fetch academic records"
        return f"Failed to fetch {VARIANT_INFO[self.variant].collection} documents"

    @property
    def topics(self) -> tuple[str, ...]:
        if self.kind == PENDING:
            return (ADMIN_TOPIC,)
        return (student_topic(self.sid),)

    def __str__(self) -> str:
        if self.kind == PENDING:
            return "admin:pending"
        if self.kind == ACADEMICS:
            return f"{self.sid}:academics"
        return f"{self.sid}:{self.variant.value}"


def compute_snapshot(scope: SnapshotScope, base_url: str | None = None) -> dict[str, Any]:
    if scope.kind == PENDING:
        return selectors.pending_documents_payload(base_url)
    if scope.kind == ACADEMICS:
        return selectors.academic_records_payload(scope.sid, base_url)
    if scope.kind == SUBMISSIONS:
        return selectors.student_documents_payload(scope.variant, scope.sid, base_url)
    msg = f"Unknown snapshot scope: {scope.kind!r}"
    raise ValueError(msg)


@database_sync_to_async
def build_snapshot(scope: SnapshotScope, base_url: str | None = None) -> dict[str, Any]:
    """Run the scope's query off the event loop; errors surface to the caller."""

    return compute_snapshot(scope, base_url)
