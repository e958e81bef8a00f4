from __future__ import annotations

import logging

from django.http import JsonResponse
from django.views import View

from student_hub.achievements.variants import variant_for_collection

from .auth import StreamAccessError
from .auth import StreamPrincipal
from .auth import authenticate_stream
from .notifier import SnapshotScope
from .sessions import SubscriberSession
from .sse import event_stream_response

logger = logging.getLogger(__name__)


class SnapshotStreamView(View):
    """Base for the standing event streams; subclasses pick the scope."""

    http_method_names = ["get", "options"]

    def get_scope(self, principal: StreamPrincipal, **kwargs) -> SnapshotScope:
        raise NotImplementedError

    async def get(self, request, **kwargs):
        try:
            principal = await authenticate_stream(request)
            scope = self.get_scope(principal, **kwargs)
        except StreamAccessError as exc:
            return JsonResponse(
                {"error": exc.message, "detail": exc.message}, status=exc.status
            )
        session = SubscriberSession(scope)
        return event_stream_response(session.stream())


def _require_student(principal: StreamPrincipal) -> str:
    if principal.sid is None:
        msg = "Access denied. Student account required."
        raise StreamAccessError(403, msg)
    return principal.sid


class PendingDocumentsStreamView(SnapshotStreamView):
    def get_scope(self, principal, **kwargs):
        if not principal.is_admin:
            msg = "Access denied. Admin privileges required."
            raise StreamAccessError(403, msg)
        return SnapshotScope.admin()


class StudentDocumentsStreamView(SnapshotStreamView):
    def get_scope(self, principal, collection, **kwargs):
        sid = _require_student(principal)
        return SnapshotScope.student(sid, variant_for_collection(collection))


class StudentAcademicsStreamView(SnapshotStreamView):
    def get_scope(self, principal, sid, **kwargs):
        own_sid = _require_student(principal)
        if sid != own_sid:
            logger.warning("Academics stream for sid=%s refused to sid=%s", sid, own_sid)
            msg = "Access denied. Can only view your own academic records."
            raise StreamAccessError(403, msg)
        return SnapshotScope.academics(sid)
