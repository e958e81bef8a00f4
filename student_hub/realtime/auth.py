"""Authenticate event-stream requests before any stream bytes are written."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from channels.db import database_sync_to_async
from rest_framework.exceptions import AuthenticationFailed

from student_hub.users.api.permissions import role_for
from student_hub.users.api.permissions import student_profile
from student_hub.users.authentication import BearerOrQueryTokenAuthentication

logger = logging.getLogger(__name__)

NO_TOKEN = "Access denied. No token provided."
INVALID_TOKEN = "Invalid token."


class StreamAccessError(Exception):
    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class StreamPrincipal:
    user_id: int
    role: str | None
    sid: str | None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


@database_sync_to_async
def _principal_for(request) -> StreamPrincipal | None:
    result = BearerOrQueryTokenAuthentication().authenticate(request)
    if result is None:
        return None
    user, _token = result
    student = student_profile(user)
    return StreamPrincipal(
        user_id=int(user.pk),
        role=role_for(user),
        sid=student.sid if student is not None else None,
    )


async def authenticate_stream(request) -> StreamPrincipal:
    """Return the caller or raise StreamAccessError(401)."""

    try:
        principal = await _principal_for(request)
    except AuthenticationFailed as exc:
        logger.info("Stream token rejected: %s", exc.detail)
        raise StreamAccessError(401, INVALID_TOKEN) from exc
    if principal is None:
        raise StreamAccessError(401, NO_TOKEN)
    return principal
