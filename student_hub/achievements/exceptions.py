"""Domain errors raised by the submission services.

Views translate these into HTTP responses; nothing here depends on DRF.
"""


class AchievementError(Exception):
    """Base class for submission and review failures."""


class UnknownVariantError(AchievementError, ValueError):
    def __init__(self, tag):
        self.tag = tag
        super().__init__(f"Unknown document type: {tag!r}")


class SubmissionNotFoundError(AchievementError, LookupError):
    def __init__(self, sid: str, location: str):
        self.sid = sid
        self.location = location
        super().__init__(f"Document not found for sid={sid!r} and url={location!r}")


class ReviewConflictError(AchievementError):
    """The submission was already accepted or rejected."""

    def __init__(self, current_status: str):
        self.current_status = current_status
        super().__init__(f"Document already {current_status}")


class DocumentStoreError(AchievementError):
    """The record write failed after the uploaded file was stored."""
