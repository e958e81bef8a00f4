from django.urls import re_path

from .views import AcademicRecordUploadView
from .views import AcceptDocumentView
from .views import PendingDocumentsView
from .views import RejectDocumentView
from .views import StudentAcademicsView
from .views import StudentDocumentListView
from .views import SubmitDocumentView

COLLECTIONS = "internships|placements|skills|curricular|extracurricular"

urlpatterns = [
    re_path(
        r"^student/submit-document/?$",
        SubmitDocumentView.as_view(),
        name="submit-document",
    ),
    re_path(
        rf"^student/(?P<collection>{COLLECTIONS})/?$",
        StudentDocumentListView.as_view(),
        name="student-documents",
    ),
    re_path(
        r"^admin/pending-documents/?$",
        PendingDocumentsView.as_view(),
        name="pending-documents",
    ),
    re_path(r"^academics/?$", AcademicRecordUploadView.as_view(), name="academics"),
    re_path(
        r"^academics/student/(?P<sid>[^/]+)/?$",
        StudentAcademicsView.as_view(),
        name="student-academics",
    ),
    re_path(r"^skills/accept/?$", AcceptDocumentView.as_view(), name="review-accept"),
    re_path(r"^skills/reject/?$", RejectDocumentView.as_view(), name="review-reject"),
    re_path(
        r"^admin/documents/accept/?$",
        AcceptDocumentView.as_view(),
        name="admin-documents-accept",
    ),
    re_path(
        r"^admin/documents/reject/?$",
        RejectDocumentView.as_view(),
        name="admin-documents-reject",
    ),
]
