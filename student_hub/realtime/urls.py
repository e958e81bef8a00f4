from django.urls import re_path

from .views import PendingDocumentsStreamView
from .views import StudentAcademicsStreamView
from .views import StudentDocumentsStreamView

COLLECTIONS = "internships|placements|skills|curricular|extracurricular"

urlpatterns = [
    re_path(
        r"^admin/pending-documents/stream/?$",
        PendingDocumentsStreamView.as_view(),
        name="pending-documents-stream",
    ),
    re_path(
        rf"^student/(?P<collection>{COLLECTIONS})/stream/?$",
        StudentDocumentsStreamView.as_view(),
        name="student-documents-stream",
    ),
    re_path(
        r"^student/academics/stream/(?P<sid>[^/]+)/?$",
        StudentAcademicsStreamView.as_view(),
        name="student-academics-stream",
    ),
]
