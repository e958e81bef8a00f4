import pytest
from rest_framework import status

from student_hub.achievements.models import SubmissionStatus
from student_hub.achievements.variants import SubmissionVariant
from student_hub.users.tests.factories import make_submission

pytestmark = pytest.mark.django_db


def test_student_sees_only_own_documents(student_client, student, other_student):
    mine = make_submission(SubmissionVariant.SKILL, student, document="1-a.pdf")
    make_submission(SubmissionVariant.SKILL, other_student, document="2-b.pdf")

    response = student_client.get("/api/student/skills")

    assert response.status_code == status.HTTP_200_OK
    assert response.data["totalCount"] == 1
    assert response.data["documents"][0]["_id"] == mine.pk
    assert response.data["documents"][0]["url"] == "http://testserver/uploads/1-a.pdf"


def test_status_filter(student_client, student):
    make_submission(SubmissionVariant.PLACEMENT, student)
    accepted = make_submission(
        SubmissionVariant.PLACEMENT, student, status=SubmissionStatus.ACCEPTED
    )

    response = student_client.get("/api/v1/student/placements/", {"status": "accepted"})

    assert response.status_code == status.HTTP_200_OK
    assert [doc["_id"] for doc in response.data["documents"]] == [accepted.pk]


def test_unknown_collection_is_404(student_client):
    response = student_client.get("/api/student/awards")

    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_pending_documents_for_faculty(faculty_client, student):
    make_submission(SubmissionVariant.EXTRACURRICULAR, student)
    make_submission(SubmissionVariant.SKILL, student, status=SubmissionStatus.REJECTED)

    response = faculty_client.get("/api/admin/pending-documents")

    assert response.status_code == status.HTTP_200_OK
    assert response.data["totalCount"] == 1
    assert response.data["breakdown"]["extracurriculam"] == 1
    assert response.data["documents"][0]["documentType"] == "extracurriculam"


def test_pending_documents_forbidden_for_students(student_client):
    response = student_client.get("/api/admin/pending-documents")

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert response.data["error"] == "Access denied. Admin privileges required."
