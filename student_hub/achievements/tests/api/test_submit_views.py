import pytest
from django.db import DatabaseError
from rest_framework import status

from student_hub.achievements.models import Internship
from student_hub.achievements.models import Skill
from student_hub.achievements.models import SubmissionStatus
from student_hub.users.tests.factories import pdf_upload

pytestmark = pytest.mark.django_db

SUBMIT_URL = "/api/student/submit-document"


def test_submit_skill_with_pdf(student_client, student):
    response = student_client.post(
        SUBMIT_URL,
        {"key": "skill", "skillname": "Python", "pdfFile": pdf_upload()},
        format="multipart",
    )

    assert response.status_code == status.HTTP_201_CREATED, response.data
    assert response.data["message"] == "skill document submitted successfully"
    assert response.data["documentType"] == "skill"
    document = response.data["document"]
    assert document["status"] == SubmissionStatus.PENDING
    assert document["sid"] == student.sid
    assert document["url"].startswith("http://testserver/uploads/")
    assert document["url"].endswith("-certificate.pdf")
    assert response.data["fileName"].endswith("-certificate.pdf")
    assert Skill.objects.get().student == student


def test_submit_accepts_key_aliases(student_client):
    response = student_client.post(
        SUBMIT_URL,
        {
            "key": "Internships",
            "companyname": "ISRO",
            "duration": "6 weeks",
            "companytype": "government",
            "pdfFile": pdf_upload(),
        },
        format="multipart",
    )

    assert response.status_code == status.HTTP_201_CREATED, response.data
    assert response.data["documentType"] == "internship"
    assert Internship.objects.get().companytype == "government"


def test_activity_without_attachment(student_client):
    response = student_client.post(
        SUBMIT_URL,
        {"key": "curriculam", "activities": "Debate", "description": "Finalist"},
        format="json",
    )

    assert response.status_code == status.HTTP_201_CREATED, response.data
    assert response.data["document"]["url"] is None
    assert response.data["fileName"] is None


def test_missing_key(student_client):
    response = student_client.post(SUBMIT_URL, {"skillname": "Go"}, format="json")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "Document key is required" in response.data["error"]


def test_unknown_key(student_client):
    response = student_client.post(
        SUBMIT_URL, {"key": "awards", "skillname": "Go"}, format="json"
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "Invalid document key" in response.data["error"]


def test_non_pdf_is_rejected(student_client):
    upload = pdf_upload(name="notes.txt", content=b"hello", content_type="text/plain")

    response = student_client.post(
        SUBMIT_URL,
        {"key": "skill", "skillname": "Go", "pdfFile": upload},
        format="multipart",
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "Only PDF files are allowed" in response.data["error"]
    assert not Skill.objects.exists()


def test_oversized_pdf_is_rejected(student_client, settings):
    settings.SUBMISSION_UPLOAD_MAX_BYTES = 8

    response = student_client.post(
        SUBMIT_URL,
        {"key": "skill", "skillname": "Go", "pdfFile": pdf_upload()},
        format="multipart",
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "File too large" in response.data["error"]


def test_skill_without_attachment(student_client, student):
    response = student_client.post(
        SUBMIT_URL, {"key": "skill", "skillname": "Python"}, format="multipart"
    )

    assert response.status_code == status.HTTP_201_CREATED, response.data
    skill = Skill.objects.get()
    assert skill.status == SubmissionStatus.PENDING
    assert skill.skillname == "Python"
    assert not skill.document
    assert response.data["document"]["url"] is None


def test_placement_company_type_is_validated(student_client):
    response = student_client.post(
        SUBMIT_URL,
        {
            "key": "placement",
            "companyname": "Acme",
            "companytype": "startup",
            "pdfFile": pdf_upload(),
        },
        format="multipart",
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "government or private" in response.data["error"]


def test_store_failure_returns_500(student_client, monkeypatch):
    def broken_save(self, *args, **kwargs):
        raise DatabaseError("disk full")

    monkeypatch.setattr(Skill, "save", broken_save)

    response = student_client.post(
        SUBMIT_URL,
        {"key": "skill", "skillname": "Go", "pdfFile": pdf_upload()},
        format="multipart",
    )

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.data["error"] == "Failed to submit document"


def test_faculty_cannot_submit(faculty_client):
    response = faculty_client.post(
        SUBMIT_URL,
        {"key": "skill", "skillname": "Go", "pdfFile": pdf_upload()},
        format="multipart",
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_anonymous_cannot_submit(api_client):
    response = api_client.post(SUBMIT_URL, {"key": "skill"}, format="json")

    assert response.status_code == status.HTTP_401_UNAUTHORIZED
