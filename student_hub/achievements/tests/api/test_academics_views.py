import pytest
from rest_framework import status

from student_hub.achievements.models import AcademicRecord
from student_hub.users.tests.factories import pdf_upload

pytestmark = pytest.mark.django_db

UPLOAD_URL = "/api/academics"


def test_faculty_uploads_record(faculty_client, student):
    response = faculty_client.post(
        UPLOAD_URL,
        {"sid": student.sid, "gpa": "8.5", "sem": "3", "pdfFile": pdf_upload()},
        format="multipart",
    )

    assert response.status_code == status.HTTP_201_CREATED, response.data
    assert response.data["message"] == "Academic record created successfully"
    assert response.data["record"]["sem"] == 3
    assert response.data["record"]["gpa"] == 8.5
    assert response.data["record"]["url"].startswith("http://testserver/uploads/")
    assert AcademicRecord.objects.get().student == student


def test_upload_for_unknown_student(faculty_client):
    response = faculty_client.post(
        UPLOAD_URL,
        {"sid": "NOPE", "gpa": "8.5", "sem": "3", "pdfFile": pdf_upload()},
        format="multipart",
    )

    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.data["error"] == "Student not found with this student ID"


@pytest.mark.parametrize("sem", ["0", "9"])
def test_semester_out_of_range(faculty_client, student, sem):
    response = faculty_client.post(
        UPLOAD_URL,
        {"sid": student.sid, "gpa": "8.5", "sem": sem, "pdfFile": pdf_upload()},
        format="multipart",
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "Semester must be between 1 and 8" in response.data["error"]


def test_upload_requires_pdf(faculty_client, student):
    response = faculty_client.post(
        UPLOAD_URL,
        {"sid": student.sid, "gpa": "8.5", "sem": "2"},
        format="multipart",
    )

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "PDF file is required" in response.data["error"]


def test_students_cannot_upload(student_client, student):
    response = student_client.post(
        UPLOAD_URL,
        {"sid": student.sid, "gpa": "9.9", "sem": "1", "pdfFile": pdf_upload()},
        format="multipart",
    )

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_student_reads_own_records(student_client, student):
    AcademicRecord.objects.create(student=student, gpa=7.0, sem=2, document="2.pdf")
    AcademicRecord.objects.create(student=student, gpa=6.5, sem=1, document="1.pdf")

    response = student_client.get(f"/api/academics/student/{student.sid}")

    assert response.status_code == status.HTTP_200_OK
    assert response.data["count"] == 2
    assert [record["sem"] for record in response.data["records"]] == [1, 2]


def test_student_cannot_read_others_records(student_client, other_student):
    response = student_client.get(f"/api/academics/student/{other_student.sid}")

    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_faculty_reads_any_student(faculty_client, other_student):
    AcademicRecord.objects.create(
        student=other_student, gpa=9.1, sem=4, document="4.pdf"
    )

    response = faculty_client.get(f"/api/academics/student/{other_student.sid}")

    assert response.status_code == status.HTTP_200_OK
    assert response.data["sid"] == other_student.sid
    assert response.data["count"] == 1
