import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from student_hub.achievements.models import Internship
from student_hub.users.tests.factories import bearer
from student_hub.users.tests.factories import create_student


@pytest.mark.django_db
def test_submit_document_multipart_tempfile_no_deepcopy_error(settings, tmp_path):
    """Uploading via multipart should not crash with deepcopy/pickle errors.

    Django can store uploaded files as TemporaryUploadedFile (BufferedRandom-backed)
    when the upload exceeds FILE_UPLOAD_MAX_MEMORY_SIZE. Copying request.data for
    multipart requests can trigger:
    TypeError: cannot pickle 'BufferedRandom' instances
    """

    settings.MEDIA_ROOT = str(tmp_path / "media")
    settings.FILE_UPLOAD_MAX_MEMORY_SIZE = 1  # force temp-file uploads

    student = create_student("S-DOCTEST")
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=bearer(student.user))

    upload = SimpleUploadedFile(
        "offer.pdf",
        b"x" * 2048,
        content_type="application/pdf",
    )

    res = client.post(
        "/api/v1/student/submit-document/",
        data={
            "key": "internship",
            "companyname": "Acme",
            "duration": "12 weeks",
            "companytype": "private",
            "pdfFile": upload,
        },
        format="multipart",
    )

    assert res.status_code == 201, res.data
    assert res.data["documentType"] == "internship"
    assert Internship.objects.get().document.name == res.data["fileName"]


@pytest.mark.django_db
def test_uploaded_document_is_served_from_uploads(settings, tmp_path, client):
    settings.MEDIA_ROOT = str(tmp_path / "media")
    student = create_student("S-DOCTEST2")
    api_client = APIClient()
    api_client.credentials(HTTP_AUTHORIZATION=bearer(student.user))

    res = api_client.post(
        "/api/student/submit-document",
        data={
            "key": "skill",
            "skillname": "Kubernetes",
            "pdfFile": SimpleUploadedFile(
                "cka.pdf", b"%PDF-1.4 cka", content_type="application/pdf"
            ),
        },
        format="multipart",
    )
    assert res.status_code == 201, res.data

    served = client.get(f"/uploads/{res.data['fileName']}")

    assert served.status_code == 200
    assert b"".join(served.streaming_content) == b"%PDF-1.4 cka"
