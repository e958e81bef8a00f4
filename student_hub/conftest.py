import pytest
from rest_framework.test import APIClient

from student_hub.users.models import Faculty
from student_hub.users.models import Student
from student_hub.users.models import User
from student_hub.users.tests.factories import DEFAULT_PASSWORD
from student_hub.users.tests.factories import bearer
from student_hub.users.tests.factories import create_faculty
from student_hub.users.tests.factories import create_student


@pytest.fixture(autouse=True)
def _media_storage(settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path / "uploads")


@pytest.fixture
def user(db) -> User:
    return User.objects.create_user(
        username="plainuser",
        email="plainuser@example.com",
        password=DEFAULT_PASSWORD,
    )


@pytest.fixture
def student(db) -> Student:
    return create_student("S1001")


@pytest.fixture
def other_student(db) -> Student:
    return create_student("S2002", sname="Other Student")


@pytest.fixture
def faculty(db) -> Faculty:
    return create_faculty("F100")


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture
def student_client(student) -> APIClient:
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=bearer(student.user))
    return client


@pytest.fixture
def faculty_client(faculty) -> APIClient:
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=bearer(faculty.user))
    return client
