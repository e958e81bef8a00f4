from __future__ import annotations

import shutil
import tempfile

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from student_hub.achievements.variants import SubmissionVariant
from student_hub.users.api.permissions import ROLE_ADMIN
from student_hub.users.api.permissions import ROLE_STUDENT
from student_hub.users.tests.factories import create_faculty
from student_hub.users.tests.factories import create_student
from student_hub.users.tests.factories import make_submission

ROLE_STAFF = "Staff"
ROLE_OTHER_STUDENT = "Other Student"


class RoleAPITestCase(APITestCase):
    """Base test case to streamline role fixtures and helpers."""

    def setUp(self):
        super().setUp()
        media_root = tempfile.mkdtemp(prefix="student-hub-media-")
        self.addCleanup(shutil.rmtree, media_root, ignore_errors=True)
        media = self.settings(MEDIA_ROOT=media_root)
        media.enable()
        self.addCleanup(media.disable)

        self.students = {
            ROLE_STUDENT: create_student("S1001"),
            ROLE_OTHER_STUDENT: create_student("S2002", sname="Other Student"),
        }
        self.faculty = create_faculty("F100")
        staff = create_faculty("F900", is_staff=True)
        staff.user.groups.clear()
        self.users = {
            ROLE_ADMIN: self.faculty.user,
            ROLE_STAFF: staff.user,
            ROLE_STUDENT: self.students[ROLE_STUDENT].user,
            ROLE_OTHER_STUDENT: self.students[ROLE_OTHER_STUDENT].user,
        }
        self.skill = make_submission(
            SubmissionVariant.SKILL,
            self.students[ROLE_STUDENT],
            document="1700-cert.pdf",
        )

    # Utilities -------------------------------------------------------------
    def authenticate(self, role: str | None):
        self.client.force_authenticate(user=self.users[role] if role else None)

    def assert_http_status(self, response, expected_status: int):
        msg = getattr(response, "data", response)
        assert response.status_code == expected_status, msg

    def get(self, url_name: str, *, role: str | None, reverse_kwargs=None, **kwargs):
        self.authenticate(role)
        url = reverse(url_name, kwargs=reverse_kwargs)
        return self.client.get(url, **kwargs)

    def post(
        self,
        url_name: str,
        *,
        role: str | None,
        payload=None,
        reverse_kwargs=None,
        **kwargs,
    ):
        self.authenticate(role)
        url = reverse(url_name, kwargs=reverse_kwargs)
        kwargs.setdefault("format", "json")
        return self.client.post(url, data=payload or {}, **kwargs)

    def assert_allowed(self, response):
        assert response.status_code in (
            status.HTTP_200_OK,
            status.HTTP_201_CREATED,
            status.HTTP_204_NO_CONTENT,
        ), response.data

    def assert_denied(self, response, code=status.HTTP_403_FORBIDDEN):
        assert response.status_code == code, getattr(response, "data", response)
