from student_hub.achievements.models import AcademicRecord
from student_hub.users.api.permissions import ROLE_ADMIN
from student_hub.users.api.permissions import ROLE_STUDENT
from student_hub.users.tests.factories import pdf_upload
from tests.permissions.mixins import ROLE_OTHER_STUDENT
from tests.permissions.mixins import ROLE_STAFF
from tests.permissions.mixins import RoleAPITestCase


class AcademicsPermissionTests(RoleAPITestCase):
    def setUp(self):
        super().setUp()
        AcademicRecord.objects.create(
            student=self.students[ROLE_STUDENT], gpa=8.2, sem=1, document="1.pdf"
        )

    def _upload(self, role):
        return self.post(
            "api_v1:academics",
            role=role,
            payload={
                "sid": "S1001",
                "gpa": "7.5",
                "sem": "2",
                "pdfFile": pdf_upload(),
            },
            format="multipart",
        )

    def test_upload_is_admin_only(self):
        self.assert_denied(self._upload(ROLE_STUDENT))
        self.assert_http_status(self._upload(ROLE_ADMIN), 201)

    def test_records_visible_to_owner_and_admins(self):
        kwargs = {"sid": "S1001"}
        for role in (ROLE_STUDENT, ROLE_ADMIN, ROLE_STAFF):
            response = self.get("api_v1:student-academics", role=role, reverse_kwargs=kwargs)
            self.assert_http_status(response, 200)
            assert response.data["count"] == 1

        self.assert_denied(
            self.get("api_v1:student-academics", role=ROLE_OTHER_STUDENT, reverse_kwargs=kwargs)
        )
