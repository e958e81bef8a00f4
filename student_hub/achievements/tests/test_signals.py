import pytest

from student_hub.achievements import signals
from student_hub.achievements.models import AcademicRecord
from student_hub.achievements.variants import SubmissionVariant
from student_hub.users.tests.factories import make_submission

pytestmark = pytest.mark.django_db


@pytest.fixture
def published(monkeypatch):
    calls = []
    monkeypatch.setattr(
        signals,
        "publish_submission_changed",
        lambda sid: calls.append(("submission", sid)),
    )
    monkeypatch.setattr(
        signals,
        "publish_academics_changed",
        lambda sid: calls.append(("academics", sid)),
    )
    return calls


def test_saving_a_submission_publishes_after_commit(
    student, published, django_capture_on_commit_callbacks
):
    with django_capture_on_commit_callbacks(execute=True):
        make_submission(SubmissionVariant.PLACEMENT, student)
        assert published == []

    assert published == [("submission", student.sid)]


def test_saving_an_academic_record_publishes(
    student, published, django_capture_on_commit_callbacks
):
    with django_capture_on_commit_callbacks(execute=True):
        AcademicRecord.objects.create(student=student, gpa=8.0, sem=1, document="1.pdf")

    assert published == [("academics", student.sid)]
