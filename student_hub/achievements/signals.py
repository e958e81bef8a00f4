from django.db.models.signals import post_save
from django.db.transaction import on_commit
from django.dispatch import receiver

from student_hub.realtime.events.submissions import publish_academics_changed
from student_hub.realtime.events.submissions import publish_submission_changed

from .models import SUBMISSION_MODELS
from .models import AcademicRecord


def _submission_saved(sender, instance, **kwargs):
    sid = instance.student_id
    on_commit(lambda: publish_submission_changed(sid))


for _model in SUBMISSION_MODELS.values():
    post_save.connect(
        _submission_saved,
        sender=_model,
        dispatch_uid=f"achievements.{_model.__name__}.published",
    )


@receiver(post_save, sender=AcademicRecord)
def academic_record_saved(sender, instance, **kwargs):
    sid = instance.student_id
    on_commit(lambda: publish_academics_changed(sid))
