import importlib

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class AchievementsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "student_hub.achievements"
    verbose_name = _("Achievements")

    def ready(self) -> None:  # pragma: no cover
        importlib.import_module("student_hub.achievements.signals")
        return super().ready()
