from contextlib import suppress

from django.apps import apps
from django.contrib.auth.models import Group
from django.contrib.auth.models import Permission
from django.contrib.contenttypes.models import ContentType
from django.core.management.base import BaseCommand
from django.utils.translation import gettext as _

from student_hub.users.api.permissions import ROLE_ADMIN
from student_hub.users.api.permissions import ROLE_STUDENT

FULL_ACTIONS = ("add", "change", "delete", "view")
REVIEW_ACTIONS = ("add", "change", "view")
SUBMIT_ACTIONS = ("add", "view")

# Submissions are never deleted through the API; faculty may still do so
# from the Django admin.
ROLE_APP_ACTIONS = {
    ROLE_ADMIN: {
        "achievements": FULL_ACTIONS,
        "audit": ("view",),
        "users": REVIEW_ACTIONS,
    },
    ROLE_STUDENT: {
        "achievements": SUBMIT_ACTIONS,
    },
}


class Command(BaseCommand):
    help = _("Create the Admin and Student role groups and their permissions")

    def handle(self, *args, **options):
        for role_name, app_rules in ROLE_APP_ACTIONS.items():
            perm_ids: set[int] = set()
            for app_label, actions in app_rules.items():
                for model in self._collect_app_models(app_label):
                    perm_ids.update(self._permission_ids(model, actions))

            group, created = Group.objects.get_or_create(name=role_name)
            group.permissions.set(Permission.objects.filter(pk__in=perm_ids))
            verb = "Created" if created else "Ensured"
            msg = f"{verb} group '{role_name}' with permissions ({len(perm_ids)})"
            self.stdout.write(self.style.SUCCESS(msg))

        self.stdout.write(self.style.SUCCESS("Role setup complete"))

    def _collect_app_models(self, label):
        with suppress(LookupError):
            return list(apps.get_app_config(label).get_models())
        return []

    def _permission_ids(self, model, actions) -> set[int]:
        ct = ContentType.objects.get_for_model(model)
        model_name = model._meta.model_name  # noqa: SLF001
        codenames = [f"{action}_{model_name}" for action in actions]
        return set(
            Permission.objects.filter(
                content_type=ct, codename__in=codenames
            ).values_list("pk", flat=True)
        )
