from django.contrib.auth.models import Group
from django.core.management import call_command


def test_setup_roles_creates_groups_with_permissions(db):
    Group.objects.filter(name__in=["Admin", "Student"]).delete()

    call_command("setup_roles")

    admin = Group.objects.get(name="Admin")
    student = Group.objects.get(name="Student")
    assert admin.permissions.filter(codename="change_skill").exists()
    assert admin.permissions.filter(codename="view_auditlog").exists()
    assert student.permissions.filter(codename="add_internship").exists()
    assert not student.permissions.filter(codename="change_internship").exists()


def test_setup_roles_is_idempotent(db):
    call_command("setup_roles")
    count = Group.objects.get(name="Admin").permissions.count()

    call_command("setup_roles")

    assert Group.objects.filter(name="Admin").count() == 1
    assert Group.objects.get(name="Admin").permissions.count() == count
