from django.contrib.auth.models import AbstractUser
from django.db import models
from django.db.models import CharField
from django.db.models import EmailField
from django.utils.translation import gettext_lazy as _


class User(AbstractUser):
    """
    Default custom user model for student_hub.
    Students and faculty both log in with their email address; the role
    specific data lives on the related Student / Faculty profile.
    """

    # First and last name do not cover name patterns around the globe
    name = CharField(_("Full Name"), blank=True, max_length=255)
    email = EmailField(_("email address"), unique=True)
    # Audit timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    @property
    def sid(self) -> str | None:
        student = getattr(self, "student", None)
        return student.sid if student is not None else None


class Student(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="student")
    sid = models.CharField(_("Student ID"), max_length=50, unique=True)
    sname = models.CharField(_("Student Name"), max_length=255)
    degree = models.CharField(max_length=100)
    course = models.CharField(max_length=150)

    # Audit timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["sid"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Student({self.sid})"


class Faculty(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="faculty")
    faculty_id = models.CharField(_("Faculty ID"), max_length=50, unique=True)
    faculty_name = models.CharField(_("Faculty Name"), max_length=255)

    # Audit timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "faculty"
        ordering = ["faculty_id"]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Faculty({self.faculty_id})"
