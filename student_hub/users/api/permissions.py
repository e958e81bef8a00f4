"""Role checks shared by the REST endpoints and the event streams."""

from collections.abc import Iterable

from rest_framework.permissions import BasePermission

ROLE_ADMIN = "Admin"
ROLE_STUDENT = "Student"


def _user_in_groups(user, names: Iterable[str]) -> bool:
    groups = getattr(user, "groups", None)
    names_list = list(names)
    if not groups or not names_list:
        return False
    return groups.filter(name__in=names_list).exists()


def _is_staff_or_role(user, roles: Iterable[str]) -> bool:
    return bool(getattr(user, "is_staff", False)) or _user_in_groups(user, roles)


def is_admin(user) -> bool:
    if not (user and getattr(user, "is_authenticated", False)):
        return False
    return _is_staff_or_role(user, [ROLE_ADMIN])


def student_profile(user):
    """Return the Student profile of ``user`` or None."""
    if not (user and getattr(user, "is_authenticated", False)):
        return None
    return getattr(user, "student", None)


def role_for(user) -> str | None:
    if is_admin(user):
        return "admin"
    if student_profile(user) is not None:
        return "student"
    return None


class _RolePermission(BasePermission):
    """Base helper to gate access by role names."""

    allowed_roles: tuple[str, ...] = ()
    allow_staff: bool = True

    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        if not (user and getattr(user, "is_authenticated", False)):
            return False
        if self.allow_staff and getattr(user, "is_staff", False):
            return True
        return _user_in_groups(user, self.allowed_roles)


class IsAdminRole(_RolePermission):
    """Faculty reviewers and staff."""

    allowed_roles = (ROLE_ADMIN,)
    message = "Access denied. Admin privileges required."


class IsStudentRole(BasePermission):
    """Authenticated users that own a Student profile."""

    message = "Access denied. Student account required."

    def has_permission(self, request, view) -> bool:
        return student_profile(getattr(request, "user", None)) is not None
