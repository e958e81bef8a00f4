from django.urls import re_path

from .views import AdminLoginView
from .views import AdminRegisterView
from .views import MeView
from .views import StudentLoginView
from .views import StudentRegisterView

# The original frontend calls these without a trailing slash.
urlpatterns = [
    re_path(
        r"^student/register/?$",
        StudentRegisterView.as_view(),
        name="student-register",
    ),
    re_path(r"^student/login/?$", StudentLoginView.as_view(), name="student-login"),
    re_path(r"^admin/register/?$", AdminRegisterView.as_view(), name="admin-register"),
    re_path(r"^admin/login/?$", AdminLoginView.as_view(), name="admin-login"),
    re_path(r"^users/me/?$", MeView.as_view(), name="user-me"),
]
