from django.urls import include
from django.urls import path

app_name = "api"
urlpatterns = [
    path(
        "audit/",
        include(("student_hub.audit.api.urls", "audit"), namespace="audit"),
    ),
    # Stream routes first: "student/<kind>/stream" must not fall through to
    # the list endpoints.
    path("", include("student_hub.realtime.urls")),
    path("", include("student_hub.users.api.urls")),
    path("", include("student_hub.achievements.api.urls")),
]
