"""Registration and login for the two roles (student, faculty/admin)."""

import logging

from django.contrib.auth import authenticate
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.contrib.auth.signals import user_logged_in
from django.db import transaction
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.permissions import AllowAny
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from student_hub.audit.utils import log_action
from student_hub.users.models import Faculty
from student_hub.users.models import Student
from student_hub.users.tokens import issue_access_token

from .permissions import ROLE_ADMIN
from .permissions import ROLE_STUDENT
from .permissions import is_admin
from .serializers import FacultyRegistrationSerializer
from .serializers import FacultySerializer
from .serializers import LoginSerializer
from .serializers import StudentRegistrationSerializer
from .serializers import StudentSerializer
from .serializers import UserSerializer

logger = logging.getLogger(__name__)
User = get_user_model()

INVALID_CREDENTIALS = "Invalid credentials"


def _normalize_password_alias(data) -> dict:
    """Faculty clients historically send the password as ``pass``."""

    out = {key: data.get(key) for key in data}
    if "pass" in out and "password" not in out:
        out["password"] = out.pop("pass")
    return out


def _add_to_group(user, name: str) -> None:
    group, _ = Group.objects.get_or_create(name=name)
    user.groups.add(group)


def _login(request, email: str, password: str):
    user = authenticate(request, username=email, password=password)
    if user is None:
        raise AuthenticationFailed(INVALID_CREDENTIALS)
    return user


class _PublicAuthView(APIView):
    authentication_classes: list = []
    permission_classes = [AllowAny]

    def get_authenticate_header(self, request):
        # Keeps failed logins at 401; DRF answers 403 without a challenge.
        return 'Bearer realm="api"'


@extend_schema(tags=["Authentication"], request=StudentRegistrationSerializer)
class StudentRegisterView(_PublicAuthView):
    def post(self, request):
        serializer = StudentRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        with transaction.atomic():
            user = User.objects.create_user(
                username=data["emailid"],
                email=data["emailid"],
                password=data["password"],
                first_name=data["sname"],
            )
            student = Student.objects.create(
                user=user,
                sid=data["sid"],
                sname=data["sname"],
                degree=data["degree"],
                course=data["course"],
            )
            _add_to_group(user, ROLE_STUDENT)

        log_action(
            "student_registered",
            actor=user,
            message=f"sid={student.sid}",
            model_name="Student",
            record_id=student.pk,
            ip_address=request.META.get("REMOTE_ADDR", "") or "",
        )
        return Response(
            {
                "message": "Student registered successfully",
                "token": issue_access_token(user),
                "studentData": StudentSerializer(student).data,
            },
            status=status.HTTP_201_CREATED,
        )


@extend_schema(tags=["Authentication"], request=LoginSerializer)
class StudentLoginView(_PublicAuthView):
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = _login(
            request,
            serializer.validated_data["emailid"],
            serializer.validated_data["password"],
        )
        student = getattr(user, "student", None)
        if student is None:
            raise AuthenticationFailed(INVALID_CREDENTIALS)

        user_logged_in.send(sender=user.__class__, request=request, user=user)
        return Response(
            {
                "message": "Student logged in successfully",
                "token": issue_access_token(user),
                "studentData": StudentSerializer(student).data,
            }
        )


@extend_schema(tags=["Authentication"], request=FacultyRegistrationSerializer)
class AdminRegisterView(_PublicAuthView):
    def post(self, request):
        logger.info("Admin registration route reached")
        serializer = FacultyRegistrationSerializer(
            data=_normalize_password_alias(request.data)
        )
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        with transaction.atomic():
            user = User.objects.create_user(
                username=data["emailid"],
                email=data["emailid"],
                password=data["password"],
                first_name=data["facultyname"],
            )
            faculty = Faculty.objects.create(
                user=user,
                faculty_id=data["facultyid"],
                faculty_name=data["facultyname"],
            )
            _add_to_group(user, ROLE_ADMIN)

        log_action(
            "faculty_registered",
            actor=user,
            message=f"facultyid={faculty.faculty_id}",
            model_name="Faculty",
            record_id=faculty.pk,
            ip_address=request.META.get("REMOTE_ADDR", "") or "",
        )
        return Response(
            {
                "message": "Admin registered successfully",
                "adminToken": issue_access_token(user),
                "facultyData": FacultySerializer(faculty).data,
            },
            status=status.HTTP_201_CREATED,
        )


@extend_schema(tags=["Authentication"], request=LoginSerializer)
class AdminLoginView(_PublicAuthView):
    def post(self, request):
        serializer = LoginSerializer(data=_normalize_password_alias(request.data))
        serializer.is_valid(raise_exception=True)
        user = _login(
            request,
            serializer.validated_data["emailid"],
            serializer.validated_data["password"],
        )
        faculty = getattr(user, "faculty", None)
        if faculty is None or not is_admin(user):
            raise AuthenticationFailed(INVALID_CREDENTIALS)

        user_logged_in.send(sender=user.__class__, request=request, user=user)
        return Response(
            {
                "message": "Admin logged in successfully",
                "adminToken": issue_access_token(user),
                "facultyData": FacultySerializer(faculty).data,
            }
        )


@extend_schema(tags=["Users"], responses=UserSerializer)
class MeView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(UserSerializer(request.user).data)
