from django.contrib.auth import get_user_model
from rest_framework import serializers

from student_hub.users.models import Faculty
from student_hub.users.models import Student

User = get_user_model()


class StudentSerializer(serializers.ModelSerializer[Student]):
    """Public student payload (``studentData``); never exposes the password."""

    _id = serializers.IntegerField(source="pk", read_only=True)
    emailid = serializers.EmailField(source="user.email", read_only=True)

    class Meta:
        model = Student
        fields = ["_id", "sid", "sname", "emailid", "degree", "course"]


class FacultySerializer(serializers.ModelSerializer[Faculty]):
    _id = serializers.IntegerField(source="pk", read_only=True)
    facultyname = serializers.CharField(source="faculty_name", read_only=True)
    facultyid = serializers.CharField(source="faculty_id", read_only=True)
    emailid = serializers.EmailField(source="user.email", read_only=True)

    class Meta:
        model = Faculty
        fields = ["_id", "facultyname", "facultyid", "emailid"]


class StudentRegistrationSerializer(serializers.Serializer):
    sid = serializers.CharField(max_length=50)
    sname = serializers.CharField(max_length=255)
    emailid = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    degree = serializers.CharField(max_length=100)
    course = serializers.CharField(max_length=150)

    def validate(self, attrs):
        email_taken = User.objects.filter(email__iexact=attrs["emailid"]).exists()
        sid_taken = Student.objects.filter(sid=attrs["sid"]).exists()
        if email_taken or sid_taken:
            msg = "Student with this ID or email already exists"
            raise serializers.ValidationError(msg)
        return attrs


class FacultyRegistrationSerializer(serializers.Serializer):
    facultyname = serializers.CharField(max_length=255)
    facultyid = serializers.CharField(max_length=50)
    emailid = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)

    def validate(self, attrs):
        email_taken = User.objects.filter(email__iexact=attrs["emailid"]).exists()
        id_taken = Faculty.objects.filter(faculty_id=attrs["facultyid"]).exists()
        if email_taken or id_taken:
            msg = "Faculty with this ID or email already exists"
            raise serializers.ValidationError(msg)
        return attrs


class LoginSerializer(serializers.Serializer):
    emailid = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class UserSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(source="name", read_only=True)
    groups = serializers.SlugRelatedField(
        many=True,
        read_only=True,
        slug_field="name",
    )
    student = StudentSerializer(read_only=True)
    faculty = FacultySerializer(read_only=True)

    class Meta:
        model = User
        fields = ["id", "username", "email", "full_name", "groups", "student", "faculty"]
