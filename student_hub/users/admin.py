from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from student_hub.users.models import Faculty
from student_hub.users.models import Student
from student_hub.users.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ["username", "email", "name", "is_staff"]
    search_fields = ["username", "email", "name"]


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ["sid", "sname", "degree", "course"]
    search_fields = ["sid", "sname", "user__email"]


@admin.register(Faculty)
class FacultyAdmin(admin.ModelAdmin):
    list_display = ["faculty_id", "faculty_name"]
    search_fields = ["faculty_id", "faculty_name", "user__email"]
