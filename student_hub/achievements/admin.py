from django.contrib import admin

from student_hub.achievements import models


class SubmissionAdmin(admin.ModelAdmin):
    list_display = ["id", "student", "status", "document", "created_at"]
    list_filter = ["status", "created_at"]
    search_fields = ["student__sid", "student__sname", "document"]
    readonly_fields = ["created_at", "updated_at"]


@admin.register(models.Internship)
class InternshipAdmin(SubmissionAdmin):
    list_display = [*SubmissionAdmin.list_display, "companyname", "companytype"]


@admin.register(models.Placement)
class PlacementAdmin(SubmissionAdmin):
    list_display = [*SubmissionAdmin.list_display, "companyname", "companytype"]


@admin.register(models.Skill)
class SkillAdmin(SubmissionAdmin):
    list_display = [*SubmissionAdmin.list_display, "skillname"]


@admin.register(models.CurricularActivity, models.ExtracurricularActivity)
class ActivityAdmin(SubmissionAdmin):
    list_display = [*SubmissionAdmin.list_display, "activities"]


@admin.register(models.AcademicRecord)
class AcademicRecordAdmin(admin.ModelAdmin):
    list_display = ["id", "student", "sem", "gpa", "document", "created_at"]
    list_filter = ["sem"]
    search_fields = ["student__sid"]
