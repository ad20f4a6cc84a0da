from django.contrib import admin

from .models import Bug, Project, ProjectAssignment, User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    ordering = ("-created_at",)
    list_display = ("id", "email", "firstname", "lastname", "role", "is_active")
    list_filter = ("role", "is_active", "is_staff")
    search_fields = ("email", "firstname", "lastname")
    fields = ("email", "firstname", "lastname", "role", "is_active", "is_staff", "is_superuser")


class ProjectAssignmentInline(admin.TabularInline):
    model = ProjectAssignment
    extra = 0
    raw_id_fields = ("user",)


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "created_by", "created_at")
    search_fields = ("name",)
    inlines = [ProjectAssignmentInline]
    exclude = ("picture_data",)


@admin.register(ProjectAssignment)
class ProjectAssignmentAdmin(admin.ModelAdmin):
    list_display = ("project", "user", "kind", "created_at")
    list_filter = ("kind",)


@admin.register(Bug)
class BugAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "bug_type", "status", "project", "assigned_to", "deadline")
    list_filter = ("bug_type", "status")
    search_fields = ("title",)
    exclude = ("screenshot_data",)
