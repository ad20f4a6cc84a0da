# ============================================
# tracker/models/project.py
# ============================================
from django.conf import settings
from django.db import models


class Project(models.Model):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    picture_data = models.BinaryField(null=True, blank=True)
    picture_content_type = models.CharField(max_length=100, blank=True, default='')
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='created_projects'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'projects'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return self.name

    def _member_ids(self, kind):
        # Reads through the prefetch cache when the queryset prefetched assignments.
        return [a.user_id for a in self.assignments.all() if a.kind == kind]

    def _members(self, kind):
        return [a.user for a in self.assignments.all() if a.kind == kind]

    @property
    def qa_ids(self):
        return self._member_ids(ProjectAssignment.Kind.QA)

    @property
    def developer_ids(self):
        return self._member_ids(ProjectAssignment.Kind.DEVELOPER)

    @property
    def qa_members(self):
        return self._members(ProjectAssignment.Kind.QA)

    @property
    def developer_members(self):
        return self._members(ProjectAssignment.Kind.DEVELOPER)


class ProjectAssignment(models.Model):
    """Membership of a user in a project's QA or developer team, kept in insertion order."""

    class Kind(models.TextChoices):
        QA = 'qa', 'QA'
        DEVELOPER = 'developer', 'Developer'

    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='assignments'
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='assignments'
    )
    kind = models.CharField(max_length=16, choices=Kind.choices)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'project_assignments'
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(fields=['project', 'user', 'kind'], name='uniq_project_user_kind'),
        ]
        indexes = [
            models.Index(fields=['user', 'kind'], name='assignment_user_kind_idx'),
        ]

    def __str__(self):
        return f"{self.project_id}:{self.kind}:{self.user_id}"
