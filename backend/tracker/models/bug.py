# ============================================
# tracker/models/bug.py
# ============================================
from django.conf import settings
from django.db import models


class Bug(models.Model):
    """A bug or a feature request filed against a project."""

    class BugType(models.TextChoices):
        BUG = 'bug', 'Bug'
        FEATURE = 'feature', 'Feature'

    class Status(models.TextChoices):
        NEW = 'new', 'New'
        STARTED = 'started', 'Started'
        RESOLVED = 'resolved', 'Resolved'
        COMPLETED = 'completed', 'Completed'

    title = models.CharField(max_length=255, unique=True)
    bug_type = models.CharField(max_length=10, choices=BugType.choices)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.NEW)
    description = models.TextField(blank=True, default='')
    deadline = models.DateTimeField(null=True, blank=True)
    project = models.ForeignKey(
        'Project',
        on_delete=models.CASCADE,
        related_name='bugs'
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='created_bugs'
    )
    assigned_to = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='assigned_bugs'
    )
    screenshot_data = models.BinaryField(null=True, blank=True)
    screenshot_content_type = models.CharField(max_length=100, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'bugs'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['bug_type', 'status'], name='bug_type_status_idx'),
            models.Index(fields=['project', 'assigned_to'], name='bug_project_assignee_idx'),
        ]

    def __str__(self):
        return f"[{self.bug_type}] {self.title}"
