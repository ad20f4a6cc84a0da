# -*- coding: utf-8 -*-
"""
Selector for Bug:
- ``list_bugs`` applies the optional projectId filter first, then the
  caller's visibility (all / QA projects / assigned to me)
- ``get_bug`` applies project-access and the developer assignee rule
"""
from __future__ import annotations
from typing import Any, Dict, Optional

from django.db.models import QuerySet

from tracker.exceptions import NotFoundError
from tracker.models import Bug, ProjectAssignment, User
from tracker.policies import access
from tracker.policies.access import BugScope, BugVisibility, ProjectScope
from tracker.repositories import bug_repository as repo
from tracker.repositories import project_repository


def list_bugs(actor: User, project_id: Optional[Any] = None) -> QuerySet[Bug]:
    filters: Dict[str, Any] = {}
    if project_id not in (None, ""):
        project = project_repository.get_or_none(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        access.can_list_project_bugs(actor, ProjectScope.of(project)).enforce()
        filters["project_id"] = project.id

    visibility = access.bug_visibility(actor)
    if visibility is BugVisibility.ASSIGNED:
        filters["assigned_to_id"] = actor.id
    elif visibility is BugVisibility.QA_PROJECTS:
        filters["project_ids"] = project_repository.project_ids_for_member(actor.id, ProjectAssignment.Kind.QA)
    return repo.filter_bugs(filters)


def bug_scope(bug: Bug) -> BugScope:
    # bug.project comes from select_related without the assignment prefetch.
    project = project_repository.get_or_none(bug.project_id)
    return BugScope(bug_id=bug.id, assigned_to_id=bug.assigned_to_id, project=ProjectScope.of(project))


def get_bug_or_404(bug_id) -> Bug:
    bug = repo.get_or_none(bug_id)
    if bug is None:
        raise NotFoundError("Bug not found")
    return bug


def get_bug(actor: User, bug_id) -> Bug:
    bug = get_bug_or_404(bug_id)
    access.can_read_bug(actor, bug_scope(bug)).enforce()
    return bug
