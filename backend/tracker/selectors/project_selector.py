# -*- coding: utf-8 -*-
"""
Selector for Project: role-checked reads over project_repository.
"""
from __future__ import annotations

from django.db.models import QuerySet

from tracker.exceptions import NotFoundError
from tracker.models import Project, ProjectAssignment, User
from tracker.policies import access
from tracker.policies.roles import Role, parse_role
from tracker.repositories import project_repository as repo


def get_project_or_404(project_id) -> Project:
    project = repo.get_or_none(project_id)
    if project is None:
        raise NotFoundError("Project not found")
    return project


def get_project(actor: User, project_id) -> Project:
    access.can_read_project(actor).enforce()
    return get_project_or_404(project_id)


def list_projects(actor: User) -> QuerySet[Project]:
    access.can_list_all_projects(actor).enforce()
    return repo.list_all()


def list_assigned_projects(actor: User) -> QuerySet[Project]:
    access.can_list_assigned_projects(actor).enforce()
    kind = ProjectAssignment.Kind.QA if parse_role(actor.role) == Role.QA else ProjectAssignment.Kind.DEVELOPER
    return repo.list_for_member(actor.id, [kind])
