# -*- coding: utf-8 -*-
"""
Project writes: create / update / delete and the two staffing endpoints.

Every write runs, in order: role check, lookup, member validation,
QA-first rule, developer-removal guard, then the repository call.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging

from django.db import transaction

from tracker.exceptions import ValidationError
from tracker.models import Project, ProjectAssignment, User
from tracker.policies import access, invariants
from tracker.repositories import project_repository as repo
from tracker.selectors.project_selector import get_project_or_404
from tracker.uploads import read_image

logger = logging.getLogger(__name__)


def _refetch(project: Project) -> Project:
    # Assignment prefetch cache is stale after a write.
    return repo.get_or_none(project.id)


@transaction.atomic
def create_project(*, actor: User, name: str, description: str = "",
                   qa_ids: Optional[List] = None, developer_ids: Optional[List] = None,
                   picture=None) -> Project:
    access.can_write_project(actor, "create").enforce()

    qa = invariants.validate_qa_members(qa_ids or [])
    invariants.check_qa_required(invariants.unique_ids(developer_ids), incoming_qa_ids=qa)
    developers = invariants.validate_developer_members(developer_ids or [])

    data: Dict[str, Any] = {
        "name": name,
        "description": description or "",
        "created_by": actor,
    }
    if picture is not None:
        data["picture_data"], data["picture_content_type"] = read_image(picture)

    project = repo.create(data, qa, developers)
    logger.info("[project] created id=%s qa=%s developers=%s by=%s", project.id, qa, developers, actor.id)
    return _refetch(project)


@transaction.atomic
def update_project(*, actor: User, project_id, data: Dict[str, Any], picture=None) -> Project:
    """
    Partial update. ``data`` keys: name, description, qa_ids, developer_ids.
    A key that is absent keeps the stored value; blank ``name`` is ignored.
    """
    access.can_write_project(actor, "update").enforce()
    project = get_project_or_404(project_id)
    current_qa, current_devs = project.qa_ids, project.developer_ids

    qa = None
    if data.get("qa_ids") is not None:
        qa = invariants.validate_qa_members(data["qa_ids"])

    developers = None
    if data.get("developer_ids") is not None:
        developers = invariants.unique_ids(data["developer_ids"])
    effective_devs = developers if developers is not None else current_devs
    invariants.check_qa_required(effective_devs, incoming_qa_ids=qa, current_qa_ids=current_qa)
    if developers is not None:
        developers = invariants.validate_developer_members(developers)
        invariants.check_developer_removal(project.id, current_devs, developers)

    patch: Dict[str, Any] = {}
    name = (data.get("name") or "").strip()
    if name:
        patch["name"] = name
    if "description" in data:
        patch["description"] = data["description"] or ""
    if picture is not None:
        patch["picture_data"], patch["picture_content_type"] = read_image(picture)

    repo.save_fields(project, patch)
    if qa is not None:
        repo.set_members(project, ProjectAssignment.Kind.QA, qa)
    if developers is not None:
        repo.set_members(project, ProjectAssignment.Kind.DEVELOPER, developers)

    logger.info("[project] updated id=%s fields=%s by=%s", project.id, sorted(patch), actor.id)
    return _refetch(project)


def delete_project(*, actor: User, project_id) -> int:
    """Delete a project together with its bugs. Returns the number of bugs removed."""
    access.can_write_project(actor, "delete").enforce()
    project = get_project_or_404(project_id)
    removed = repo.delete_with_bugs(project)
    logger.info("[project] deleted id=%s bugs=%s by=%s", project_id, removed, actor.id)
    return removed


@transaction.atomic
def assign_qa(*, actor: User, project_id, qa_ids: List) -> Project:
    access.can_write_project(actor, "assign QA to").enforce()
    project = get_project_or_404(project_id)
    if not qa_ids:
        raise ValidationError("qaIds must be a non-empty array")

    qa = invariants.validate_qa_members(qa_ids)
    repo.set_members(project, ProjectAssignment.Kind.QA, qa)
    logger.info("[project] qa assigned id=%s qa=%s by=%s", project.id, qa, actor.id)
    return _refetch(project)


@transaction.atomic
def assign_developers(*, actor: User, project_id, developer_ids: List) -> Project:
    access.can_write_project(actor, "assign developers to").enforce()
    project = get_project_or_404(project_id)
    if not developer_ids:
        raise ValidationError("developerIds must be a non-empty array")

    invariants.check_qa_required(developer_ids, current_qa_ids=project.qa_ids)
    developers = invariants.validate_developer_members(developer_ids)
    invariants.check_developer_removal(project.id, project.developer_ids, developers)
    repo.set_members(project, ProjectAssignment.Kind.DEVELOPER, developers)
    logger.info("[project] developers assigned id=%s developers=%s by=%s", project.id, developers, actor.id)
    return _refetch(project)
