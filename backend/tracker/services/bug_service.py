# -*- coding: utf-8 -*-
"""
Bug / feature writes.

- create: default assignee is the project's first developer
- update: the evaluator sees which fields actually change, so a developer
  resending an unchanged title is not denied
- status / reassign / delete
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging

from django.db import transaction

from tracker.exceptions import ConflictError, NotFoundError, ValidationError
from tracker.models import Bug, User
from tracker.policies import access, invariants
from tracker.policies.access import ProjectScope
from tracker.repositories import bug_repository as repo
from tracker.repositories import project_repository
from tracker.selectors.bug_selector import bug_scope, get_bug_or_404
from tracker.uploads import read_image

logger = logging.getLogger(__name__)


def _as_id(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return value


@transaction.atomic
def create_bug(*, actor: User, project_id, title: str, bug_type: str,
               description: str = "", deadline=None, status: Optional[str] = None,
               assigned_to_id=None, screenshot=None) -> Bug:
    access.can_create_bug(actor).enforce()

    project = project_repository.get_or_none(project_id)
    if project is None:
        raise NotFoundError("Project not found")
    scope = ProjectScope.of(project)
    access.can_create_bug(actor, scope).enforce()

    developer_ids: List[int] = project.developer_ids
    if assigned_to_id not in (None, ""):
        assignee = invariants.validate_assignee_in_project(scope, assigned_to_id)
    else:
        assignee = invariants.default_assignee(developer_ids)

    if repo.title_taken(title):
        raise ConflictError("Bug with this title already exists")

    data: Dict[str, Any] = {
        "title": title,
        "bug_type": bug_type,
        "status": status or Bug.Status.NEW,
        "description": description or "",
        "deadline": deadline,
        "project": project,
        "created_by": actor,
        "assigned_to_id": assignee,
    }
    if screenshot is not None:
        data["screenshot_data"], data["screenshot_content_type"] = read_image(screenshot)

    bug = repo.create(data)
    logger.info("[bug] created id=%s project=%s assignee=%s by=%s", bug.id, project.id, assignee, actor.id)
    return repo.get_or_none(bug.id)


def _changes(bug: Bug, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Fields of ``data`` whose value differs from the stored bug.
    Blank title / type are ignored; description and deadline may be cleared.
    """
    patch: Dict[str, Any] = {}
    title = (data.get("title") or "").strip()
    if title and title != bug.title:
        patch["title"] = title
    bug_type = data.get("bug_type")
    if bug_type and bug_type != bug.bug_type:
        patch["bug_type"] = bug_type
    status = data.get("status")
    if status and status != bug.status:
        patch["status"] = status
    if "description" in data and (data["description"] or "") != bug.description:
        patch["description"] = data["description"] or ""
    if "deadline" in data and data["deadline"] != bug.deadline:
        patch["deadline"] = data["deadline"]
    assignee = data.get("assigned_to_id")
    if assignee not in (None, "") and _as_id(assignee) != bug.assigned_to_id:
        patch["assigned_to_id"] = assignee
    return patch


# Request field names, used in denial messages.
_PUBLIC_NAMES = {
    "title": "title",
    "bug_type": "type",
    "status": "status",
    "description": "description",
    "deadline": "deadline",
    "assigned_to_id": "assignedTo",
}


@transaction.atomic
def update_bug(*, actor: User, bug_id, data: Dict[str, Any], screenshot=None) -> Bug:
    bug = get_bug_or_404(bug_id)
    scope = bug_scope(bug)

    patch = _changes(bug, data)
    changed = [_PUBLIC_NAMES[k] for k in patch]
    if screenshot is not None:
        changed.append("screenshot")
    access.can_update_bug(actor, scope, changed).enforce()

    if "title" in patch and repo.title_taken(patch["title"], exclude_id=bug.id):
        raise ConflictError("Bug with this title already exists")
    if "assigned_to_id" in patch:
        patch["assigned_to_id"] = invariants.validate_assignee_in_project(scope.project, patch["assigned_to_id"])
    if screenshot is not None:
        patch["screenshot_data"], patch["screenshot_content_type"] = read_image(screenshot)

    repo.save_fields(bug, patch)
    logger.info("[bug] updated id=%s fields=%s by=%s", bug.id, sorted(patch), actor.id)
    return repo.get_or_none(bug.id)


def update_status(*, actor: User, bug_id, status: str) -> Bug:
    bug = get_bug_or_404(bug_id)
    access.can_update_bug_status(actor, bug_scope(bug)).enforce()
    if not status:
        raise ValidationError("Status is required")

    repo.save_fields(bug, {"status": status})
    logger.info("[bug] status id=%s status=%s by=%s", bug.id, status, actor.id)
    return bug


@transaction.atomic
def reassign_bug(*, actor: User, bug_id, assigned_to_id) -> Bug:
    bug = get_bug_or_404(bug_id)
    scope = bug_scope(bug)
    access.can_reassign_bug(actor, scope).enforce()
    if assigned_to_id in (None, ""):
        raise ValidationError("assignedTo is required")

    assignee = invariants.validate_assignee_in_project(scope.project, assigned_to_id)
    repo.save_fields(bug, {"assigned_to_id": assignee})
    logger.info("[bug] reassigned id=%s assignee=%s by=%s", bug.id, assignee, actor.id)
    return repo.get_or_none(bug.id)


def delete_bug(*, actor: User, bug_id) -> None:
    bug = get_bug_or_404(bug_id)
    access.can_delete_bug(actor, bug_scope(bug)).enforce()
    repo.delete(bug)
    logger.info("[bug] deleted id=%s by=%s", bug_id, actor.id)
