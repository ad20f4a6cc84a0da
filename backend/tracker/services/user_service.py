# -*- coding: utf-8 -*-
"""
User administration and self-profile updates.
Role rules come from policies.access; this module only sequences checks and writes.
"""
from __future__ import annotations
from typing import Any, Dict
import logging

from tracker.exceptions import ConflictError, ValidationError
from tracker.models import User
from tracker.policies import access, invariants
from tracker.policies.roles import parse_role
from tracker.repositories import bug_repository
from tracker.repositories import user_repository as repo
from tracker.selectors.user_selector import get_user_or_404
from tracker.uploads import read_image

logger = logging.getLogger(__name__)


def require_role(value):
    role = parse_role(value)
    if role is None:
        raise ValidationError("Invalid role. Must be one of: admin, manager, qa, developer")
    return role


def _profile_patch(user: User, data: Dict[str, Any], picture=None) -> Dict[str, Any]:
    """Blank firstname / email are ignored; lastname may be cleared."""
    patch: Dict[str, Any] = {}
    email = (data.get("email") or "").strip()
    if email and email.lower() != user.email.lower():
        if repo.email_taken(email, exclude_id=user.id):
            raise ConflictError("User with this email already exists")
        patch["email"] = email
    firstname = (data.get("firstname") or "").strip()
    if firstname:
        patch["firstname"] = firstname
    if "lastname" in data:
        patch["lastname"] = (data["lastname"] or "").strip()
    if picture is not None:
        patch["picture_data"], patch["picture_content_type"] = read_image(picture)
    return patch


def create_user(*, actor: User, firstname: str, email: str, password: str, role: str,
                lastname: str = "", picture=None) -> User:
    access.can_create_user(actor).enforce()
    role = require_role(role)
    access.can_create_user(actor, role).enforce()
    if repo.email_taken(email):
        raise ConflictError("User with this email already exists")

    data: Dict[str, Any] = {
        "firstname": firstname,
        "lastname": lastname or "",
        "email": email,
        "role": role,
    }
    if picture is not None:
        data["picture_data"], data["picture_content_type"] = read_image(picture)

    user = repo.create(data, password)
    logger.info("[user] created id=%s role=%s by=%s", user.id, user.role, actor.id)
    return user


def update_user(*, actor: User, user_id, data: Dict[str, Any], picture=None) -> User:
    access.can_update_user(actor).enforce()
    target = get_user_or_404(user_id)

    new_role = require_role(data["role"]) if data.get("role") else None
    access.can_update_user(actor, target.role, new_role).enforce()

    patch = _profile_patch(target, data, picture)
    if new_role is not None and new_role != target.role:
        if repo.has_assignments(target):
            raise ValidationError("Cannot change the role of a user assigned to projects")
        patch["role"] = new_role

    repo.save_fields(target, patch)
    logger.info("[user] updated id=%s fields=%s by=%s", target.id, sorted(patch), actor.id)
    return target


def update_profile(*, actor: User, data: Dict[str, Any], picture=None) -> User:
    if data.get("role"):
        raise ValidationError("Role cannot be changed in profile updates")
    patch = _profile_patch(actor, data, picture)
    repo.save_fields(actor, patch)
    logger.info("[user] profile updated id=%s fields=%s", actor.id, sorted(patch))
    return actor


def delete_user(*, actor: User, user_id) -> None:
    access.can_delete_user(actor).enforce()
    if str(user_id) == str(actor.id):
        raise ValidationError("You cannot delete your own account")
    target = get_user_or_404(user_id)
    access.can_delete_user(actor, target.role).enforce()
    if bug_repository.count_assigned_to(target.id):
        raise ConflictError("User still has bugs assigned; reassign them first")
    invariants.check_qa_departure(target.id)

    repo.delete(target)
    logger.info("[user] deleted id=%s by=%s", user_id, actor.id)
