# -*- coding: utf-8 -*-
"""
Selector for User:
- role-scoped listing (what the caller is allowed to see)
- single lookups with 404 / 403 already applied
"""
from __future__ import annotations
from typing import Optional

from django.db.models import QuerySet

from tracker.exceptions import NotFoundError, ValidationError
from tracker.models import User
from tracker.policies import access
from tracker.policies.roles import parse_role, viewable_roles
from tracker.repositories import user_repository as repo


def list_users(actor: User, role: Optional[str] = None) -> QuerySet[User]:
    role_filter = None
    if role:
        role_filter = parse_role(role)
        if role_filter is None:
            raise ValidationError("Invalid role. Must be one of: admin, manager, qa, developer")
    access.can_list_users(actor, role_filter).enforce()
    roles = [role_filter] if role_filter is not None else viewable_roles(actor.role)
    return repo.list_by_roles(roles)


def get_user_or_404(user_id) -> User:
    user = repo.get_or_none(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def get_visible_user(actor: User, user_id) -> User:
    access.can_list_users(actor).enforce()
    user = get_user_or_404(user_id)
    access.can_read_user(actor, user.role).enforce()
    return user
