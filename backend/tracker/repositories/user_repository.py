# -*- coding: utf-8 -*-
"""
Repository layer for User (pure DB):
- lookups, filters, create / patch / delete
- no permission or invariant rules here, the services decide.
"""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional

from django.db import transaction
from django.db.models import QuerySet

from tracker.models import User


def base_qs() -> QuerySet[User]:
    return User.objects.all()

def get_or_none(user_id) -> Optional[User]:
    try:
        return base_qs().filter(id=int(user_id)).first()
    except (TypeError, ValueError):
        return None

def get_by_email(email: str) -> Optional[User]:
    if not email:
        return None
    return base_qs().filter(email__iexact=email.strip()).first()

def email_taken(email: str, exclude_id: Optional[int] = None) -> bool:
    qs = base_qs().filter(email__iexact=email.strip())
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    return qs.exists()

def list_by_roles(roles: Iterable[str]) -> QuerySet[User]:
    return base_qs().filter(role__in=[str(r) for r in roles])

def in_bulk(user_ids: Iterable[int]) -> Dict[int, User]:
    return base_qs().in_bulk(list(user_ids))

def has_assignments(user: User) -> bool:
    return user.assignments.exists()


@transaction.atomic
def create(data: Dict[str, Any], password: str) -> User:
    return User.objects.create_user(password=password, **data)

@transaction.atomic
def save_fields(obj: User, patch: Dict[str, Any]) -> User:
    fields: List[str] = []
    for k, v in patch.items():
        setattr(obj, k, v)
        fields.append(k)
    if fields:
        fields.append("updated_at")
        obj.save(update_fields=fields)
    return obj

@transaction.atomic
def set_password(obj: User, raw_password: str) -> User:
    obj.set_password(raw_password)
    obj.save(update_fields=["password", "updated_at"])
    return obj

@transaction.atomic
def delete(obj: User) -> None:
    obj.delete()
