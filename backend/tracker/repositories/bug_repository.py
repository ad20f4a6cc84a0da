# -*- coding: utf-8 -*-
"""
Repository layer for Bug (pure DB).
"""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional

from django.db import transaction
from django.db.models import QuerySet

from tracker.models import Bug


def base_qs() -> QuerySet[Bug]:
    return Bug.objects.select_related("project", "created_by", "assigned_to")

def get_or_none(bug_id) -> Optional[Bug]:
    try:
        return base_qs().filter(id=int(bug_id)).first()
    except (TypeError, ValueError):
        return None

def filter_bugs(filters: Dict[str, Any]) -> QuerySet[Bug]:
    qs = base_qs()
    if (project_id := filters.get("project_id")) is not None:
        qs = qs.filter(project_id=project_id)
    if (project_ids := filters.get("project_ids")) is not None:
        qs = qs.filter(project_id__in=project_ids)
    if (assigned_to_id := filters.get("assigned_to_id")) is not None:
        qs = qs.filter(assigned_to_id=assigned_to_id)
    return qs.order_by("-created_at", "-id")

def title_taken(title: str, exclude_id: Optional[int] = None) -> bool:
    qs = Bug.objects.filter(title=title)
    if exclude_id is not None:
        qs = qs.exclude(id=exclude_id)
    return qs.exists()

def assignees_with_bugs(project_id: int, user_ids: Iterable[int]) -> List[int]:
    return list(
        Bug.objects
        .filter(project_id=project_id, assigned_to_id__in=list(user_ids))
        .values_list("assigned_to_id", flat=True)
        .distinct()
    )

def count_assigned_to(user_id: int) -> int:
    return Bug.objects.filter(assigned_to_id=user_id).count()


# ============================
# Mutations (pure DB)
# ============================
@transaction.atomic
def create(data: Dict[str, Any]) -> Bug:
    return Bug.objects.create(**data)

@transaction.atomic
def save_fields(obj: Bug, patch: Dict[str, Any]) -> Bug:
    fields: List[str] = []
    for k, v in patch.items():
        setattr(obj, k, v)
        fields.append(k)
    if fields:
        fields.append("updated_at")
        obj.save(update_fields=fields)
    return obj

@transaction.atomic
def delete(obj: Bug) -> None:
    obj.delete()
