# -*- coding: utf-8 -*-
"""
Repository layer for Project and its QA / developer assignments (pure DB).
"""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional

from django.db import transaction
from django.db.models import Count, Prefetch, Q, QuerySet

from tracker.models import Bug, Project, ProjectAssignment


def base_qs() -> QuerySet[Project]:
    return (
        Project.objects
        .select_related("created_by")
        .prefetch_related(
            Prefetch("assignments", queryset=ProjectAssignment.objects.select_related("user"))
        )
    )

def get_or_none(project_id) -> Optional[Project]:
    try:
        return base_qs().filter(id=int(project_id)).first()
    except (TypeError, ValueError):
        return None

def list_all() -> QuerySet[Project]:
    return base_qs().order_by("-created_at", "-id")

def list_for_member(user_id: int, kinds: Iterable[str]) -> QuerySet[Project]:
    ids = (
        ProjectAssignment.objects
        .filter(user_id=user_id, kind__in=[str(k) for k in kinds])
        .values_list("project_id", flat=True)
    )
    return base_qs().filter(id__in=ids).order_by("-created_at", "-id")

def project_ids_for_member(user_id: int, kind: str) -> QuerySet:
    return (
        ProjectAssignment.objects
        .filter(user_id=user_id, kind=str(kind))
        .values_list("project_id", flat=True)
    )

def sole_qa_project_ids(user_id: int) -> List[int]:
    """Projects where the user is the only QA while developers are staffed."""
    qa, dev = ProjectAssignment.Kind.QA, ProjectAssignment.Kind.DEVELOPER
    return list(
        Project.objects
        .filter(id__in=project_ids_for_member(user_id, qa))
        .annotate(
            qa_count=Count("assignments", filter=Q(assignments__kind=qa), distinct=True),
            dev_count=Count("assignments", filter=Q(assignments__kind=dev), distinct=True),
        )
        .filter(qa_count=1, dev_count__gt=0)
        .values_list("id", flat=True)
    )


# ============================
# Mutations (pure DB)
# ============================
@transaction.atomic
def create(data: Dict[str, Any], qa_ids: List[int], developer_ids: List[int]) -> Project:
    project = Project.objects.create(**data)
    _replace_members(project, ProjectAssignment.Kind.QA, qa_ids)
    _replace_members(project, ProjectAssignment.Kind.DEVELOPER, developer_ids)
    return project

@transaction.atomic
def save_fields(obj: Project, patch: Dict[str, Any]) -> Project:
    fields: List[str] = []
    for k, v in patch.items():
        setattr(obj, k, v)
        fields.append(k)
    fields.append("updated_at")
    obj.save(update_fields=fields)
    return obj

def _replace_members(project: Project, kind: str, user_ids: Iterable[int]) -> None:
    ProjectAssignment.objects.filter(project=project, kind=kind).delete()
    ProjectAssignment.objects.bulk_create(
        [ProjectAssignment(project=project, user_id=uid, kind=kind) for uid in user_ids]
    )

@transaction.atomic
def set_members(project: Project, kind: str, user_ids: Iterable[int]) -> Project:
    """Replace one team of the project, keeping the given order."""
    _replace_members(project, kind, user_ids)
    project.save(update_fields=["updated_at"])
    return project

@transaction.atomic
def delete_with_bugs(project: Project) -> int:
    """Delete the project's bugs, then the project. Returns the number of bugs removed."""
    bug_count, _ = Bug.objects.filter(project=project).delete()
    project.delete()
    return bug_count
