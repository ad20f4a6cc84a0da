# ============================================
# tracker/policies/invariants.py
# ============================================
"""
Assignment invariant checker.

Run before any write. Member validation reads the referenced users first and
the caller writes afterwards, without a lock in between: a role change landing
in that window is accepted.
"""
import logging
from typing import Iterable, List, Optional

from tracker.exceptions import ValidationError
from tracker.policies.access import ProjectScope
from tracker.policies.roles import Role
from tracker.repositories import bug_repository, project_repository, user_repository

logger = logging.getLogger(__name__)


def unique_ids(ids: Optional[Iterable]) -> List[int]:
    """Normalize an id list: ints, first occurrence wins, order kept."""
    seen, out = set(), []
    for raw in ids or []:
        try:
            value = int(raw)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid user ID: {raw}")
        if value not in seen:
            seen.add(value)
            out.append(value)
    return out


def _validate_members(ids: Iterable[int], role: Role, label: str) -> List[int]:
    ids = unique_ids(ids)
    users = user_repository.in_bulk(ids)
    for user_id in ids:
        user = users.get(user_id)
        if user is None or user.role != role:
            raise ValidationError(f"Invalid {label} user ID: {user_id}")
    return ids


def validate_qa_members(ids: Iterable[int]) -> List[int]:
    return _validate_members(ids, Role.QA, 'QA')


def validate_developer_members(ids: Iterable[int]) -> List[int]:
    return _validate_members(ids, Role.DEVELOPER, 'developer')


def check_qa_required(developer_ids, incoming_qa_ids=None, current_qa_ids=()) -> None:
    """
    Developers may be staffed only on a project that has QA. The effective QA
    team is the incoming one when the request carries it, otherwise the current one.
    """
    effective_qa = incoming_qa_ids if incoming_qa_ids is not None else current_qa_ids
    if developer_ids and not effective_qa:
        raise ValidationError("Developers cannot be assigned before QA team members")


def check_developer_removal(project_id: int, current_ids: Iterable[int], new_ids: Iterable[int]) -> None:
    """A developer cannot leave a project while bugs of that project are assigned to them."""
    removed = set(current_ids) - set(new_ids)
    if not removed:
        return
    blocked = bug_repository.assignees_with_bugs(project_id, removed)
    if blocked:
        raise ValidationError(
            f"Developer {sorted(blocked)[0]} still has bugs assigned in this project; reassign them first"
        )


def check_qa_departure(user_id: int) -> None:
    """A QA cannot leave a project as its last QA while developers stay on it."""
    stranded = project_repository.sole_qa_project_ids(user_id)
    if stranded:
        raise ValidationError(
            f"User is the only QA of project {sorted(stranded)[0]} which still has developers; assign another QA first"
        )


def validate_assignee_in_project(scope: ProjectScope, developer_id) -> int:
    try:
        developer_id = int(developer_id)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid developer user ID: {developer_id}")
    if developer_id not in scope.developer_ids:
        raise ValidationError("Assigned developer is not part of this project")
    return developer_id


def default_assignee(developer_ids: List[int]) -> int:
    """First developer of the project, in assignment order."""
    if not developer_ids:
        raise ValidationError("Cannot create bug: No developers are assigned to this project")
    return developer_ids[0]
