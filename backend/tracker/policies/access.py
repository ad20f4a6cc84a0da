# ============================================
# tracker/policies/access.py
# ============================================
"""
Access control evaluator.

Every permission decision of the API is made here, from the actor (anything
with ``id`` and ``role``) and a snapshot of the target's assignment state.
Functions are side-effect free and return a ``Decision``; callers turn a
denial into an ``AuthorizationError`` with ``Decision.enforce()``.
"""
import enum
from dataclasses import dataclass
from typing import Iterable, Optional

from tracker.exceptions import AuthorizationError
from tracker.policies.roles import Role, can_manage_role, can_view_role, is_staff_role, parse_role


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = ''

    def __bool__(self):
        return self.allowed

    def enforce(self) -> None:
        if not self.allowed:
            raise AuthorizationError(self.reason)


ALLOW = Decision(True)


def deny(reason: str) -> Decision:
    return Decision(False, reason)


@dataclass(frozen=True)
class ProjectScope:
    """Assignment state of one project, as seen by the evaluator."""
    project_id: int
    qa_ids: frozenset = frozenset()
    developer_ids: frozenset = frozenset()

    @classmethod
    def of(cls, project) -> 'ProjectScope':
        return cls(
            project_id=project.id,
            qa_ids=frozenset(project.qa_ids),
            developer_ids=frozenset(project.developer_ids),
        )


@dataclass(frozen=True)
class BugScope:
    bug_id: int
    assigned_to_id: Optional[int]
    project: ProjectScope

    @classmethod
    def of(cls, bug) -> 'BugScope':
        return cls(bug_id=bug.id, assigned_to_id=bug.assigned_to_id, project=ProjectScope.of(bug.project))


class BugVisibility(enum.Enum):
    ALL = 'all'
    QA_PROJECTS = 'qa_projects'
    ASSIGNED = 'assigned'


DEVELOPER_EDITABLE_FIELDS = frozenset({'status', 'description'})


def _role(actor) -> Optional[Role]:
    return parse_role(getattr(actor, 'role', None))


def is_project_qa(actor, scope: ProjectScope) -> bool:
    return actor.id in scope.qa_ids


def is_project_developer(actor, scope: ProjectScope) -> bool:
    return actor.id in scope.developer_ids


def has_project_access(actor, scope: ProjectScope) -> bool:
    return is_staff_role(_role(actor)) or is_project_qa(actor, scope) or is_project_developer(actor, scope)


# ---------------------------------------------------------------- projects

def can_write_project(actor, action: str = 'manage') -> Decision:
    """create / update / delete / assign-qa / assign-developers"""
    if is_staff_role(_role(actor)):
        return ALLOW
    return deny(f"Access denied: Only managers and admins can {action} projects")


def can_list_all_projects(actor) -> Decision:
    if is_staff_role(_role(actor)):
        return ALLOW
    return deny("Access denied: Only managers and admins can view all projects")


def can_read_project(actor) -> Decision:
    # Any authenticated user, no assignment check.
    return ALLOW


def can_list_assigned_projects(actor) -> Decision:
    if _role(actor) in (Role.QA, Role.DEVELOPER):
        return ALLOW
    return deny("Access denied: Only QA and developers have assigned projects")


# -------------------------------------------------------------------- bugs

def can_create_bug(actor, scope: Optional[ProjectScope] = None) -> Decision:
    """Without ``scope`` only the actor's own role is checked."""
    if _role(actor) == Role.DEVELOPER:
        return deny("Access denied: Developers cannot create bugs")
    if scope is not None and not has_project_access(actor, scope):
        return deny("Access denied: You can only create bugs in projects assigned to you")
    return ALLOW


def can_list_project_bugs(actor, scope: ProjectScope) -> Decision:
    if not has_project_access(actor, scope):
        return deny("Access denied: You can only view bugs in projects assigned to you")
    return ALLOW


def bug_visibility(actor) -> BugVisibility:
    role = _role(actor)
    if role == Role.DEVELOPER:
        return BugVisibility.ASSIGNED
    if role == Role.QA:
        return BugVisibility.QA_PROJECTS
    return BugVisibility.ALL


def can_read_bug(actor, scope: BugScope) -> Decision:
    if not has_project_access(actor, scope.project):
        return deny("Access denied: You can only view bugs in projects assigned to you")
    if _role(actor) == Role.DEVELOPER and scope.assigned_to_id != actor.id:
        return deny("Access denied: You can only view bugs assigned to you")
    return ALLOW


def _can_touch_bug(actor, scope: BugScope, verb: str) -> Decision:
    role = _role(actor)
    if is_staff_role(role):
        return ALLOW
    if role == Role.DEVELOPER:
        if scope.assigned_to_id == actor.id:
            return ALLOW
        return deny(f"Access denied: Developers can only {verb} bugs assigned to them")
    if role == Role.QA and is_project_qa(actor, scope.project):
        return ALLOW
    return deny(f"Access denied: You can only {verb} bugs in projects assigned to you")


def can_update_bug(actor, scope: BugScope, changed_fields: Iterable[str] = ()) -> Decision:
    decision = _can_touch_bug(actor, scope, 'update')
    if not decision:
        return decision
    if _role(actor) == Role.DEVELOPER:
        forbidden = sorted(set(changed_fields) - DEVELOPER_EDITABLE_FIELDS)
        if forbidden:
            return deny(
                "Access denied: Developers can only change status and description "
                f"(attempted: {', '.join(forbidden)})"
            )
    return ALLOW


def can_update_bug_status(actor, scope: BugScope) -> Decision:
    return _can_touch_bug(actor, scope, 'update')


def can_delete_bug(actor, scope: BugScope) -> Decision:
    role = _role(actor)
    if role == Role.DEVELOPER:
        return deny("Access denied: Developers cannot delete bugs")
    if is_staff_role(role) or (role == Role.QA and is_project_qa(actor, scope.project)):
        return ALLOW
    return deny("Access denied: Only QA, managers, and admins can delete bugs")


def can_reassign_bug(actor, scope: BugScope) -> Decision:
    role = _role(actor)
    if is_staff_role(role) or (role == Role.QA and is_project_qa(actor, scope.project)):
        return ALLOW
    return deny("Access denied: Only QA, managers, and admins can reassign bugs")


# ------------------------------------------------------------------- users

def can_create_user(actor, target_role=None) -> Decision:
    """Without ``target_role`` only the actor's own role is checked."""
    if not is_staff_role(_role(actor)):
        return deny("Access denied: Only admins and managers can create user accounts")
    if target_role is not None and not can_manage_role(_role(actor), target_role):
        return deny(f"Access denied: You cannot create {target_role} users")
    return ALLOW


def can_list_users(actor, role_filter=None) -> Decision:
    if _role(actor) not in (Role.ADMIN, Role.MANAGER, Role.QA):
        return deny("Access denied: Only admins, managers, and QA can view users")
    if role_filter is not None and not can_view_role(_role(actor), role_filter):
        return deny(f"Access denied: You cannot view {role_filter} users")
    return ALLOW


def can_read_user(actor, target_role) -> Decision:
    if _role(actor) not in (Role.ADMIN, Role.MANAGER, Role.QA):
        return deny("Access denied: Only admins, managers, and QA can view user details")
    if not can_view_role(_role(actor), target_role):
        return deny("Access denied: You cannot view this user")
    return ALLOW


def can_update_user(actor, target_role=None, new_role=None) -> Decision:
    if not is_staff_role(_role(actor)):
        return deny("Access denied: Only admins and managers can update other users")
    if target_role is not None and not can_manage_role(_role(actor), target_role):
        return deny("Access denied: You cannot update this user")
    if new_role is not None and not can_manage_role(_role(actor), new_role):
        return deny(f"Access denied: You cannot assign {new_role} role")
    return ALLOW


def can_delete_user(actor, target_role=None) -> Decision:
    """Without ``target_role`` only the actor's own role is checked."""
    if not is_staff_role(_role(actor)):
        return deny("Access denied: Only admins and managers can delete users")
    if target_role is not None and not can_manage_role(_role(actor), target_role):
        return deny("Access denied: You cannot delete this user")
    return ALLOW
