# ============================================
# tracker/policies/roles.py
# ============================================
from typing import Optional

from django.db import models


class Role(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    MANAGER = 'manager', 'Manager'
    QA = 'qa', 'QA'
    DEVELOPER = 'developer', 'Developer'


# Who may create / edit / delete accounts of which role.
MANAGEABLE_ROLES = {
    Role.ADMIN: frozenset({Role.MANAGER, Role.QA, Role.DEVELOPER}),
    Role.MANAGER: frozenset({Role.QA, Role.DEVELOPER}),
    Role.QA: frozenset(),
    Role.DEVELOPER: frozenset(),
}

# Who may list / read accounts of which role. QA sees developers read-only.
VIEWABLE_ROLES = {
    Role.ADMIN: MANAGEABLE_ROLES[Role.ADMIN],
    Role.MANAGER: MANAGEABLE_ROLES[Role.MANAGER],
    Role.QA: frozenset({Role.DEVELOPER}),
    Role.DEVELOPER: frozenset(),
}

STAFF_ROLES = frozenset({Role.ADMIN, Role.MANAGER})


def parse_role(value) -> Optional[Role]:
    """Return the Role for a raw value, or None when it is not one of the four roles."""
    if isinstance(value, Role):
        return value
    try:
        return Role(str(value).strip().lower())
    except ValueError:
        return None


def can_manage_role(actor_role, target_role) -> bool:
    actor, target = parse_role(actor_role), parse_role(target_role)
    if actor is None or target is None:
        return False
    return target in MANAGEABLE_ROLES[actor]


def can_view_role(actor_role, target_role) -> bool:
    actor, target = parse_role(actor_role), parse_role(target_role)
    if actor is None or target is None:
        return False
    return target in VIEWABLE_ROLES[actor]


def viewable_roles(actor_role) -> frozenset:
    actor = parse_role(actor_role)
    return VIEWABLE_ROLES[actor] if actor else frozenset()


def is_staff_role(role) -> bool:
    return parse_role(role) in STAFF_ROLES
