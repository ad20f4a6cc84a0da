from types import SimpleNamespace

import pytest

from tracker.exceptions import AuthorizationError
from tracker.policies import access
from tracker.policies.access import BugScope, BugVisibility, ProjectScope


def actor(role, id):
    return SimpleNamespace(id=id, role=role)


ADMIN = actor("admin", 1)
MANAGER = actor("manager", 2)
QA_IN = actor("qa", 10)
QA_OUT = actor("qa", 11)
DEV_A = actor("developer", 20)
DEV_B = actor("developer", 21)
DEV_OUT = actor("developer", 22)

PROJECT = ProjectScope(project_id=100, qa_ids=frozenset({10}), developer_ids=frozenset({20, 21}))
BUG_OF_A = BugScope(bug_id=500, assigned_to_id=20, project=PROJECT)


def test_decision_enforce_raises_with_reason():
    decision = access.deny("nope")
    assert not decision
    with pytest.raises(AuthorizationError) as exc:
        decision.enforce()
    assert exc.value.message == "nope"
    access.ALLOW.enforce()


@pytest.mark.parametrize("who,allowed", [
    (ADMIN, True), (MANAGER, True), (QA_IN, False), (DEV_A, False),
])
def test_project_writes_are_staff_only(who, allowed):
    assert bool(access.can_write_project(who, "create")) is allowed
    assert bool(access.can_list_all_projects(who)) is allowed


def test_read_project_by_id_is_open_to_everyone():
    for who in (ADMIN, MANAGER, QA_OUT, DEV_OUT):
        assert access.can_read_project(who)


def test_assigned_projects_only_for_qa_and_developers():
    assert access.can_list_assigned_projects(QA_IN)
    assert access.can_list_assigned_projects(DEV_A)
    assert not access.can_list_assigned_projects(MANAGER)
    assert not access.can_list_assigned_projects(ADMIN)


def test_create_bug():
    assert access.can_create_bug(MANAGER, PROJECT)
    assert access.can_create_bug(QA_IN, PROJECT)
    assert not access.can_create_bug(QA_OUT, PROJECT)
    # developers never file bugs, even on their own project
    assert not access.can_create_bug(DEV_A, PROJECT)
    assert not access.can_create_bug(DEV_A)


def test_bug_visibility():
    assert access.bug_visibility(ADMIN) is BugVisibility.ALL
    assert access.bug_visibility(MANAGER) is BugVisibility.ALL
    assert access.bug_visibility(QA_IN) is BugVisibility.QA_PROJECTS
    assert access.bug_visibility(DEV_A) is BugVisibility.ASSIGNED


def test_read_bug():
    assert access.can_read_bug(ADMIN, BUG_OF_A)
    assert access.can_read_bug(QA_IN, BUG_OF_A)
    assert access.can_read_bug(DEV_A, BUG_OF_A)
    assert not access.can_read_bug(DEV_B, BUG_OF_A)
    assert not access.can_read_bug(QA_OUT, BUG_OF_A)


def test_developer_update_allowlist():
    assert access.can_update_bug(DEV_A, BUG_OF_A, ["status", "description"])
    denied = access.can_update_bug(DEV_A, BUG_OF_A, ["status", "title"])
    assert not denied
    assert "title" in denied.reason
    assert not access.can_update_bug(DEV_B, BUG_OF_A, ["status"])


def test_update_by_qa_and_staff():
    assert access.can_update_bug(QA_IN, BUG_OF_A, ["title", "assignedTo"])
    assert not access.can_update_bug(QA_OUT, BUG_OF_A, ["status"])
    assert access.can_update_bug(MANAGER, BUG_OF_A, ["title"])


def test_status_update_has_no_allowlist_but_keeps_assignment_rule():
    assert access.can_update_bug_status(DEV_A, BUG_OF_A)
    assert not access.can_update_bug_status(DEV_B, BUG_OF_A)
    assert not access.can_update_bug_status(QA_OUT, BUG_OF_A)


def test_delete_and_reassign_bug():
    assert not access.can_delete_bug(DEV_A, BUG_OF_A)
    assert access.can_delete_bug(QA_IN, BUG_OF_A)
    assert not access.can_delete_bug(QA_OUT, BUG_OF_A)
    assert access.can_delete_bug(ADMIN, BUG_OF_A)

    assert access.can_reassign_bug(MANAGER, BUG_OF_A)
    assert access.can_reassign_bug(QA_IN, BUG_OF_A)
    assert not access.can_reassign_bug(DEV_A, BUG_OF_A)


def test_user_management():
    assert access.can_create_user(MANAGER, "qa")
    assert not access.can_create_user(MANAGER, "manager")
    assert access.can_create_user(ADMIN, "manager")
    assert not access.can_create_user(ADMIN, "admin")
    assert not access.can_create_user(QA_IN, "developer")

    assert access.can_update_user(MANAGER, "developer", "qa")
    assert not access.can_update_user(MANAGER, "developer", "manager")
    assert not access.can_delete_user(MANAGER, "manager")


def test_user_listing():
    assert access.can_list_users(QA_IN)
    assert access.can_list_users(QA_IN, "developer")
    assert not access.can_list_users(QA_IN, "qa")
    assert not access.can_list_users(MANAGER, "admin")
    assert not access.can_list_users(DEV_A)
    assert access.can_read_user(ADMIN, "manager")
    assert not access.can_read_user(MANAGER, "manager")
