import pytest

from tracker.policies.roles import Role, can_manage_role, can_view_role, parse_role, viewable_roles

A, M, Q, D = "admin", "manager", "qa", "developer"

MANAGES = {
    (A, M), (A, Q), (A, D),
    (M, Q), (M, D),
}


@pytest.mark.parametrize("actor", [A, M, Q, D])
@pytest.mark.parametrize("target", [A, M, Q, D])
def test_can_manage_role_table(actor, target):
    assert can_manage_role(actor, target) is ((actor, target) in MANAGES)


def test_no_role_manages_itself():
    for role in Role:
        assert not can_manage_role(role, role)


def test_qa_views_developers_only():
    assert can_view_role(Q, D)
    assert not can_view_role(Q, Q)
    assert not can_view_role(D, D)
    assert viewable_roles(Q) == frozenset({Role.DEVELOPER})


def test_parse_role():
    assert parse_role(" QA ") == Role.QA
    assert parse_role(Role.ADMIN) is Role.ADMIN
    assert parse_role("owner") is None
    assert parse_role(None) is None


def test_unknown_roles_manage_nothing():
    assert not can_manage_role("owner", D)
    assert not can_manage_role(A, "owner")
