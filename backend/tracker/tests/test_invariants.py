import pytest

from tracker.exceptions import ValidationError
from tracker.policies import invariants
from tracker.policies.access import ProjectScope


def test_unique_ids_keeps_first_occurrence_order():
    assert invariants.unique_ids(["3", 1, 3, 2, 1]) == [3, 1, 2]
    assert invariants.unique_ids(None) == []
    with pytest.raises(ValidationError):
        invariants.unique_ids(["abc"])


@pytest.mark.django_db
def test_member_validation_checks_exact_role(qa, dev1):
    assert invariants.validate_qa_members([qa.id]) == [qa.id]
    assert invariants.validate_developer_members([dev1.id, dev1.id]) == [dev1.id]

    with pytest.raises(ValidationError) as exc:
        invariants.validate_qa_members([qa.id, dev1.id])
    assert exc.value.message == f"Invalid QA user ID: {dev1.id}"

    with pytest.raises(ValidationError) as exc:
        invariants.validate_developer_members([999999])
    assert exc.value.message == "Invalid developer user ID: 999999"


def test_qa_required_uses_effective_qa_set():
    invariants.check_qa_required([], incoming_qa_ids=None, current_qa_ids=[])
    invariants.check_qa_required([5], incoming_qa_ids=[1], current_qa_ids=[])
    invariants.check_qa_required([5], incoming_qa_ids=None, current_qa_ids=[1])

    with pytest.raises(ValidationError):
        invariants.check_qa_required([5], incoming_qa_ids=None, current_qa_ids=[])
    # an explicit empty QA list overrides the stored one
    with pytest.raises(ValidationError):
        invariants.check_qa_required([5], incoming_qa_ids=[], current_qa_ids=[1])


def test_assignee_must_be_project_developer():
    scope = ProjectScope(project_id=1, qa_ids=frozenset({1}), developer_ids=frozenset({7, 8}))
    assert invariants.validate_assignee_in_project(scope, "7") == 7
    with pytest.raises(ValidationError) as exc:
        invariants.validate_assignee_in_project(scope, 9)
    assert exc.value.message == "Assigned developer is not part of this project"


def test_default_assignee_is_first_developer():
    assert invariants.default_assignee([4, 2, 9]) == 4
    with pytest.raises(ValidationError):
        invariants.default_assignee([])


@pytest.mark.django_db
def test_developer_removal_blocked_while_bugs_assigned(project, dev1, dev2, make_bug):
    make_bug(project, dev2)
    invariants.check_developer_removal(project.id, [dev1.id, dev2.id], [dev2.id])
    with pytest.raises(ValidationError):
        invariants.check_developer_removal(project.id, [dev1.id, dev2.id], [dev1.id])


@pytest.mark.django_db
def test_qa_departure_blocked_only_when_last_qa_with_developers(make_project, qa, other_qa, dev1):
    make_project("Solo", qa_users=[qa], developers=[dev1])
    make_project("Pair", qa_users=[other_qa, qa], developers=[dev1])

    with pytest.raises(ValidationError):
        invariants.check_qa_departure(qa.id)
    invariants.check_qa_departure(other_qa.id)
