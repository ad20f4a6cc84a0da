import pytest

from tracker.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from tracker.models import User
from tracker.policies.roles import Role
from tracker.selectors import user_selector
from tracker.services import user_service


@pytest.mark.django_db
def test_manager_creates_qa(manager):
    user = user_service.create_user(
        actor=manager, firstname="Quinn", email="quinn@example.com", password="pw123456", role="qa"
    )
    assert user.role == Role.QA
    assert user.check_password("pw123456")


@pytest.mark.django_db
def test_manager_cannot_create_manager(manager):
    with pytest.raises(AuthorizationError):
        user_service.create_user(
            actor=manager, firstname="M", email="m2@example.com", password="pw", role="manager"
        )


@pytest.mark.django_db
def test_qa_cannot_create_users(qa):
    with pytest.raises(AuthorizationError):
        user_service.create_user(actor=qa, firstname="D", email="d@example.com", password="pw", role="developer")


@pytest.mark.django_db
def test_create_duplicate_email(admin_user, dev1):
    with pytest.raises(ConflictError):
        user_service.create_user(
            actor=admin_user, firstname="D", email=dev1.email.upper(), password="pw", role="developer"
        )


@pytest.mark.django_db
def test_self_delete_is_forbidden(manager):
    with pytest.raises(ValidationError):
        user_service.delete_user(actor=manager, user_id=manager.id)
    assert User.objects.filter(id=manager.id).exists()


@pytest.mark.django_db
def test_delete_checks(manager, make_user, dev1, project, make_bug):
    other_manager = make_user(Role.MANAGER)
    with pytest.raises(AuthorizationError):
        user_service.delete_user(actor=manager, user_id=other_manager.id)
    with pytest.raises(NotFoundError):
        user_service.delete_user(actor=manager, user_id=424242)

    make_bug(project, dev1)
    with pytest.raises(ConflictError):
        user_service.delete_user(actor=manager, user_id=dev1.id)


@pytest.mark.django_db
def test_delete_removes_assignments(admin_user, dev2, project):
    user_service.delete_user(actor=admin_user, user_id=dev2.id)
    assert not User.objects.filter(id=dev2.id).exists()
    assert not project.assignments.filter(user_id=dev2.id).exists()


@pytest.mark.django_db
def test_update_role_of_assigned_user(manager, dev1, project, outsider_dev):
    with pytest.raises(ValidationError):
        user_service.update_user(actor=manager, user_id=dev1.id, data={"role": "qa"})

    updated = user_service.update_user(actor=manager, user_id=outsider_dev.id, data={"role": "qa"})
    assert updated.role == Role.QA


@pytest.mark.django_db
def test_update_to_unmanaged_role(manager, outsider_dev):
    with pytest.raises(AuthorizationError):
        user_service.update_user(actor=manager, user_id=outsider_dev.id, data={"role": "manager"})


@pytest.mark.django_db
def test_update_ignores_blank_required_fields(admin_user, dev1):
    updated = user_service.update_user(
        actor=admin_user, user_id=dev1.id, data={"firstname": "", "email": "", "lastname": ""}
    )
    assert updated.firstname
    assert updated.email
    assert updated.lastname == ""


@pytest.mark.django_db
def test_profile_update_rejects_role(qa):
    with pytest.raises(ValidationError):
        user_service.update_profile(actor=qa, data={"role": "manager"})
    updated = user_service.update_profile(actor=qa, data={"firstname": "Quentin"})
    assert updated.firstname == "Quentin"


@pytest.mark.django_db
def test_listing_is_scoped_by_role(admin_user, manager, qa, dev1):
    assert set(user_selector.list_users(qa)) == {dev1}
    assert set(user_selector.list_users(manager)) == {qa, dev1}
    assert set(user_selector.list_users(admin_user)) == {manager, qa, dev1}
    with pytest.raises(AuthorizationError):
        user_selector.list_users(manager, role="admin")
    with pytest.raises(ValidationError):
        user_selector.list_users(manager, role="owner")
    with pytest.raises(AuthorizationError):
        user_selector.list_users(dev1)


@pytest.mark.django_db
def test_get_visible_user(qa, manager, dev1):
    assert user_selector.get_visible_user(qa, dev1.id) == dev1
    with pytest.raises(AuthorizationError):
        user_selector.get_visible_user(qa, manager.id)


@pytest.mark.django_db
def test_cannot_delete_last_qa_of_staffed_project(manager, qa, project):
    with pytest.raises(ValidationError):
        user_service.delete_user(actor=manager, user_id=qa.id)
    assert User.objects.filter(id=qa.id).exists()
    assert project.assignments.filter(user_id=qa.id, kind="qa").exists()


@pytest.mark.django_db
def test_delete_qa_when_another_qa_remains(manager, qa, other_qa, dev1, make_project):
    shared = make_project("Shared", qa_users=[qa, other_qa], developers=[dev1])
    make_project("QA only", qa_users=[qa])

    user_service.delete_user(actor=manager, user_id=qa.id)

    assert not User.objects.filter(id=qa.id).exists()
    assert list(shared.assignments.filter(kind="qa").values_list("user_id", flat=True)) == [other_qa.id]
