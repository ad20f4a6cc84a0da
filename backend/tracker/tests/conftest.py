import itertools

import pytest
from rest_framework.test import APIClient

from tracker.models import Bug, User
from tracker.policies.roles import Role
from tracker.repositories import project_repository

_seq = itertools.count(1)


@pytest.fixture(autouse=True)
def fast_hasher(settings):
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


@pytest.fixture
def make_user(db):
    def _make(role, email=None, password="secret123", **extra):
        n = next(_seq)
        return User.objects.create_user(
            email=email or f"{role}{n}@example.com",
            password=password,
            firstname=extra.pop("firstname", f"{str(role).title()}{n}"),
            role=role,
            **extra,
        )
    return _make


@pytest.fixture
def admin_user(make_user):
    return make_user(Role.ADMIN)

@pytest.fixture
def manager(make_user):
    return make_user(Role.MANAGER)

@pytest.fixture
def qa(make_user):
    return make_user(Role.QA)

@pytest.fixture
def other_qa(make_user):
    return make_user(Role.QA)

@pytest.fixture
def dev1(make_user):
    return make_user(Role.DEVELOPER)

@pytest.fixture
def dev2(make_user):
    return make_user(Role.DEVELOPER)

@pytest.fixture
def outsider_dev(make_user):
    return make_user(Role.DEVELOPER)


@pytest.fixture
def make_project(db, manager):
    def _make(name="Apollo", qa_users=(), developers=()):
        project = project_repository.create(
            {"name": name, "description": "", "created_by": manager},
            [u.id for u in qa_users],
            [u.id for u in developers],
        )
        return project_repository.get_or_none(project.id)
    return _make


@pytest.fixture
def project(make_project, qa, dev1, dev2):
    """QA: qa. Developers: dev1, dev2 (dev1 first)."""
    return make_project("Apollo", qa_users=[qa], developers=[dev1, dev2])


@pytest.fixture
def make_bug(db, manager):
    def _make(project, assignee, title=None, **extra):
        return Bug.objects.create(
            title=title or f"Bug {next(_seq)}",
            bug_type=extra.pop("bug_type", Bug.BugType.BUG),
            project=project,
            created_by=manager,
            assigned_to=assignee,
            **extra,
        )
    return _make


@pytest.fixture
def api():
    def _client(user=None):
        client = APIClient()
        if user is not None:
            client.force_authenticate(user=user)
        return client
    return _client
