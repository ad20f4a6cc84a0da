import pytest
from django.core.management import call_command
from django.urls import resolve
from rest_framework.settings import api_settings

from tracker.authentication import BearerTokenAuthentication
from tracker.views.bug_view import BugListCreateView


def test_system_checks_pass():
    call_command("check")


def test_drf_resolves_bearer_authentication():
    assert api_settings.DEFAULT_AUTHENTICATION_CLASSES == [BearerTokenAuthentication]


def test_urlconf_loads():
    assert resolve("/bugs").func.view_class is BugListCreateView


@pytest.mark.django_db
def test_schema_is_served(api):
    resp = api().get("/schema")
    assert resp.status_code == 200
