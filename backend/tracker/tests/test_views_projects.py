import json

import pytest


@pytest.mark.django_db
def test_create_project_via_api(api, manager, qa, dev1):
    resp = api(manager).post("/projects", {
        "name": "Hermes", "description": "mail",
        "qaAssigned": [qa.id], "developersAssigned": [dev1.id],
    }, format="json")
    assert resp.status_code == 201, resp.content
    data = resp.json()["data"]
    assert [u["id"] for u in data["qaAssigned"]] == [qa.id]
    assert data["developersAssigned"][0]["email"] == dev1.email
    assert data["createdBy"]["id"] == manager.id
    assert data["picture"] is None


@pytest.mark.django_db
def test_create_project_multipart_with_json_string_ids(api, manager, qa, dev1):
    resp = api(manager).post("/projects", {
        "name": "Iris",
        "qaAssigned": json.dumps([qa.id]),
        "developersAssigned": json.dumps([dev1.id]),
    }, format="multipart")
    assert resp.status_code == 201, resp.content
    assert [u["id"] for u in resp.json()["data"]["developersAssigned"]] == [dev1.id]


@pytest.mark.django_db
def test_create_project_multipart_with_comma_separated_ids(api, manager, qa, dev1, dev2):
    resp = api(manager).post("/projects", {
        "name": "Juno",
        "qaAssigned": str(qa.id),
        "developersAssigned": f"{dev2.id}, {dev1.id}",
    }, format="multipart")
    assert resp.status_code == 201, resp.content
    data = resp.json()["data"]
    assert [u["id"] for u in data["qaAssigned"]] == [qa.id]
    assert [u["id"] for u in data["developersAssigned"]] == [dev2.id, dev1.id]


@pytest.mark.django_db
def test_developers_before_qa_is_400(api, manager, dev1):
    resp = api(manager).post("/projects", {"name": "Nope", "developersAssigned": [dev1.id]}, format="json")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Developers cannot be assigned before QA team members"


@pytest.mark.django_db
def test_project_list_is_staff_only(api, manager, qa, project):
    assert api(manager).get("/projects").status_code == 200
    assert api(qa).get("/projects").status_code == 403


@pytest.mark.django_db
def test_assigned_projects(api, qa, other_qa, dev1, manager, project):
    for path in ("/projects/assigned-projects", "/assigned-projects"):
        resp = api(qa).get(path)
        assert resp.status_code == 200
        assert [p["id"] for p in resp.json()["data"]] == [project.id]

    assert api(dev1).get("/assigned-projects").json()["data"][0]["id"] == project.id
    assert api(other_qa).get("/assigned-projects").json()["data"] == []
    assert api(manager).get("/assigned-projects").status_code == 403


@pytest.mark.django_db
def test_read_one_project_open_to_any_user(api, outsider_dev, project):
    resp = api(outsider_dev).get(f"/projects/{project.id}")
    assert resp.status_code == 200
    assert api(outsider_dev).get("/projects/424242").status_code == 404


@pytest.mark.django_db
def test_assign_endpoints(api, manager, make_project, qa, dev1):
    bare = make_project("Bare")
    client = api(manager)

    resp = client.post(f"/projects/{bare.id}/assign-developers", {"developerIds": [dev1.id]}, format="json")
    assert resp.status_code == 400

    resp = client.post(f"/projects/{bare.id}/assign-qa", {"qaIds": []}, format="json")
    assert resp.status_code == 400

    resp = client.post(f"/projects/{bare.id}/assign-qa", {"qaIds": [qa.id]}, format="json")
    assert resp.status_code == 200
    resp = client.post(f"/projects/{bare.id}/assign-developers", {"developerIds": [dev1.id]}, format="json")
    assert resp.status_code == 200
    assert [u["id"] for u in resp.json()["data"]["developersAssigned"]] == [dev1.id]


@pytest.mark.django_db
def test_patch_and_delete_project(api, admin_user, project, dev1, make_bug):
    make_bug(project, dev1)
    client = api(admin_user)

    resp = client.patch(f"/projects/{project.id}", {"name": "Apollo 2"}, format="json")
    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "Apollo 2"

    resp = client.delete(f"/projects/{project.id}")
    assert resp.status_code == 200
    assert resp.json()["data"] == {"deletedBugs": 1}
