import pytest
from django.core.files.uploadedfile import SimpleUploadedFile

from tracker.models import Bug


@pytest.fixture
def two_projects(make_project, qa, other_qa, dev1, dev2):
    mine = make_project("Mine", qa_users=[qa], developers=[dev1, dev2])
    theirs = make_project("Theirs", qa_users=[other_qa], developers=[dev2])
    return mine, theirs


@pytest.mark.django_db
def test_create_bug_via_api(api, qa, dev1, project):
    resp = api(qa).post("/bugs", {
        "title": "  Login button dead ", "type": "bug", "projectId": project.id,
        "deadline": "",
    }, format="json")
    assert resp.status_code == 201, resp.content
    data = resp.json()["data"]
    assert data["title"] == "Login button dead"
    assert data["type"] == "bug"
    assert data["status"] == "new"
    assert data["assignedTo"]["id"] == dev1.id
    assert data["projectId"] == {"id": project.id, "name": "Apollo"}
    assert data["deadline"] is None


@pytest.mark.django_db
def test_create_bug_validation(api, qa, project):
    client = api(qa)
    resp = client.post("/bugs", {"title": "x", "type": "story", "projectId": project.id}, format="json")
    assert resp.status_code == 400
    resp = client.post("/bugs", {"type": "bug", "projectId": project.id}, format="json")
    assert resp.status_code == 400
    assert "title" in resp.json()["errors"]


@pytest.mark.django_db
def test_developer_cannot_create(api, dev1, project):
    resp = api(dev1).post("/bugs", {"title": "x", "type": "bug", "projectId": project.id}, format="json")
    assert resp.status_code == 403


@pytest.mark.django_db
def test_screenshot_upload(api, qa, project):
    image = SimpleUploadedFile("shot.png", b"\x89PNG fake", content_type="image/png")
    resp = api(qa).post("/bugs", {
        "title": "With picture", "type": "feature", "projectId": project.id, "screenshot": image,
    }, format="multipart")
    assert resp.status_code == 201, resp.content
    assert resp.json()["data"]["screenshot"]["contentType"] == "image/png"

    text = SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain")
    resp = api(qa).post("/bugs", {
        "title": "With text", "type": "bug", "projectId": project.id, "screenshot": text,
    }, format="multipart")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Only image files are allowed"
    assert not Bug.objects.filter(title="With text").exists()


@pytest.mark.django_db
def test_list_is_filtered_by_role(api, manager, qa, dev1, dev2, two_projects, make_bug):
    mine, theirs = two_projects
    b_mine_dev1 = make_bug(mine, dev1)
    b_mine_dev2 = make_bug(mine, dev2)
    b_theirs_dev2 = make_bug(theirs, dev2)

    def ids(user, query=""):
        resp = api(user).get(f"/bugs{query}")
        assert resp.status_code == 200
        return {b["id"] for b in resp.json()["data"]}

    assert ids(manager) == {b_mine_dev1.id, b_mine_dev2.id, b_theirs_dev2.id}
    assert ids(manager, f"?projectId={theirs.id}") == {b_theirs_dev2.id}
    assert ids(qa) == {b_mine_dev1.id, b_mine_dev2.id}
    assert ids(dev1) == {b_mine_dev1.id}
    assert ids(dev2) == {b_mine_dev2.id, b_theirs_dev2.id}
    assert ids(dev2, f"?projectId={mine.id}") == {b_mine_dev2.id}


@pytest.mark.django_db
def test_list_with_foreign_or_missing_project(api, qa, two_projects):
    _, theirs = two_projects
    assert api(qa).get(f"/bugs?projectId={theirs.id}").status_code == 403
    assert api(qa).get("/bugs?projectId=424242").status_code == 404


@pytest.mark.django_db
def test_read_one(api, dev1, dev2, other_qa, project, make_bug):
    bug = make_bug(project, dev1)
    assert api(dev1).get(f"/bugs/{bug.id}").status_code == 200
    assert api(dev2).get(f"/bugs/{bug.id}").status_code == 403
    assert api(other_qa).get(f"/bugs/{bug.id}").status_code == 403
    assert api(dev1).get("/bugs/424242").status_code == 404


@pytest.mark.django_db
def test_developer_title_change_is_denied(api, dev1, project, make_bug):
    bug = make_bug(project, dev1, title="Keep me")
    resp = api(dev1).patch(f"/bugs/{bug.id}", {"title": "Changed", "status": "started"}, format="json")
    assert resp.status_code == 403
    bug.refresh_from_db()
    assert bug.title == "Keep me"
    assert bug.status == "new"

    resp = api(dev1).patch(f"/bugs/{bug.id}", {"status": "started", "description": "on it"}, format="json")
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "started"


@pytest.mark.django_db
def test_status_endpoint(api, dev1, project, make_bug):
    bug = make_bug(project, dev1)
    client = api(dev1)
    assert client.patch(f"/bugs/{bug.id}/status", {"status": "done"}, format="json").status_code == 400
    resp = client.patch(f"/bugs/{bug.id}/status", {"status": "resolved"}, format="json")
    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == "resolved"


@pytest.mark.django_db
def test_reassign_endpoint(api, qa, dev1, dev2, outsider_dev, project, make_bug):
    bug = make_bug(project, dev1)
    client = api(qa)
    resp = client.post(f"/bugs/{bug.id}/reassign", {"assignedTo": outsider_dev.id}, format="json")
    assert resp.status_code == 400
    resp = client.post(f"/bugs/{bug.id}/reassign", {"assignedTo": dev2.id}, format="json")
    assert resp.status_code == 200
    assert resp.json()["data"]["assignedTo"]["id"] == dev2.id


@pytest.mark.django_db
def test_delete_bug(api, qa, dev1, project, make_bug):
    bug = make_bug(project, dev1)
    assert api(dev1).delete(f"/bugs/{bug.id}").status_code == 403
    resp = api(qa).delete(f"/bugs/{bug.id}")
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert not Bug.objects.filter(id=bug.id).exists()


@pytest.mark.django_db
def test_duplicate_title_is_409(api, manager, dev1, project, make_bug):
    make_bug(project, dev1, title="Taken")
    resp = api(manager).post("/bugs", {"title": "Taken", "type": "bug", "projectId": project.id}, format="json")
    assert resp.status_code == 409
