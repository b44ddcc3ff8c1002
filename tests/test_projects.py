from datetime import timezone

import pytest
from fastapi.testclient import TestClient

from Portfolio.models import Project, utcnow
from Portfolio.repository import ProjectRepository

NEW_PROJECT = {
    "title": "3D Portfolio Website",
    "description": "An immersive 3D portfolio",
    "technologies": ["React", "Three.js", "TypeScript"],
    "githubUrl": "https://github.com/example/portfolio",
    "featured": True,
}


def create(admin, **overrides):
    response = admin.post("/api/projects", json={**NEW_PROJECT, **overrides})
    assert response.status_code == 201, response.text
    return response.json()


def test_list_is_public_and_empty(client):
    response = client.get("/api/projects")
    assert response.status_code == 200
    assert response.json() == []


def test_create_returns_camel_case_project(admin):
    project = create(admin)
    assert project["title"] == NEW_PROJECT["title"]
    assert project["technologies"] == NEW_PROJECT["technologies"]
    assert project["githubUrl"] == NEW_PROJECT["githubUrl"]
    assert project["liveUrl"] is None
    assert project["order"] == 0
    assert "createdAt" in project


def test_create_without_session_has_no_effect(client, admin):
    response = client.post("/api/projects", json=NEW_PROJECT)
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}
    assert admin.get("/api/projects").json() == []


def test_update_without_session_leaves_row_alone(client, admin):
    project = create(admin)
    response = client.put(f"/api/projects/{project['id']}", json={"title": "Hacked"})
    assert response.status_code == 401
    assert client.get(f"/api/projects/{project['id']}").json()["title"] == NEW_PROJECT["title"]


def test_delete_without_session_leaves_row_alone(client, admin):
    project = create(admin)
    assert client.delete(f"/api/projects/{project['id']}").status_code == 401
    assert client.get(f"/api/projects/{project['id']}").status_code == 200


def test_get_unknown_project(client):
    response = client.get("/api/projects/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Project not found"}


def test_technologies_must_not_be_empty(admin):
    response = admin.post("/api/projects", json={**NEW_PROJECT, "technologies": []})
    assert response.status_code == 400
    assert "At least one technology is required" in response.json()["error"]


def test_update_with_non_list_technologies(admin):
    project = create(admin)
    response = admin.put(f"/api/projects/{project['id']}", json={"technologies": "React"})
    assert response.status_code == 400
    assert "technologies" in response.json()["error"]
    assert "list" in response.json()["error"]


def test_partial_update(admin):
    project = create(admin)
    response = admin.put(
        f"/api/projects/{project['id']}",
        json={"title": "Renamed", "technologies": ["Vue", "Vite"]},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Renamed"
    assert body["technologies"] == ["Vue", "Vite"]
    assert body["description"] == NEW_PROJECT["description"]


def test_update_cannot_null_required_field(admin):
    project = create(admin)
    response = admin.put(f"/api/projects/{project['id']}", json={"title": None})
    assert response.status_code == 400


def test_update_unknown_project(admin):
    response = admin.put("/api/projects/missing", json={"title": "x"})
    assert response.status_code == 404


def test_invalid_github_url(admin):
    response = admin.post("/api/projects", json={**NEW_PROJECT, "githubUrl": "not a url"})
    assert response.status_code == 400
    assert "githubUrl" in response.json()["error"]


def test_blank_optional_urls_are_accepted(admin):
    project = create(admin, githubUrl="", liveUrl="", imageUrl="")
    assert project["githubUrl"] is None


def test_delete_closes_order_gap(admin):
    first = create(admin, title="one")
    second = create(admin, title="two")
    third = create(admin, title="three")

    assert admin.delete(f"/api/projects/{second['id']}").json() == {"message": "Project deleted successfully"}
    listed = admin.get("/api/projects").json()
    assert [(p["id"], p["order"]) for p in listed] == [(first["id"], 0), (third["id"], 1)]
    assert admin.delete(f"/api/projects/{second['id']}").status_code == 404


def test_reorder_projects(admin):
    ids = [create(admin, title=t)["id"] for t in ("a", "b", "c")]
    response = admin.post("/api/projects/reorder", json={"projects": [{"id": ids[2], "order": 0}]})
    assert response.status_code == 200
    listed = admin.get("/api/projects").json()
    assert [p["id"] for p in listed] == [ids[2], ids[0], ids[1]]
    assert [p["order"] for p in listed] == [0, 1, 2]


@pytest.mark.parametrize(
    "technologies",
    [["React"], ["Three.js", "React", "Three.js"], ["C++", "naïve \"quoted\"", ""]],
)
def test_technologies_round_trip_through_storage(db, technologies):
    repo = ProjectRepository(db)
    created = repo.create({"title": "t", "description": "d", "technologies": technologies})

    assert repo.get(created.id).technologies == technologies
    raw = db.get(Project, created.id)
    assert isinstance(raw.technologies, str)


@pytest.mark.parametrize("url", ["http://exa mple.com", "http://a b", "ftp://example.com/repo"])
def test_malformed_github_url_is_rejected(admin, url):
    response = admin.post("/api/projects", json={**NEW_PROJECT, "githubUrl": url})
    assert response.status_code == 400
    assert "githubUrl" in response.json()["error"]


def test_url_is_stored_as_sent(admin):
    project = create(admin, liveUrl="https://example.com/demo")
    assert project["liveUrl"] == "https://example.com/demo"


def test_stamps_are_timezone_aware(db):
    project = ProjectRepository(db).create({"title": "t", "description": "d", "technologies": ["Go"]})
    assert utcnow().tzinfo is timezone.utc
    assert project.created_at is not None


def test_storage_failure_is_a_generic_500(app, monkeypatch):
    def broken(self):
        raise RuntimeError("database disk image is malformed")

    monkeypatch.setattr(ProjectRepository, "list", broken)
    c = TestClient(app, raise_server_exceptions=False)

    response = c.get("/api/projects")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal Server Error"}
    assert "malformed" not in response.text
