import pytest


def add_skill(admin, name, category="Frontend", proficiency=80, **extra):
    response = admin.post(
        "/api/skills",
        json={"name": name, "category": category, "proficiency": proficiency, **extra},
    )
    assert response.status_code == 201, response.text
    return response.json()


def layout(client):
    """{category: [names in order]} and a check that each category is 0..n-1."""
    groups = {}
    for skill in client.get("/api/skills").json():
        groups.setdefault(skill["category"], []).append((skill["order"], skill["name"]))
    for members in groups.values():
        assert [order for order, _ in members] == list(range(len(members)))
    return {category: [name for _, name in members] for category, members in groups.items()}


def test_create_appends_within_category(admin):
    a = add_skill(admin, "React")
    b = add_skill(admin, "Node.js", category="Backend")
    c = add_skill(admin, "Vue")
    assert (a["order"], b["order"], c["order"]) == (0, 0, 1)


def test_create_at_position(admin):
    add_skill(admin, "React")
    add_skill(admin, "Vue")
    add_skill(admin, "Svelte", order=0)
    assert layout(admin)["Frontend"] == ["Svelte", "React", "Vue"]


def test_create_requires_session(client):
    response = client.post("/api/skills", json={"name": "Go", "category": "Backend", "proficiency": 50})
    assert response.status_code == 401
    assert client.get("/api/skills").json() == []


@pytest.mark.parametrize("proficiency", [0, 101, 150, 50.5, "80"])
def test_proficiency_must_be_integer_in_range(admin, proficiency):
    response = admin.post(
        "/api/skills",
        json={"name": "Go", "category": "Backend", "proficiency": proficiency},
    )
    assert response.status_code == 400
    assert "proficiency" in response.json()["error"]


def test_unknown_category_rejected(admin):
    response = admin.post("/api/skills", json={"name": "Swift", "category": "Mobile", "proficiency": 60})
    assert response.status_code == 400


def test_custom_category_label(admin):
    skill = add_skill(admin, "Figma", category="Other", customCategory="Design")
    assert skill["category"] == "Design"
    assert skill["order"] == 0


def test_reorder_moves_last_to_front(admin):
    skills = [add_skill(admin, name) for name in ("s0", "s1", "s2")]

    response = admin.post(
        "/api/skills/reorder",
        json={"skills": [{"id": skills[2]["id"], "category": "Frontend", "order": 0}]},
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Skill order updated"}
    orders = {s["name"]: s["order"] for s in admin.get("/api/skills").json()}
    assert orders == {"s2": 0, "s0": 1, "s1": 2}


def test_reorder_across_categories(admin):
    front = [add_skill(admin, name) for name in ("a", "b", "c")]
    for name in ("d", "e"):
        add_skill(admin, name, category="Backend")

    admin.post(
        "/api/skills/reorder",
        json={"skills": [{"id": front[1]["id"], "category": "Backend", "order": 1}]},
    )

    assert layout(admin) == {"Frontend": ["a", "c"], "Backend": ["d", "b", "e"]}


def test_reorder_rejects_empty_batch(admin):
    response = admin.post("/api/skills/reorder", json={"skills": []})
    assert response.status_code == 400


def test_reorder_rejects_unknown_id_without_writing(admin):
    skills = [add_skill(admin, name) for name in ("a", "b")]
    response = admin.post(
        "/api/skills/reorder",
        json={"skills": [
            {"id": skills[1]["id"], "category": "Frontend", "order": 0},
            {"id": "ghost", "category": "Frontend", "order": 1},
        ]},
    )
    assert response.status_code == 400
    assert layout(admin) == {"Frontend": ["a", "b"]}


def test_reorder_requires_session(client, admin):
    skill = add_skill(admin, "a")
    response = client.post(
        "/api/skills/reorder",
        json={"skills": [{"id": skill["id"], "category": "Backend", "order": 0}]},
    )
    assert response.status_code == 401
    assert layout(admin) == {"Frontend": ["a"]}


def test_changing_category_moves_to_end_of_new_category(admin):
    a = add_skill(admin, "a")
    add_skill(admin, "b")
    add_skill(admin, "x", category="Backend")

    response = admin.put(f"/api/skills/{a['id']}", json={"category": "Backend"})

    assert response.status_code == 200
    assert response.json()["order"] == 1
    assert layout(admin) == {"Frontend": ["b"], "Backend": ["x", "a"]}


def test_update_fields_keeps_position(admin):
    a = add_skill(admin, "a")
    add_skill(admin, "b")
    response = admin.put(f"/api/skills/{a['id']}", json={"proficiency": 99, "icon": "react"})
    assert response.json()["proficiency"] == 99
    assert response.json()["order"] == 0


def test_delete_closes_gap(admin):
    skills = [add_skill(admin, name) for name in ("a", "b", "c")]
    assert admin.delete(f"/api/skills/{skills[0]['id']}").status_code == 200
    assert layout(admin) == {"Frontend": ["b", "c"]}


def test_delete_unknown_skill(admin):
    response = admin.delete("/api/skills/missing")
    assert response.status_code == 404
    assert response.json() == {"error": "Skill not found"}


def test_custom_category_without_other_is_rejected(admin):
    skill = add_skill(admin, "Figma")
    response = admin.put(f"/api/skills/{skill['id']}", json={"customCategory": "Design"})
    assert response.status_code == 400
    assert "customCategory" in response.json()["error"]
    assert layout(admin) == {"Frontend": ["Figma"]}


def test_update_into_custom_category(admin):
    skill = add_skill(admin, "Figma")
    response = admin.put(f"/api/skills/{skill['id']}", json={"category": "Other", "customCategory": "Design"})
    assert response.status_code == 200
    assert response.json()["category"] == "Design"
