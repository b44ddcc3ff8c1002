from fastapi.testclient import TestClient

from Auth.sessions import SessionStore, sign, unsign
from conftest import ADMIN, login


def test_login_sets_cookie_and_hides_password(client):
    response = client.post("/api/auth/login", json=ADMIN)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["user"]["username"] == "admin"
    assert "password" not in body["user"]
    assert "hashedPassword" not in body["user"]

    cookie = response.headers["set-cookie"]
    assert cookie.startswith("portfolio.sid=")
    assert "HttpOnly" in cookie
    assert "samesite=lax" in cookie.lower()


def test_unknown_user_and_wrong_password_look_the_same(client):
    unknown = client.post("/api/auth/login", json={"username": "nobody", "password": "admin123"})
    wrong = client.post("/api/auth/login", json={"username": "admin", "password": "wrong"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json()
    assert "user" not in unknown.json()
    assert "set-cookie" not in unknown.headers


def test_username_is_case_sensitive(client):
    response = client.post("/api/auth/login", json={"username": "Admin", "password": "admin123"})
    assert response.status_code == 401


def test_login_with_missing_fields_is_a_validation_error(client):
    response = client.post("/api/auth/login", json={})
    assert response.status_code == 400
    assert "username" in response.json()["error"]


def test_current_user_requires_session(client):
    response = client.get("/api/auth/user")
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


def test_current_user_after_login(admin):
    response = admin.get("/api/auth/user")
    assert response.status_code == 200
    assert response.json()["username"] == "admin"


def test_logout_destroys_server_session(app, admin):
    assert len(app.state.sessions) == 1

    response = admin.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"message": "Logout successful"}
    assert len(app.state.sessions) == 0
    assert admin.get("/api/auth/user").status_code == 401


def test_logout_is_idempotent(client, admin):
    assert client.post("/api/auth/logout").status_code == 200
    assert admin.post("/api/auth/logout").status_code == 200
    assert admin.post("/api/auth/logout").status_code == 200


def test_stale_cookie_is_rejected(client):
    response = client.get("/api/auth/user", headers={"Cookie": "portfolio.sid=not-a-real-session"})
    assert response.status_code == 401
    assert response.json() == {"error": "Unauthorized"}


def test_relogin_replaces_session(app, admin):
    login(admin)
    assert len(app.state.sessions) == 1
    assert admin.get("/api/auth/user").status_code == 200


def test_failed_logins_are_rate_limited(make_app):
    c = TestClient(make_app(login_rate_limit_max=2))
    for _ in range(2):
        assert c.post("/api/auth/login", json={"username": "admin", "password": "bad"}).status_code == 401

    response = c.post("/api/auth/login", json=ADMIN)
    assert response.status_code == 429
    assert "Too many login attempts" in response.json()["error"]


def test_successful_logins_do_not_count(make_app):
    c = TestClient(make_app(login_rate_limit_max=1))
    for _ in range(3):
        assert c.post("/api/auth/login", json=ADMIN).status_code == 200


def test_session_store_expiry():
    now = [1000.0]
    store = SessionStore(max_age=10, clock=lambda: now[0])
    record = store.create("user-1")

    assert store.get(record.session_id).user_id == "user-1"
    now[0] += 11
    assert store.get(record.session_id) is None
    assert len(store) == 0


def test_session_store_destroy_unknown_is_noop():
    store = SessionStore(max_age=10)
    store.destroy("missing")
    store.destroy(None)
    assert len(store) == 0


def test_session_cookie_is_signed(make_app):
    c = TestClient(make_app(session_secret="a" * 40))
    login(c)
    value = c.cookies.get("portfolio.sid")
    session_id, _, signature = value.rpartition(".")
    assert session_id and signature

    bare = TestClient(c.app)
    assert bare.get("/api/auth/user", headers={"Cookie": f"portfolio.sid={session_id}"}).status_code == 401
    forged = f"portfolio.sid={session_id}.{'0' * len(signature)}"
    assert bare.get("/api/auth/user", headers={"Cookie": forged}).status_code == 401
    assert bare.get("/api/auth/user", headers={"Cookie": f"portfolio.sid={value}"}).status_code == 200


def test_cookie_signed_with_another_secret_is_rejected(make_app):
    first = TestClient(make_app(session_secret="a" * 40))
    login(first)
    other_app = make_app(session_secret="b" * 40)
    other_app.state.sessions = first.app.state.sessions

    response = TestClient(other_app).get(
        "/api/auth/user", headers={"Cookie": f"portfolio.sid={first.cookies.get('portfolio.sid')}"}
    )
    assert response.status_code == 401


def test_sign_round_trip():
    value = sign("abc", "secret")
    assert unsign(value, "secret") == "abc"
    assert unsign(value, "other") is None
    assert unsign("abc", "secret") is None
    assert unsign(None, "secret") is None
