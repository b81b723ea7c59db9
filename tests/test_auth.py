"""Registration, login, logout and session handling"""

from datetime import datetime

from culturix.config import SESSION_COOKIE_NAME
from culturix.core.security import sign_session_token
from culturix.models.session import UserSession
from culturix.models.user import User
from tests.conftest import register_and_login


def test_register_returns_201_without_password(client):
    res = client.post("/api/register", json={"username": "alice", "password": "pw123"})
    assert res.status_code == 201
    body = res.json()
    assert body == {"message": "User registered successfully"}
    assert "pw123" not in res.text


def test_password_is_stored_hashed(client, db):
    client.post("/api/register", json={"username": "alice", "password": "pw123"})
    user = db.query(User).filter_by(username="alice").one()
    assert user.hashed_password != "pw123"
    assert user.hashed_password.startswith("$2")


def test_duplicate_registration_conflicts(client, db):
    first = client.post("/api/register", json={"username": "alice", "password": "pw123"})
    second = client.post("/api/register", json={"username": "alice", "password": "other"})

    assert first.status_code == 201
    assert second.status_code == 400
    assert second.json()["error"] == "Username already exists"
    assert db.query(User).filter_by(username="alice").count() == 1


def test_register_requires_both_fields(client, db):
    for payload in ({}, {"username": "alice"}, {"password": "pw"}, {"username": "", "password": "pw"}):
        res = client.post("/api/register", json=payload)
        assert res.status_code == 400, payload
        assert res.json()["error"] == "Username and password are required"
    assert db.query(User).count() == 0


def test_register_rejects_non_json_body(client):
    res = client.post("/api/register", content="not json", headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    assert "error" in res.json()


def test_login_sets_session_cookie(client):
    client.post("/api/register", json={"username": "alice", "password": "pw123"})
    res = client.post("/api/login", json={"username": "alice", "password": "pw123"})

    assert res.status_code == 200
    assert res.json() == {"message": "Login successful"}
    assert SESSION_COOKIE_NAME in res.cookies


def test_login_failures_are_indistinguishable(client):
    client.post("/api/register", json={"username": "alice", "password": "pw123"})

    wrong_password = client.post("/api/login", json={"username": "alice", "password": "nope"})
    unknown_user = client.post("/api/login", json={"username": "mallory", "password": "nope"})

    assert wrong_password.status_code == unknown_user.status_code == 400
    assert wrong_password.json() == unknown_user.json() == {"error": "Invalid username or password"}
    assert SESSION_COOKIE_NAME not in wrong_password.cookies


def test_login_requires_fields(client):
    res = client.post("/api/login", json={"username": "alice"})
    assert res.status_code == 400
    assert res.json()["error"] == "Username and password are required"


def test_current_user(client):
    assert client.get("/api/user").status_code == 401

    register_and_login(client, "alice")
    res = client.get("/api/user")
    assert res.status_code == 200
    assert res.json() == {"username": "alice"}


def test_logout_destroys_session(client, db):
    register_and_login(client, "alice")
    assert db.query(UserSession).count() == 1

    res = client.post("/api/logout")
    assert res.status_code == 200
    assert res.json() == {"message": "Logout successful"}
    assert db.query(UserSession).count() == 0
    assert client.get("/api/user").status_code == 401


def test_logout_twice_is_not_an_error(client):
    register_and_login(client, "alice")
    assert client.post("/api/logout").status_code == 200
    assert client.post("/api/logout").status_code == 200


def test_expired_session_is_rejected_and_removed(client, db):
    register_and_login(client, "alice")
    db.query(UserSession).update({UserSession.expires_at: datetime(2000, 1, 1)})
    db.commit()

    res = client.get("/api/user")
    assert res.status_code == 401
    db.expire_all()
    assert db.query(UserSession).count() == 0


def test_forged_cookie_is_rejected(make_client):
    client = make_client()
    client.cookies.set(SESSION_COOKIE_NAME, "not-a-signed-token")
    assert client.get("/api/user").status_code == 401


def test_unknown_session_token_is_rejected(make_client):
    client = make_client()
    client.cookies.set(SESSION_COOKIE_NAME, sign_session_token("no-such-session"))
    assert client.get("/api/user").status_code == 401


def test_login_again_replaces_previous_session(client, make_client, db):
    register_and_login(client, "alice")
    old_cookie = client.cookies.get(SESSION_COOKIE_NAME)

    for _ in range(2):
        res = client.post("/api/login", json={"username": "alice", "password": "pw123"})
        assert res.status_code == 200

    assert db.query(UserSession).count() == 1
    assert client.get("/api/user").status_code == 200

    replay = make_client()
    replay.cookies.set(SESSION_COOKIE_NAME, old_cookie)
    assert replay.get("/api/user").status_code == 401
