from datetime import timedelta

from siteadmin.auth.passwords import verify_password
from siteadmin.auth.sessions import SessionManager
from siteadmin.core.utils import utcnow
from siteadmin.infra.accounts_repo import get_account
from siteadmin.models import AdminSession


def _session_id(set_cookie: str) -> str:
    first = set_cookie.split(";", 1)[0]
    name, _, value = first.partition("=")
    assert name == "session"
    return value


def test_login_happy_path_sets_session_cookie(client, db, admin):
    r = client.post("/api/admin/login", json={"email": " A@X.com ", "password": "secret1"})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["user"] == {"id": admin.id, "email": "a@x.com", "name": "Ada Admin", "role": "admin"}

    cookie = r.headers["set-cookie"]
    attrs = cookie.lower()
    assert "httponly" in attrs
    assert "secure" in attrs
    assert "samesite=strict" in attrs
    assert "path=/" in attrs
    assert "max-age=604800" in attrs

    session_id = _session_id(cookie)
    assert SessionManager(db).validate(session_id).account_id == admin.id

    db.expire_all()
    assert get_account(db, admin.id).last_login is not None


def test_login_wrong_password(client, admin):
    r = client.post("/api/admin/login", json={"email": "a@x.com", "password": "wrong"})
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid credentials"}
    assert "set-cookie" not in r.headers


def test_login_unknown_email_matches_wrong_password_body(client, admin):
    wrong_pw = client.post("/api/admin/login", json={"email": "a@x.com", "password": "wrong"})
    unknown = client.post("/api/admin/login", json={"email": "nobody@x.com", "password": "anything"})
    assert unknown.status_code == 401
    assert unknown.content == wrong_pw.content


def test_login_missing_fields(client):
    r = client.post("/api/admin/login", json={"email": "a@x.com"})
    assert r.status_code == 400
    assert "error" in r.json()


def test_login_malformed_json(client):
    r = client.post("/api/admin/login", content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert "error" in r.json()


def test_verify_returns_profile(client, admin, auth_headers):
    r = client.get("/api/admin/verify", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {
        "authenticated": True,
        "user": {"id": admin.id, "email": "a@x.com", "name": "Ada Admin", "role": "admin"},
    }


def test_verify_without_cookie(client):
    r = client.get("/api/admin/verify")
    assert r.status_code == 401
    assert r.json() == {"authenticated": False, "error": "No session"}


def test_verify_with_expired_session(client, db, admin):
    db.add(AdminSession(id="stale", user_id=admin.id, expires_at=utcnow() - timedelta(seconds=1)))
    db.commit()

    r = client.get("/api/admin/verify", headers={"Cookie": "session=stale"})
    assert r.status_code == 401
    assert r.json()["authenticated"] is False


def test_logout_destroys_session_and_clears_cookie(client, db, auth_headers):
    session_id = auth_headers["Cookie"].split("=", 1)[1]
    r = client.post("/api/admin/logout", headers=auth_headers)
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Logged out successfully"}
    assert "max-age=0" in r.headers["set-cookie"].lower()

    assert not SessionManager(db).validate(session_id)
    assert client.get("/api/admin/verify", headers=auth_headers).status_code == 401


def test_logout_without_cookie_still_succeeds(client):
    r = client.post("/api/admin/logout")
    assert r.status_code == 200
    assert r.json()["success"] is True
    assert "max-age=0" in r.headers["set-cookie"].lower()


def test_change_password(client, db, admin, auth_headers):
    r = client.post(
        "/api/admin/change-password",
        json={"currentPassword": "secret1", "newPassword": "secret2"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json() == {"success": True}

    db.expire_all()
    stored = get_account(db, admin.id).password_hash
    assert verify_password("secret2", stored)
    assert not verify_password("secret1", stored)

    login = client.post("/api/admin/login", json={"email": "a@x.com", "password": "secret2"})
    assert login.status_code == 200


def test_change_password_rejects_wrong_current(client, db, admin, auth_headers):
    r = client.post(
        "/api/admin/change-password",
        json={"currentPassword": "nope", "newPassword": "secret2"},
        headers=auth_headers,
    )
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid credentials"}

    db.expire_all()
    assert verify_password("secret1", get_account(db, admin.id).password_hash)


def test_change_password_requires_both_fields(client, auth_headers):
    r = client.post("/api/admin/change-password", json={"currentPassword": "secret1"}, headers=auth_headers)
    assert r.status_code == 400


def test_change_password_requires_session(client, admin):
    r = client.post("/api/admin/change-password", json={"currentPassword": "secret1", "newPassword": "x"})
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized"}


def test_login_with_lone_surrogate_password_fails_closed(client, admin):
    r = client.post(
        "/api/admin/login",
        content=b'{"email": "a@x.com", "password": "\\ud800"}',
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 401
    assert r.json() == {"error": "Invalid credentials"}
