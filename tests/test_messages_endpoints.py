import pytest

from siteadmin.models import ContactMessage


@pytest.fixture()
def messages(db):
    rows = []
    for i, status in enumerate(["unread", "unread", "read", "archived"]):
        row = ContactMessage(
            first_name=f"F{i}",
            last_name="L",
            email=f"p{i}@x.com",
            inquiry_type="general",
            message=f"hello {i}",
            status=status,
        )
        db.add(row)
        db.commit()
        rows.append(row)
    return rows


@pytest.mark.parametrize(
    "method,path",
    [
        ("get", "/api/admin/messages"),
        ("get", "/api/admin/messages/1"),
        ("patch", "/api/admin/messages/1"),
        ("get", "/api/admin/settings?key=x"),
        ("post", "/api/admin/settings"),
    ],
)
def test_protected_endpoints_reject_without_session(client, method, path):
    r = getattr(client, method)(path, headers={"Cookie": "session=bogus"})
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized"}


def test_guard_runs_before_body_is_parsed(client):
    r = client.patch(
        "/api/admin/messages/1",
        content=b"{definitely not json",
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 401


def test_list_messages_with_pagination_and_stats(client, auth_headers, messages):
    r = client.get("/api/admin/messages?limit=2", headers=auth_headers)
    assert r.status_code == 200
    body = r.json()
    assert len(body["messages"]) == 2
    assert body["pagination"] == {"total": 4, "limit": 2, "offset": 0, "hasMore": True}
    assert body["stats"] == {"unread": 2}
    # newest first
    assert body["messages"][0]["id"] == messages[-1].id


def test_list_messages_filters_by_status_and_caps_limit(client, auth_headers, messages):
    r = client.get("/api/admin/messages?status=unread&limit=500", headers=auth_headers)
    body = r.json()
    assert body["pagination"]["limit"] == 100
    assert body["pagination"]["total"] == 2
    assert {m["status"] for m in body["messages"]} == {"unread"}


def test_opening_unread_message_marks_it_read(client, db, auth_headers, messages):
    target = messages[0]
    r = client.get(f"/api/admin/messages/{target.id}", headers=auth_headers)
    assert r.status_code == 200
    msg = r.json()["message"]
    assert msg["status"] == "read"
    assert msg["read_at"] is not None

    db.expire_all()
    assert db.get(ContactMessage, target.id).status == "read"


def test_message_not_found(client, auth_headers):
    r = client.get("/api/admin/messages/9999", headers=auth_headers)
    assert r.status_code == 404
    assert r.json() == {"error": "Message not found"}


def test_patch_status(client, auth_headers, messages):
    r = client.patch(f"/api/admin/messages/{messages[0].id}", json={"status": "archived"}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["success"] is True
    assert r.json()["message"]["status"] == "archived"


def test_patch_rejects_unknown_status(client, auth_headers, messages):
    r = client.patch(f"/api/admin/messages/{messages[0].id}", json={"status": "spam"}, headers=auth_headers)
    assert r.status_code == 400
    assert "Invalid status" in r.json()["error"]


def test_patch_missing_message(client, auth_headers):
    r = client.patch("/api/admin/messages/9999", json={"status": "read"}, headers=auth_headers)
    assert r.status_code == 404


def test_bad_path_parameter_is_not_reported_as_body_error(client, auth_headers):
    r = client.get("/api/admin/messages/abc", headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Invalid request", "fields": ["message_id"]}
