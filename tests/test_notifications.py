import pytest

from community_hub.notifications.services import build_status_notification


async def _notify(client, user="owner@example.org", title="Hello", type_="info"):
    resp = await client.post("/notifications", json={
        "user_email": user, "type": type_, "title": title, "message": f"{title} message",
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.parametrize("status, kind, title", [
    ("validated", "success", "Submission Validated"),
    ("successful", "success", "Submission Validated"),
    ("rejected", "error", "Submission Rejected"),
    ("failed", "error", "Submission Rejected"),
    ("pending", "warning", "Validation Pending"),
    ("processing", "info", "Submission Updated"),
])
def test_status_notification_kinds(status, kind, title):
    n = build_status_notification("owner@example.org", "s1", "photo.jpg", status)
    assert n["type"] == kind
    assert n["title"] == title
    assert n["user_email"] == "owner@example.org"
    assert n["action_url"] == "/dashboard/submissions?submissionId=s1"


def test_rejection_message_carries_reason():
    with_reason = build_status_notification("o@example.org", "s1", "photo.jpg", "rejected", "duplicate")
    without = build_status_notification("o@example.org", "s1", "photo.jpg", "rejected")
    assert with_reason["message"] == 'Your submission "photo.jpg" was rejected: duplicate'
    assert without["message"] == 'Your submission "photo.jpg" was rejected. Please review and resubmit.'


async def test_create_and_list(client):
    created = await _notify(client, title="First")
    assert created["id"].startswith("notif_")
    assert created["read"] is False
    await _notify(client, user="other@example.org")

    inbox = (await client.get("/notifications", params={"userEmail": "owner@example.org"})).json()
    assert [n["title"] for n in inbox] == ["First"]


async def test_create_validates_type(client):
    resp = await client.post("/notifications", json={
        "user_email": "owner@example.org", "type": "fatal", "title": "t", "message": "m",
    })
    assert resp.status_code == 400


async def test_unread_count_and_mark_read(client):
    first = await _notify(client)
    await _notify(client, title="Second")

    count = await client.get("/notifications", params={"userEmail": "owner@example.org", "countOnly": "true"})
    assert count.json() == {"count": 2}

    resp = await client.patch("/notifications", json={"notificationId": first["id"], "userEmail": "owner@example.org"})
    assert resp.status_code == 200
    assert resp.json()["notification"]["read"] is True

    count = await client.get("/notifications", params={"userEmail": "owner@example.org", "countOnly": "true"})
    assert count.json() == {"count": 1}


async def test_foreign_mark_read_is_not_found(client):
    n = await _notify(client)

    resp = await client.patch("/notifications", json={"notificationId": n["id"], "userEmail": "intruder@example.org"})
    assert resp.status_code == 404

    count = await client.get("/notifications", params={"userEmail": "owner@example.org", "countOnly": "true"})
    assert count.json() == {"count": 1}


async def test_mark_all_read(client):
    await _notify(client)
    await _notify(client)
    await _notify(client, user="other@example.org")

    resp = await client.patch("/notifications", json={"userEmail": "owner@example.org", "markAll": True})
    assert resp.json()["count"] == 2

    other = await client.get("/notifications", params={"userEmail": "other@example.org", "countOnly": "true"})
    assert other.json() == {"count": 1}


async def test_patch_without_id_or_mark_all(client):
    resp = await client.patch("/notifications", json={"userEmail": "owner@example.org"})
    assert resp.status_code == 400


async def test_delete_is_scoped_to_owner(client):
    n = await _notify(client)

    foreign = await client.delete("/notifications", params={"notificationId": n["id"], "userEmail": "intruder@example.org"})
    assert foreign.status_code == 404

    own = await client.delete("/notifications", params={"notificationId": n["id"], "userEmail": "owner@example.org"})
    assert own.json() == {"success": True}
    assert (await client.get("/notifications", params={"userEmail": "owner@example.org"})).json() == []


async def test_delete_all(client):
    await _notify(client)
    await _notify(client)
    await _notify(client, user="other@example.org")

    resp = await client.delete("/notifications", params={"userEmail": "owner@example.org", "deleteAll": "true"})
    assert resp.json()["count"] == 2
    assert len((await client.get("/notifications", params={"userEmail": "other@example.org"})).json()) == 1
