async def _queue(client, admin_email="mod@example.org"):
    resp = await client.get("/validation-queue", params={"adminEmail": admin_email})
    assert resp.status_code == 200
    return resp.json()


async def test_adding_twice_keeps_one_entry(client, make_submission):
    await make_submission("s1")

    first = await client.post("/validation-queue", json={"submissionId": "s1", "adminEmail": "mod@example.org"})
    second = await client.post("/validation-queue", json={"submissionId": "s1", "adminEmail": "mod@example.org"})

    assert first.json()["outcome"] == "queued"
    assert second.status_code == 200
    assert second.json()["outcome"] == "already_queued"
    entries = await _queue(client)
    assert len(entries) == 1
    assert entries[0]["submission"]["id"] == "s1"
    assert entries[0]["status"] == "pending"


async def test_same_submission_for_two_admins(client, make_submission):
    await make_submission("s1")
    await client.post("/validation-queue", json={"submissionId": "s1", "adminEmail": "a@example.org"})
    await client.post("/validation-queue", json={"submissionId": "s1", "adminEmail": "b@example.org"})

    assert len(await _queue(client, "a@example.org")) == 1
    assert len(await _queue(client, "b@example.org")) == 1


async def test_bulk_add_reports_each_item(client, make_submission):
    await make_submission("s1")
    await make_submission("s2")
    await client.post("/validation-queue", json={"submissionId": "s2", "adminEmail": "mod@example.org"})

    resp = await client.post("/validation-queue", json={
        "submissionIds": ["s1", "missing", "s2"], "adminEmail": "mod@example.org",
    })
    assert resp.status_code == 200
    outcomes = {i["submission_id"]: i["outcome"] for i in resp.json()["items"]}
    assert outcomes == {"s1": "queued", "missing": "not_found", "s2": "already_queued"}
    assert resp.json()["count"] == 2

    entries = await _queue(client)
    assert [e["submission_id"] for e in entries] == ["s2", "s1"]


async def test_bulk_add_new_then_already_queued_returns_every_entry(client, make_submission):
    await make_submission("a")
    await make_submission("b")
    await client.post("/validation-queue", json={"submissionId": "b", "adminEmail": "mod@example.org"})

    resp = await client.post("/validation-queue", json={"submissionIds": ["a", "b"], "adminEmail": "mod@example.org"})
    assert resp.status_code == 200
    items = resp.json()["items"]
    assert [(i["submission_id"], i["outcome"]) for i in items] == [("a", "queued"), ("b", "already_queued")]
    assert [i["item"]["status"] for i in items] == ["pending", "pending"]
    assert sorted(e["submission_id"] for e in await _queue(client)) == ["a", "b"]


async def test_single_add_of_unknown_submission(client):
    resp = await client.post("/validation-queue", json={"submissionId": "ghost", "adminEmail": "mod@example.org"})
    assert resp.status_code == 404


async def test_add_requires_admin_email_and_ids(client):
    resp = await client.post("/validation-queue", json={"submissionId": "s1"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "adminEmail is required"

    resp = await client.post("/validation-queue", json={"adminEmail": "mod@example.org"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "submissionId or submissionIds is required"


async def test_remove_single(client, make_submission):
    await make_submission("s1")
    await client.post("/validation-queue", json={"submissionId": "s1", "adminEmail": "mod@example.org"})

    params = {"submissionId": "s1", "adminEmail": "mod@example.org"}
    assert (await client.delete("/validation-queue", params=params)).json() == {"success": True}
    assert (await client.delete("/validation-queue", params=params)).json() == {"success": False}
    assert await _queue(client) == []


async def test_bulk_remove_is_partial(client, make_submission):
    for sid in ("s1", "s2"):
        await make_submission(sid)
        await client.post("/validation-queue", json={"submissionId": sid, "adminEmail": "mod@example.org"})

    resp = await client.request(
        "DELETE",
        "/validation-queue",
        params={"adminEmail": "mod@example.org"},
        json={"submissionIds": ["s1", "never-queued"]},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 1
    assert {i["submission_id"]: i["removed"] for i in body["items"]} == {"s1": True, "never-queued": False}
    assert [e["submission_id"] for e in await _queue(client)] == ["s2"]


async def test_closed_entries_leave_the_queue_and_readding_reopens(client, make_submission):
    await make_submission("s1")
    await client.post("/validation-queue", json={"submissionId": "s1", "adminEmail": "mod@example.org"})

    resp = await client.patch("/validation-queue", json={
        "submissionId": "s1", "adminEmail": "mod@example.org", "status": "completed",
    })
    assert resp.status_code == 200
    assert resp.json()["status"] == "completed"
    assert await _queue(client) == []

    await client.post("/validation-queue", json={"submissionId": "s1", "adminEmail": "mod@example.org"})
    entries = await _queue(client)
    assert len(entries) == 1
    assert entries[0]["status"] == "pending"


async def test_update_status_of_unknown_entry(client):
    resp = await client.patch("/validation-queue", json={
        "submissionId": "s1", "adminEmail": "mod@example.org", "status": "in_progress",
    })
    assert resp.status_code == 404
