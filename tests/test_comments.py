import pytest


async def _comment(client, submission_id="s1", text="Looks good", author="owner@example.org", author_type="user", parent=None):
    payload = {"comment_text": text, "author_email": author, "author_type": author_type}
    if parent is not None:
        payload["parent_comment_id"] = parent
    resp = await client.post(f"/submissions/{submission_id}/comments", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.mark.parametrize("payload, message", [
    ({"comment_text": "   ", "author_email": "a@example.org", "author_type": "user"}, "Comment text is required"),
    ({"comment_text": "hi", "author_type": "user"}, "Author email is required"),
    ({"comment_text": "hi", "author_email": "a@example.org", "author_type": "robot"},
     'Author type must be either "user" or "admin"'),
])
async def test_create_validation(client, make_submission, payload, message):
    await make_submission("s1")
    resp = await client.post("/submissions/s1/comments", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"error": message}


async def test_comment_on_unknown_submission(client):
    resp = await client.post("/submissions/ghost/comments", json={
        "comment_text": "hi", "author_email": "a@example.org", "author_type": "user",
    })
    assert resp.status_code == 404


async def test_thread_in_insertion_order(client, make_submission):
    await make_submission("s1")
    root = await _comment(client, text="first")
    reply = await _comment(client, text="second", author="mod@example.org", author_type="admin", parent=root["id"])

    resp = await client.get("/submissions/s1/comments")
    assert [c["comment_text"] for c in resp.json()] == ["first", "second"]
    assert reply["parent_comment_id"] == root["id"]
    assert (await client.get("/submissions/s1/comments/count")).json() == {"count": 2}


async def test_parent_must_belong_to_same_submission(client, make_submission):
    await make_submission("s1")
    await make_submission("s2")
    foreign = await _comment(client, submission_id="s2")

    resp = await client.post("/submissions/s1/comments", json={
        "comment_text": "reply", "author_email": "a@example.org", "author_type": "user",
        "parent_comment_id": foreign["id"],
    })
    assert resp.status_code == 400

    resp = await client.post("/submissions/s1/comments", json={
        "comment_text": "reply", "author_email": "a@example.org", "author_type": "user",
        "parent_comment_id": 9999,
    })
    assert resp.status_code == 404


async def test_author_can_update(client, make_submission):
    await make_submission("s1")
    comment = await _comment(client)

    resp = await client.put("/submissions/s1/comments", json={
        "comment_id": comment["id"], "comment_text": "Edited", "author_email": "owner@example.org",
    })
    assert resp.status_code == 200
    assert resp.json()["comment_text"] == "Edited"


async def test_non_author_update_is_not_found_and_does_not_mutate(client, make_submission):
    await make_submission("s1")
    comment = await _comment(client, text="first draft")

    resp = await client.put("/submissions/s1/comments", json={
        "comment_id": comment["id"], "comment_text": "hijacked", "author_email": "intruder@example.org",
    })
    assert resp.status_code == 404
    assert resp.json() == {"error": "Comment not found or unauthorized"}
    assert (await client.get("/submissions/s1/comments")).json()[0]["comment_text"] == "first draft"


async def test_non_author_delete_is_not_found(client, make_submission):
    await make_submission("s1")
    comment = await _comment(client)

    resp = await client.delete("/submissions/s1/comments", params={
        "commentId": comment["id"], "authorEmail": "intruder@example.org",
    })
    assert resp.status_code == 404
    assert len((await client.get("/submissions/s1/comments")).json()) == 1


async def test_is_admin_flag_needs_a_real_admin(client, make_submission, make_admin):
    await make_admin("mod@example.org")
    await make_submission("s1")
    comment = await _comment(client)

    spoofed = await client.delete("/submissions/s1/comments", params={
        "commentId": comment["id"], "authorEmail": "intruder@example.org", "isAdmin": "true",
    })
    assert spoofed.status_code == 404

    resp = await client.delete("/submissions/s1/comments", params={
        "commentId": comment["id"], "authorEmail": "mod@example.org", "isAdmin": "true",
    })
    assert resp.status_code == 200
    assert (await client.get("/submissions/s1/comments")).json() == []


async def test_deleting_parent_removes_replies(client, make_submission):
    await make_submission("s1")
    root = await _comment(client)
    child = await _comment(client, text="reply", author="mod@example.org", author_type="admin", parent=root["id"])
    await _comment(client, text="nested", parent=child["id"])
    await _comment(client, text="unrelated")

    resp = await client.delete("/submissions/s1/comments", params={
        "commentId": root["id"], "authorEmail": "owner@example.org",
    })
    assert resp.status_code == 200
    assert [c["comment_text"] for c in (await client.get("/submissions/s1/comments")).json()] == ["unrelated"]
