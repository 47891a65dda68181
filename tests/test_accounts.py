from sqlalchemy import select

from community_hub.admins.models import Admin, AdminAction
from community_hub.common.common import check_password, init_admin
from community_hub.common.db import AsyncSessionLocal
from community_hub.users.models import User


# ---------- admins ----------

async def test_admin_register_defaults_to_active_and_hashes_password(client, make_admin):
    admin = await make_admin("mod@example.org")

    assert admin["accountStatus"] == "active"
    assert admin["adminRole"] == "validator_admin"
    assert set(admin) == {"id", "email", "name", "adminRole", "country", "accountStatus"}

    async with AsyncSessionLocal() as session:
        row = (await session.execute(select(Admin).where(Admin.email == "mod@example.org"))).scalar_one()
    assert row.password != "secret-pass"
    assert check_password("secret-pass", row.password)


async def test_admin_register_duplicate_email(client, make_admin):
    await make_admin("mod@example.org")
    resp = await client.post("/admin/register", json={
        "name": "Again", "email": "mod@example.org", "password": "x", "adminRole": "validator_admin",
    })
    assert resp.status_code == 409


async def test_admin_register_requires_role(client):
    resp = await client.post("/admin/register", json={"name": "N", "email": "n@example.org", "password": "x"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "adminRole is required"


async def test_admin_login_outcomes(client, make_admin):
    await make_admin("mod@example.org")
    await make_admin("waiting@example.org", status="pending")

    ok = await client.post("/admin/login", json={"email": "mod@example.org", "password": "secret-pass"})
    assert ok.status_code == 200
    assert ok.json()["success"] is True
    assert ok.json()["admin"]["email"] == "mod@example.org"

    wrong = await client.post("/admin/login", json={"email": "mod@example.org", "password": "nope"})
    assert wrong.status_code == 401

    unknown = await client.post("/admin/login", json={"email": "ghost@example.org", "password": "nope"})
    assert unknown.status_code == 404

    pending = await client.post("/admin/login", json={"email": "waiting@example.org", "password": "secret-pass"})
    assert pending.status_code == 403

    missing = await client.post("/admin/login", json={"email": "mod@example.org"})
    assert missing.status_code == 400


async def test_super_admin_updates_and_suspends(client, make_admin):
    await make_admin("root@example.org", role="super_admin")
    target = await make_admin("mod@example.org")
    headers = {"x-admin-email": "root@example.org"}

    resp = await client.patch(f"/admin/admins/{target['id']}", json={"country": "UZ"}, headers=headers)
    assert resp.status_code == 200
    assert resp.json()["country"] == "UZ"

    resp = await client.delete(f"/admin/admins/{target['id']}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["admin"]["accountStatus"] == "suspended"

    login = await client.post("/admin/login", json={"email": "mod@example.org", "password": "secret-pass"})
    assert login.status_code == 403

    actions = (await client.get("/admin/actions", headers=headers)).json()
    assert {a["actionType"] for a in actions} == {"update_admin", "suspend_admin"}


async def test_validator_cannot_manage_admins(client, make_admin):
    await make_admin("mod@example.org")
    other = await make_admin("other@example.org")

    resp = await client.patch(
        f"/admin/admins/{other['id']}", json={"adminRole": "super_admin"}, headers={"x-admin-email": "mod@example.org"}
    )
    assert resp.status_code == 403

    async with AsyncSessionLocal() as session:
        assert await session.scalar(select(AdminAction.id)) is None


async def test_admin_list_requires_admin_header(client, make_admin):
    await make_admin("mod@example.org")

    assert (await client.get("/admin/admins")).status_code == 403
    resp = await client.get("/admin/admins", headers={"x-admin-email": "mod@example.org"})
    assert [a["email"] for a in resp.json()] == ["mod@example.org"]


async def test_init_admin_seeds_once():
    async with AsyncSessionLocal() as session:
        first = await init_admin(session, "root@example.org", "Root", "pw")
        second = await init_admin(session, "root@example.org", "Root", "pw")
    assert first.id == second.id
    assert first.admin_role == "super_admin"
    assert first.account_status == "active"


# ---------- volunteers ----------

async def test_user_register_and_login(client):
    resp = await client.post("/users/register", json={"email": "vol@example.org", "name": "Vol", "password": "pw1"})
    assert resp.status_code == 201
    assert resp.json()["user"]["email"] == "vol@example.org"

    ok = await client.post("/users/login", json={"email": "vol@example.org", "password": "pw1"})
    assert ok.status_code == 200
    assert ok.json()["success"] is True

    assert (await client.post("/users/login", json={"email": "vol@example.org", "password": "bad"})).status_code == 401
    assert (await client.post("/users/login", json={"email": "nobody@example.org", "password": "pw"})).status_code == 404


async def test_user_register_duplicate(client):
    await client.post("/users/register", json={"email": "vol@example.org", "password": "pw1"})
    resp = await client.post("/users/register", json={"email": "vol@example.org", "password": "pw2"})
    assert resp.status_code == 409


async def test_register_completes_row_created_by_upload(client, make_submission):
    await make_submission("s1", userEmail="uploader@example.org")

    resp = await client.post("/users/register", json={"email": "uploader@example.org", "name": "Up", "password": "pw"})
    assert resp.status_code == 201

    async with AsyncSessionLocal() as session:
        users = (await session.execute(select(User).where(User.email == "uploader@example.org"))).scalars().all()
    assert len(users) == 1
    assert users[0].name == "Up"


async def test_volunteer_list_is_admin_only(client, make_admin):
    await make_admin("mod@example.org")
    await client.post("/users/register", json={"email": "vol@example.org", "password": "pw"})

    assert (await client.get("/admin/users")).status_code == 403
    resp = await client.get("/admin/users", headers={"x-admin-email": "mod@example.org"})
    assert [u["email"] for u in resp.json()] == ["vol@example.org"]
