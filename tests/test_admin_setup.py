import pytest

from conftest import register, make_admin


@pytest.mark.asyncio
async def test_first_user_can_claim_admin(client):
    headers, _ = await register(client)

    res = await client.get("/api/admin/setup/status", headers=headers)
    assert res.json() == {"has_admins": False, "is_admin": False}

    res = await client.post("/api/admin/setup/claim", headers=headers)
    assert res.status_code == 200
    assert res.json()["role"] == "admin"

    res = await client.get("/api/admin/setup/status", headers=headers)
    assert res.json() == {"has_admins": True, "is_admin": True}

    # now an admin, the admin routes open up
    res = await client.get("/api/admin/users", headers=headers)
    assert res.status_code == 200


@pytest.mark.asyncio
async def test_claim_refused_once_admin_exists(client):
    await make_admin()
    headers, _ = await register(client)

    res = await client.post("/api/admin/setup/claim", headers=headers)
    assert res.status_code == 403

    res = await client.get("/api/admin/setup/status", headers=headers)
    assert res.json() == {"has_admins": True, "is_admin": False}


@pytest.mark.asyncio
async def test_existing_admin_claim_is_noop(client, admin_auth):
    admin_headers, _ = admin_auth
    res = await client.post("/api/admin/setup/claim", headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["role"] == "admin"
