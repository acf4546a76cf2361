import pytest
from conftest import register, make_admin, random_str


@pytest.mark.asyncio
async def test_register_login_me(client):
    email = f"{random_str('ada')}@test.com"
    headers, user = await register(client, full_name="Ada Okafor", email=email)
    assert user["role"] == "user"
    assert user["email"] == email

    res = await client.post("/api/auth/login", json={"email": email, "password": "password123"})
    assert res.status_code == 200
    body = res.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["full_name"] == "Ada Okafor"

    res = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert res.status_code == 200
    assert res.json()["email"] == email


@pytest.mark.asyncio
async def test_register_duplicate_email_rejected(client):
    email = f"{random_str('dup')}@test.com"
    await register(client, email=email)

    res = await client.post("/api/auth/register", json={
        "full_name": "Someone Else",
        "email": email.upper(),
        "password": "password123",
        "confirm_password": "password123",
    })
    assert res.status_code == 400


@pytest.mark.asyncio
async def test_register_password_mismatch(client):
    res = await client.post("/api/auth/register", json={
        "full_name": "Mismatch",
        "email": f"{random_str()}@test.com",
        "password": "password123",
        "confirm_password": "password124",
    })
    assert res.status_code == 422


@pytest.mark.asyncio
async def test_login_wrong_password(client):
    email = f"{random_str()}@test.com"
    await register(client, email=email)

    res = await client.post("/api/auth/login", json={"email": email, "password": "nope-nope"})
    assert res.status_code == 401


@pytest.mark.asyncio
async def test_bad_token_rejected(client):
    res = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401


@pytest.mark.asyncio
async def test_admin_routes_forbidden_for_users(client, user_auth):
    headers, _ = user_auth
    for path in ("/api/admin/users", "/api/admin/submissions", "/api/admin/dashboard", "/api/admin/activity"):
        res = await client.get(path, headers=headers)
        assert res.status_code == 403, path


@pytest.mark.asyncio
async def test_admin_user_search(client):
    admin_headers, _ = await make_admin(email="boss@test.com")
    await register(client, full_name="Chidi Eze", email="chidi@test.com")
    await register(client, full_name="Bola Ade", email="bola@test.com")

    res = await client.get("/api/admin/users", headers=admin_headers)
    assert res.status_code == 200
    assert len(res.json()) == 3

    res = await client.get("/api/admin/users", params={"search": "chidi"}, headers=admin_headers)
    assert [u["email"] for u in res.json()] == ["chidi@test.com"]

    res = await client.get("/api/admin/users", params={"search": "admin"}, headers=admin_headers)
    assert [u["email"] for u in res.json()] == ["boss@test.com"]
