import pytest
from conftest import register, random_str


@pytest.mark.asyncio
async def test_change_password(client):
    email = f"{random_str('pwd')}@test.com"

    # 1. Register
    headers, _ = await register(client, full_name="Pwd Changer", email=email, password="oldpassword123")

    # 2. Change Password
    change_payload = {
        "old_password": "oldpassword123",
        "new_password": "newpassword456"
    }
    res = await client.post("/api/account/change-password", json=change_payload, headers=headers)
    assert res.status_code == 200
    assert res.json()["detail"] == "Password changed successfully"

    # 3. Verify Old Password Fails
    res_fail = await client.post("/api/auth/login", json={"email": email, "password": "oldpassword123"})
    assert res_fail.status_code == 401

    # 4. Verify New Password Works
    res_success = await client.post("/api/auth/login", json={"email": email, "password": "newpassword456"})
    assert res_success.status_code == 200


@pytest.mark.asyncio
async def test_change_password_rejects_wrong_old_password(client, user_auth):
    headers, _ = user_auth
    res = await client.post(
        "/api/account/change-password",
        json={"old_password": "wrong-password", "new_password": "newpassword456"},
        headers=headers,
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "Old password incorrect"


@pytest.mark.asyncio
async def test_change_password_must_differ(client, user_auth):
    headers, _ = user_auth
    res = await client.post(
        "/api/account/change-password",
        json={"old_password": "password123", "new_password": "password123"},
        headers=headers,
    )
    assert res.status_code == 400
    assert res.json()["detail"] == "New password must be different"
