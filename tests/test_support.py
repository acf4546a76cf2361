import csv
import io
import uuid
import pytest
from unittest.mock import patch

from conftest import register


async def _send(client, headers, subject="Payment question", message="I paid yesterday but it still shows pending."):
    return await client.post(
        "/api/support/messages",
        json={"subject": subject, "message": message},
        headers=headers,
    )


@pytest.mark.asyncio
async def test_send_and_list_own_messages(client, user_auth):
    headers, user = user_auth

    res = await _send(client, headers, subject="  First question  ")
    assert res.status_code == 201
    assert res.json()["subject"] == "First question"
    assert res.json()["status"] == "open"

    await _send(client, headers, subject="Second question")
    other_headers, _ = await register(client)
    await _send(client, other_headers, subject="Not mine")

    res = await client.get("/api/support/messages", headers=headers)
    assert [m["subject"] for m in res.json()] == ["Second question", "First question"]


@pytest.mark.asyncio
@pytest.mark.parametrize("subject, message", [
    ("Hi", "This message is long enough."),
    ("Valid subject", "too short"),
    ("Valid subject", "x" * 2001),
    ("   ", "This message is long enough."),
])
async def test_message_validation(client, user_auth, subject, message):
    headers, _ = user_auth
    res = await _send(client, headers, subject=subject, message=message)
    assert res.status_code == 422


@pytest.mark.asyncio
async def test_sending_logs_user_activity(client, user_auth, admin_auth):
    headers, user = user_auth
    admin_headers, _ = admin_auth
    await _send(client, headers)

    activity = (await client.get("/api/admin/activity", headers=admin_headers)).json()
    assert activity[0]["action_type"] == "user_message_sent"
    assert activity[0]["admin_email"] == user["email"]


@pytest.mark.asyncio
async def test_admin_respond_flow(client, user_auth, admin_auth):
    headers, user = user_auth
    admin_headers, _ = admin_auth
    msg = (await _send(client, headers, subject="Where is my letter")).json()

    with patch("app.api.endpoints.admin_messages.send_support_response_email") as send:
        res = await client.post(
            f"/api/admin/messages/{msg['id']}/respond",
            json={"admin_response": "It has been sent.", "status": "resolved"},
            headers=admin_headers,
        )
    assert res.status_code == 200
    assert res.json()["status"] == "resolved"
    assert res.json()["admin_response"] == "It has been sent."

    send.assert_called_once()
    email = send.call_args[0][0]
    assert email["email"] == user["email"]
    assert email["message_subject"] == "Where is my letter"

    history = (await client.get("/api/notifications", headers=headers)).json()
    assert history[0]["notification_type"] == "admin_response"
    assert history[0]["metadata"]["message_id"] == msg["id"]

    activity = (await client.get("/api/admin/activity", headers=admin_headers)).json()
    assert activity[0]["action_type"] == "message_response"
    assert activity[0]["details"] == 'Responded to message: "Where is my letter" (status: open → resolved)'


@pytest.mark.asyncio
async def test_respond_defaults_to_closed_and_skips_email_when_disabled(client, user_auth, admin_auth):
    headers, _ = user_auth
    admin_headers, _ = admin_auth
    msg = (await _send(client, headers)).json()

    await client.put("/api/notifications/preferences", json={"email_admin_response": False}, headers=headers)

    with patch("app.api.endpoints.admin_messages.send_support_response_email") as send:
        res = await client.post(
            f"/api/admin/messages/{msg['id']}/respond",
            json={"admin_response": "Done."},
            headers=admin_headers,
        )
    assert res.json()["status"] == "closed"
    send.assert_not_called()


@pytest.mark.asyncio
async def test_respond_unknown_message(client, admin_auth):
    admin_headers, _ = admin_auth
    res = await client.post(
        f"/api/admin/messages/{uuid.uuid4()}/respond",
        json={"admin_response": "Hello"},
        headers=admin_headers,
    )
    assert res.status_code == 404


@pytest.mark.asyncio
async def test_admin_search_and_status_filter(client, user_auth, admin_auth):
    headers, _ = user_auth
    admin_headers, _ = admin_auth
    await _send(client, headers, subject="Refund please", message="I want my refund processed soon.")
    await _send(client, headers, subject="Posting letter", message="When will my letter be ready?")

    res = await client.get("/api/admin/messages", params={"search": "REFUND"}, headers=admin_headers)
    assert [m["subject"] for m in res.json()] == ["Refund please"]

    res = await client.get("/api/admin/messages", params={"status": "closed"}, headers=admin_headers)
    assert res.json() == []

    res = await client.get("/api/admin/messages", params={"status": "open"}, headers=admin_headers)
    assert len(res.json()) == 2


@pytest.mark.asyncio
async def test_export_messages_marks_unanswered(client, user_auth, admin_auth):
    headers, _ = user_auth
    admin_headers, _ = admin_auth
    await _send(client, headers)

    res = await client.get("/api/admin/messages/export", headers=admin_headers)
    assert res.status_code == 200

    rows = list(csv.DictReader(io.StringIO(res.content.decode("utf-8-sig"))))
    assert rows[0]["Admin Response"] == "No response yet"
    assert rows[0]["Status"] == "open"
