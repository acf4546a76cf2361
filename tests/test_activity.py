import pytest
from unittest.mock import patch

from app.core.database import AsyncSessionLocal
from app.models.enums import ActivityAction, EntityType
from app.schemas.activity import format_action_label
from app.services.activity_service import log_activity, list_activity


def test_action_label():
    assert format_action_label("bulk_payment_verify") == "Bulk Payment Verify"
    assert format_action_label("status_change") == "Status Change"


@pytest.mark.asyncio
async def test_log_and_list_newest_first(session):
    for i in range(3):
        await log_activity(ActivityAction.StatusChange, EntityType.Submission, f"entry {i}")

    entries = await list_activity(session, limit=2)
    assert [e.details for e in entries] == ["entry 2", "entry 1"]
    assert entries[0].action_type == "status_change"


@pytest.mark.asyncio
async def test_log_failure_is_swallowed():
    class BrokenSession:
        async def __aenter__(self):
            return self

        async def __aexit__(self, *exc):
            return False

        def add(self, _):
            pass

        async def commit(self):
            raise RuntimeError("database is down")

        async def rollback(self):
            pass

    with patch("app.services.activity_service.AsyncSessionLocal", return_value=BrokenSession()):
        await log_activity(ActivityAction.BulkReject, EntityType.BulkAction, "should not raise")

    async with AsyncSessionLocal() as s:
        assert await list_activity(s) == []


@pytest.mark.asyncio
async def test_activity_limit_bounds(client, admin_auth):
    admin_headers, _ = admin_auth
    assert (await client.get("/api/admin/activity", params={"limit": 0}, headers=admin_headers)).status_code == 422
    assert (await client.get("/api/admin/activity", params={"limit": 501}, headers=admin_headers)).status_code == 422
    assert (await client.get("/api/admin/activity", params={"limit": 500}, headers=admin_headers)).status_code == 200
